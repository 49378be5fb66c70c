"""SQLAlchemy engine and session factory."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def make_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """Create the engine, make sure the tables exist, return a session factory."""
    # Import models so they register in Base.metadata before create_all.
    from storefront.infrastructure.persistence.sql import tables  # noqa: F401

    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    engine = create_engine(database_url, echo=echo, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on the way back; everything is stored as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
