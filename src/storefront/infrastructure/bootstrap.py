"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.sql.database import make_session_factory
from storefront.infrastructure.persistence.sql.sql_cart_repository import (
    SqlCartRepository,
)
from storefront.infrastructure.persistence.sql.sql_order_repository import (
    SqlOrderRepository,
)
from storefront.infrastructure.persistence.sql.sql_product_repository import (
    SqlProductRepository,
)
from storefront.infrastructure.settings import Settings, load_settings


@lru_cache(maxsize=None)
def _session_factory(database_url: str) -> sessionmaker:
    return make_session_factory(database_url)


def _settings(settings: Settings | None) -> Settings:
    return settings if settings is not None else load_settings()


def _sql(settings: Settings) -> sessionmaker:
    # The default SQLite file lives in the data directory.
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return _session_factory(settings.database_url)


def product_repository(settings: Settings | None = None) -> ProductRepository:
    settings = _settings(settings)
    if settings.storage == "sql":
        return SqlProductRepository(_sql(settings))
    return JsonProductRepository(settings.data_dir / "products.json")


def cart_repository(settings: Settings | None = None) -> CartRepository:
    settings = _settings(settings)
    if settings.storage == "sql":
        return SqlCartRepository(_sql(settings))
    return JsonCartRepository(settings.data_dir / "carts.json")


def order_repository(settings: Settings | None = None) -> OrderRepository:
    settings = _settings(settings)
    if settings.storage == "sql":
        return SqlOrderRepository(_sql(settings))
    return JsonOrderRepository(settings.data_dir / "orders.json")
