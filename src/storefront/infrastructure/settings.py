"""Runtime configuration read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

STORAGE_BACKENDS = ("json", "sql")


@dataclass(frozen=True)
class Settings:

    storage: str
    data_dir: Path
    database_url: str
    log_level: str
    log_json: bool


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    storage = os.getenv("STOREFRONT_STORAGE", "json").strip().lower()
    if storage not in STORAGE_BACKENDS:
        raise ValueError(
            f"STOREFRONT_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {storage!r}"
        )

    data_dir = Path(os.getenv("STOREFRONT_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    database_url = os.getenv(
        "STOREFRONT_DATABASE_URL", f"sqlite:///{data_dir / 'storefront.db'}"
    )

    return Settings(
        storage=storage,
        data_dir=data_dir,
        database_url=database_url,
        log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO").upper(),
        log_json=_env_flag("STOREFRONT_LOG_JSON"),
    )
