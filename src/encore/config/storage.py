"""Where the catalog database and the HTTP cache live on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "ENCORE_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
CATALOG_DB_FILENAME: Final[str] = "encore.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def ensure_data_dir(self) -> Path:
        data_dir = self.data_dir.expanduser().resolve()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def catalog_db_path(self) -> Path:
        return self.ensure_data_dir() / CATALOG_DB_FILENAME

    def http_cache_path(self) -> Path:
        return self.ensure_data_dir() / HTTP_CACHE_FILENAME


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    """Use ``ENCORE_DATA_DIR`` or ``$XDG_DATA_HOME/encore`` (``~/.local/share/encore``)."""

    override = os.getenv(DATA_DIR_ENV)
    if override:
        return StorageConfig(data_dir=Path(override))
    xdg_home = os.getenv("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=base / "encore")


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = os.getenv(DATABASE_URI_ENV)
    if uri:
        return DatabaseConfig(uri=uri)
    db_path = (storage or get_storage_config()).catalog_db_path()
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{db_path}")
