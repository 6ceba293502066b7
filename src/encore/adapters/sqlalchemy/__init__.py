"""SQLAlchemy adapter package for the catalog store."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyArtistRepository,
    SqlAlchemyArtistSongRepository,
    SqlAlchemyIngestJobRepository,
    SqlAlchemySongRepository,
)
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyArtistRepository",
    "SqlAlchemyArtistSongRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyIngestJobRepository",
    "SqlAlchemySongRepository",
    "StartupError",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
