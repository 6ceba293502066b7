"""Domain ports (protocols implemented by adapters)."""

from __future__ import annotations

from .fetching import CatalogSource
from .persistence import (
    ArtistRepository,
    ArtistSongRepository,
    IngestJobRepository,
    Repository,
    SongRepository,
)
from .unit_of_work import CatalogRepositories, CatalogUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "ArtistRepository",
    "ArtistSongRepository",
    "CatalogRepositories",
    "CatalogSource",
    "CatalogUnitOfWork",
    "IngestJobRepository",
    "Repository",
    "RepositoryCollection",
    "SongRepository",
    "UnitOfWork",
]
