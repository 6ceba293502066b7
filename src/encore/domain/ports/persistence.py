"""Ports for persisting catalog entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from encore.domain.model import Artist, IngestJob, Song


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ArtistRepository(Repository["Artist"], Protocol):
    def get(self, artist_id: UUID) -> Artist | None: ...

    def get_by_spotify_id(self, spotify_id: str) -> Artist | None: ...


@runtime_checkable
class SongRepository(Protocol):
    """Songs are written by upsert only; the store resolves conflicts on ``spotify_id``."""

    def upsert(self, song: Song) -> UUID: ...

    def get_by_spotify_id(self, spotify_id: str) -> Song | None: ...

    def list_for_artist(self, artist_id: UUID) -> list[Song]: ...


@runtime_checkable
class ArtistSongRepository(Protocol):
    def link(self, artist_id: UUID, song_id: UUID, *, is_primary_artist: bool = True) -> bool:
        """Ensure the link exists; return whether a new row was created."""
        ...

    def count_for_artist(self, artist_id: UUID) -> int: ...


@runtime_checkable
class IngestJobRepository(Repository["IngestJob"], Protocol):
    def get(self, job_id: UUID) -> IngestJob | None: ...

    def next_queued(self) -> IngestJob | None: ...
