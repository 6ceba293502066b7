"""Ports for fetching catalog data from an external provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from encore.domain.model import AcousticFeatures, CatalogRelease, CatalogTrack


@runtime_checkable
class CatalogSource(Protocol):
    """Async port over an upstream music catalog.

    Pagination, authentication and retries are the adapter's concern; callers
    only see complete, typed lists.
    """

    async def list_releases(self, artist_id: str) -> list[CatalogRelease]: ...

    async def list_release_tracks(self, release: CatalogRelease) -> list[CatalogTrack]: ...

    async def get_tracks(self, track_ids: Sequence[str]) -> list[CatalogTrack]: ...

    async def get_audio_features(self, track_ids: Sequence[str]) -> list[AcousticFeatures]: ...


__all__ = ["CatalogSource"]
