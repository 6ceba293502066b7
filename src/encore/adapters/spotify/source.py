"""Spotify implementation of the catalog source port."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .translator import translate_audio_features, translate_release, translate_track

if TYPE_CHECKING:
    from collections.abc import Sequence

    from encore.domain.model import AcousticFeatures, CatalogRelease, CatalogTrack

    from .client import SpotifyCatalogClient


class SpotifyCatalogSource:
    """Adapts ``SpotifyCatalogClient`` payloads to the ``CatalogSource`` port."""

    def __init__(self, client: SpotifyCatalogClient) -> None:
        self._client = client

    async def list_releases(self, artist_id: str) -> list[CatalogRelease]:
        albums = await self._client.list_artist_albums(artist_id)
        return [translate_release(album) for album in albums]

    async def list_release_tracks(self, release: CatalogRelease) -> list[CatalogTrack]:
        tracks = await self._client.list_album_tracks(release.id)
        return [translate_track(track, release=release) for track in tracks]

    async def get_tracks(self, track_ids: Sequence[str]) -> list[CatalogTrack]:
        tracks = await self._client.get_tracks(track_ids)
        return [translate_track(track) for track in tracks]

    async def get_audio_features(self, track_ids: Sequence[str]) -> list[AcousticFeatures]:
        features = await self._client.get_audio_features(track_ids)
        return [translate_audio_features(item) for item in features]
