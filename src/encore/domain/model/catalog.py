"""Transient catalog entities fetched from the upstream catalog during one run.

None of these are persisted as-is; the upsert writer turns surviving
``CatalogTrack`` values into ``Song`` rows.
"""

from __future__ import annotations

from dataclasses import dataclass

from encore.domain.model.enums import ReleaseType


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogRelease:
    id: str
    name: str
    release_type: ReleaseType = ReleaseType.ALBUM
    release_group: ReleaseType | None = None
    artist_ids: tuple[str, ...] = ()
    release_date: str | None = None
    artwork_url: str | None = None
    total_tracks: int | None = None

    @property
    def is_appears_on_compilation(self) -> bool:
        return (
            self.release_type is ReleaseType.COMPILATION
            and self.release_group is ReleaseType.APPEARS_ON
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogTrack:
    id: str
    name: str
    release_id: str | None = None
    release_name: str | None = None
    artist_names: tuple[str, ...] = ()
    track_number: int | None = None
    disc_number: int = 1
    duration_ms: int | None = None
    explicit: bool = False
    popularity: int = 0
    preview_url: str | None = None
    uri: str | None = None
    external_url: str | None = None
    isrc: str | None = None
    is_playable: bool | None = None
    artwork_url: str | None = None
    release_date: str | None = None

    @property
    def primary_artist_name(self) -> str:
        return self.artist_names[0] if self.artist_names else "Unknown"


@dataclass(frozen=True, slots=True, kw_only=True)
class AcousticFeatures:
    track_id: str
    liveness: float
    acousticness: float | None = None
    danceability: float | None = None
    energy: float | None = None
    instrumentalness: float | None = None
    loudness: float | None = None
    speechiness: float | None = None
    valence: float | None = None
    tempo: float | None = None
    key: int | None = None
    mode: int | None = None
    time_signature: int | None = None
    duration_ms: int | None = None
