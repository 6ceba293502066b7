"""Dry-run sampling of the studio filter against a live catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from encore.config.ingest import DEFAULT_LIVENESS_THRESHOLD

from .filtering import filter_studio_tracks
from .result import IngestResult

if TYPE_CHECKING:
    from encore.domain.model import CatalogTrack
    from encore.domain.ports.fetching import CatalogSource

TRACKS_PER_RELEASE = 10


@dataclass(frozen=True, slots=True)
class StudioFilterSample:
    total_tracks: int
    studio_tracks: int
    live_features_filtered: int
    live_name_filtered: int

    @property
    def live_tracks_filtered(self) -> int:
        return self.live_features_filtered + self.live_name_filtered

    @property
    def live_share(self) -> float:
        if self.total_tracks == 0:
            return 0.0
        return self.live_tracks_filtered / self.total_tracks


async def sample_studio_filter(
    source: CatalogSource,
    spotify_id: str,
    *,
    limit: int = 50,
    liveness_threshold: float = DEFAULT_LIVENESS_THRESHOLD,
) -> StudioFilterSample:
    """Run the track filter over roughly ``limit`` tracks without writing anything.

    Releases are not pre-filtered so the sample shows how much the track-level
    filter catches on its own.
    """

    releases = await source.list_releases(spotify_id)
    sample_releases = releases[: math.ceil(limit / TRACKS_PER_RELEASE)]

    tracks: list[CatalogTrack] = []
    for release in sample_releases:
        release_tracks = await source.list_release_tracks(release)
        tracks.extend(release_tracks[:TRACKS_PER_RELEASE])
    track_ids = [track.id for track in tracks[:limit]]

    detailed = await source.get_tracks(track_ids)
    features = await source.get_audio_features(track_ids)
    features_by_id = {feature.track_id: feature for feature in features}

    counters = IngestResult()
    studio = filter_studio_tracks(
        detailed,
        features_by_id,
        counters,
        liveness_threshold=liveness_threshold,
    )
    return StudioFilterSample(
        total_tracks=len(detailed),
        studio_tracks=len(studio),
        live_features_filtered=counters.live_features_filtered,
        live_name_filtered=counters.live_name_filtered,
    )
