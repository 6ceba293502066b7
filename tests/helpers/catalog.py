"""Builders and fakes for catalog ingest tests."""

from __future__ import annotations

from collections.abc import Sequence  # noqa: TC003
from dataclasses import dataclass, field

from encore.domain.model import AcousticFeatures, CatalogRelease, CatalogTrack, ReleaseType


def make_release(
    release_id: str = "album-1",
    name: str = "First Record",
    *,
    release_type: ReleaseType = ReleaseType.ALBUM,
    release_group: ReleaseType | None = ReleaseType.ALBUM,
) -> CatalogRelease:
    return CatalogRelease(
        id=release_id,
        name=name,
        release_type=release_type,
        release_group=release_group,
        artist_ids=("artist-spotify-id",),
        release_date="2020-01-01",
        artwork_url=f"https://img.example/{release_id}.jpg",
        total_tracks=3,
    )


def make_track(
    track_id: str,
    name: str | None = None,
    *,
    release: CatalogRelease | None = None,
    isrc: str | None = None,
    popularity: int = 50,
    artist: str = "Test Artist",
    track_number: int = 1,
) -> CatalogTrack:
    active_release = release or make_release()
    return CatalogTrack(
        id=track_id,
        name=name or f"Song {track_id}",
        release_id=active_release.id,
        release_name=active_release.name,
        artist_names=(artist,),
        track_number=track_number,
        duration_ms=180_000,
        popularity=popularity,
        uri=f"spotify:track:{track_id}",
        external_url=f"https://open.spotify.com/track/{track_id}",
        isrc=isrc,
        is_playable=True,
        artwork_url=active_release.artwork_url,
        release_date=active_release.release_date,
    )


def make_features(track_id: str, liveness: float = 0.1) -> AcousticFeatures:
    return AcousticFeatures(track_id=track_id, liveness=liveness, energy=0.5, tempo=120.0)


def make_album_tracks(release: CatalogRelease, count: int = 3) -> list[CatalogTrack]:
    return [
        make_track(
            f"{release.id}-t{number}",
            f"{release.name} Song {number}",
            release=release,
            isrc=f"ISRC-{release.id}-{number}",
            track_number=number,
        )
        for number in range(1, count + 1)
    ]


class FakeCatalogSource:
    """In-memory ``CatalogSource`` with switchable failures."""

    def __init__(
        self,
        *,
        releases: Sequence[CatalogRelease] = (),
        tracks_by_release: dict[str, list[CatalogTrack]] | None = None,
        details: Sequence[CatalogTrack] | None = None,
        features: Sequence[AcousticFeatures] = (),
        failing_releases: Sequence[str] = (),
        fail_on: str | None = None,
    ) -> None:
        self._releases = list(releases)
        self._tracks_by_release = tracks_by_release or {}
        all_tracks = details
        if all_tracks is None:
            all_tracks = [track for tracks in self._tracks_by_release.values() for track in tracks]
        self._details = {track.id: track for track in all_tracks}
        self._features = {feature.track_id: feature for feature in features}
        self._failing_releases = set(failing_releases)
        self._fail_on = fail_on
        self.calls: list[str] = []
        self.requested_track_ids: list[str] = []

    def _maybe_fail(self, operation: str) -> None:
        self.calls.append(operation)
        if self._fail_on == operation:
            raise RuntimeError(f"{operation} unavailable")

    async def list_releases(self, artist_id: str) -> list[CatalogRelease]:
        del artist_id
        self._maybe_fail("list_releases")
        return list(self._releases)

    async def list_release_tracks(self, release: CatalogRelease) -> list[CatalogTrack]:
        self._maybe_fail("list_release_tracks")
        if release.id in self._failing_releases:
            raise RuntimeError(f"tracks unavailable for {release.id}")
        return list(self._tracks_by_release.get(release.id, []))

    async def get_tracks(self, track_ids: Sequence[str]) -> list[CatalogTrack]:
        self._maybe_fail("get_tracks")
        self.requested_track_ids = list(track_ids)
        return [self._details[track_id] for track_id in track_ids if track_id in self._details]

    async def get_audio_features(self, track_ids: Sequence[str]) -> list[AcousticFeatures]:
        self._maybe_fail("get_audio_features")
        return [self._features[track_id] for track_id in track_ids if track_id in self._features]


@dataclass(slots=True)
class RecordingReporter:
    events: list[tuple[str, int, str]] = field(default_factory=list[tuple[str, int, str]])
    errors: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])

    def report(self, stage: str, progress: int, message: str) -> None:
        self.events.append((stage, progress, message))

    def report_error(self, error: BaseException, stage: str) -> None:
        self.errors.append((stage, str(error)))

    @property
    def percents(self) -> list[int]:
        return [progress for _, progress, _ in self.events]
