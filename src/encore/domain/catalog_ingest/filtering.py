"""Studio-vs-live classification for releases and tracks.

Two signals are used. The upstream liveness score is the stronger one but is
frequently missing, so the name patterns are always applied as a fallback:
a track without features is never accepted without the name check.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from encore.config.ingest import DEFAULT_LIVENESS_THRESHOLD

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from encore.domain.model import AcousticFeatures, CatalogRelease, CatalogTrack

    from .result import IngestResult

log = logging.getLogger(__name__)

LIVE_TRACK_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\b(live|concert|acoustic|unplugged|session)\b", re.IGNORECASE),
    re.compile(r"\b(live at|live from|live in|live on)\b", re.IGNORECASE),
    re.compile(r"\b(acoustic version|live version|concert version)\b", re.IGNORECASE),
    re.compile(r"\(live\)", re.IGNORECASE),
    re.compile(r"\[live\]", re.IGNORECASE),
    re.compile(r"- live$", re.IGNORECASE),
    re.compile(r"\bmtv unplugged\b", re.IGNORECASE),
)

LIVE_RELEASE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\b(live|concert|acoustic|unplugged|sessions?|tour)\b", re.IGNORECASE),
    re.compile(r"\b(live at|live from|live in|live on)\b", re.IGNORECASE),
    re.compile(r"\b(acoustic album|live album|concert album)\b", re.IGNORECASE),
    re.compile(r"\(live\)", re.IGNORECASE),
    re.compile(r"\[live\]", re.IGNORECASE),
    re.compile(r"- live$", re.IGNORECASE),
)

# Applied on top of the release patterns to compilations the artist only appears on.
LIVE_COMPILATION_PATTERN: Final[re.Pattern[str]] = re.compile(r"\b(live|concert)\b", re.IGNORECASE)


def _matches_any(name: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    return any(pattern.search(name) for pattern in patterns)


def is_live_title(name: str) -> bool:
    return _matches_any(name, LIVE_TRACK_PATTERNS)


def is_live_release_name(name: str) -> bool:
    return _matches_any(name, LIVE_RELEASE_PATTERNS)


def is_studio_release(release: CatalogRelease) -> bool:
    """Cheap pre-filter run before any track listing; not authoritative for tracks."""

    if is_live_release_name(release.name):
        return False
    return not (
        release.is_appears_on_compilation and LIVE_COMPILATION_PATTERN.search(release.name)
    )


def filter_studio_releases(
    releases: Iterable[CatalogRelease],
    result: IngestResult,
) -> list[CatalogRelease]:
    studio: list[CatalogRelease] = []
    for release in releases:
        if is_studio_release(release):
            studio.append(release)
        else:
            result.live_albums_filtered += 1
            log.debug("Skipping live release %s (%s)", release.name, release.id)
    return studio


def filter_studio_tracks(
    tracks: Iterable[CatalogTrack],
    features_by_id: Mapping[str, AcousticFeatures],
    result: IngestResult,
    *,
    liveness_threshold: float = DEFAULT_LIVENESS_THRESHOLD,
) -> list[CatalogTrack]:
    """Keep studio tracks, counting every rejection by the reason it was made."""

    studio: list[CatalogTrack] = []
    total = 0
    for track in tracks:
        total += 1
        result.tracks_processed += 1

        features = features_by_id.get(track.id)
        if features is not None and features.liveness > liveness_threshold:
            result.live_features_filtered += 1
            log.debug(
                "Filtered live track by audio features: %s (liveness: %s)",
                track.name,
                features.liveness,
            )
            continue

        if is_live_title(track.name):
            result.live_name_filtered += 1
            log.debug("Filtered live track by name: %s", track.name)
            continue

        studio.append(track)

    log.info(
        "Studio filtering: %s studio tracks from %s total (%s/%s had audio features)",
        len(studio),
        total,
        len(features_by_id),
        total,
    )
    return studio
