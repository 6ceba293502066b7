"""ISRC-based deduplication of studio tracks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from encore.domain.model import CatalogTrack

    from .result import IngestResult

log = logging.getLogger(__name__)


def deduplicate_by_isrc(
    tracks: Iterable[CatalogTrack],
    result: IngestResult,
) -> list[CatalogTrack]:
    """Collapse tracks sharing an ISRC, keeping the most popular one.

    Ties keep the first track encountered, so the outcome depends on input
    order. Tracks without an ISRC are never compared and are appended after
    the deduplicated ones.
    """

    by_isrc: dict[str, CatalogTrack] = {}
    without_isrc: list[CatalogTrack] = []
    seen = 0

    for track in tracks:
        seen += 1
        if not track.isrc:
            without_isrc.append(track)
            continue

        existing = by_isrc.get(track.isrc)
        if existing is None:
            by_isrc[track.isrc] = track
            continue

        if track.popularity > existing.popularity:
            log.debug(
                'ISRC dedup: replacing "%s" (pop: %s) with "%s" (pop: %s)',
                existing.name,
                existing.popularity,
                track.name,
                track.popularity,
            )
            by_isrc[track.isrc] = track
        else:
            log.debug(
                'ISRC dedup: keeping "%s" (pop: %s) over "%s" (pop: %s)',
                existing.name,
                existing.popularity,
                track.name,
                track.popularity,
            )
        result.duplicates_filtered += 1

    deduplicated = [*by_isrc.values(), *without_isrc]
    log.info(
        "ISRC deduplication: %s unique tracks from %s (%s duplicates removed)",
        len(deduplicated),
        seen,
        result.duplicates_filtered,
    )
    return deduplicated
