"""Studio-only catalog ingest for one artist.

Stages run strictly in order: list releases, drop live releases, list tracks
per release (bounded fan-out), fetch details and audio features, filter live
tracks, deduplicate by ISRC, upsert. Per-item failures are collected in the
``IngestResult``; anything else is recorded as ``fatal_error``, pushed to the
reporter's error channel and re-raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from encore.config.ingest import IngestSettings
from encore.domain.model import IngestStage

from .concurrency import process_batch
from .deduplication import deduplicate_by_isrc
from .filtering import filter_studio_releases, filter_studio_tracks
from .progress import MonotonicProgress
from .result import IngestErrorType, IngestResult
from .writer import UpsertWriter

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from encore.domain.model import CatalogRelease, CatalogTrack
    from encore.domain.ports.fetching import CatalogSource
    from encore.domain.ports.unit_of_work import CatalogUnitOfWork

    from .progress import ProgressReporter

log = logging.getLogger(__name__)

STAGE = IngestStage.IMPORTING_SONGS


@dataclass(frozen=True, slots=True)
class IngestRequest:
    artist_id: UUID
    spotify_id: str
    concurrency: int | None = None


@dataclass(slots=True)
class CatalogIngestService:
    source: CatalogSource
    unit_of_work_factory: Callable[[], CatalogUnitOfWork]
    settings: IngestSettings = field(default_factory=IngestSettings)
    reporter: ProgressReporter | None = None

    async def ingest(
        self,
        request: IngestRequest,
        *,
        reporter: ProgressReporter | None = None,
        result: IngestResult | None = None,
    ) -> IngestResult:
        """Ingest the studio catalog of ``request.spotify_id`` for ``request.artist_id``.

        Pass ``result`` to keep a handle on the counters when the run raises.
        """

        result = result if result is not None else IngestResult()
        progress = MonotonicProgress(reporter or self.reporter)
        concurrency = request.concurrency or self.settings.concurrency

        try:
            progress.report(STAGE, 5, "Fetching Spotify albums...")
            releases = await self.source.list_releases(request.spotify_id)
            log.info("Found %s albums for artist %s", len(releases), request.artist_id)

            if not releases:
                progress.report(STAGE, 100, "No albums found for this artist")
                return result

            if self.settings.prefilter_releases:
                studio_releases = filter_studio_releases(releases, result)
            else:
                studio_releases = list(releases)
            log.info(
                "Filtered to %s studio albums (removed %s live albums)",
                len(studio_releases),
                result.live_albums_filtered,
            )
            progress.report(STAGE, 15, f"Processing {len(studio_releases)} studio albums...")

            tracks = await self._collect_tracks(studio_releases, result, progress, concurrency)
            tracks = self._apply_track_cap(tracks, result)
            track_ids = [track.id for track in tracks]

            progress.report(STAGE, 40, "Getting detailed track information...")
            detailed = await self.source.get_tracks(track_ids)
            log.info("Retrieved details for %s tracks", len(detailed))

            progress.report(STAGE, 55, "Getting audio features for liveness filtering...")
            features = await self.source.get_audio_features(track_ids)
            features_by_id = {feature.track_id: feature for feature in features}
            log.info("Retrieved audio features for %s tracks", len(features_by_id))

            progress.report(STAGE, 70, "Filtering studio tracks and deduplicating...")
            studio_tracks = filter_studio_tracks(
                detailed,
                features_by_id,
                result,
                liveness_threshold=self.settings.liveness_threshold,
            )
            if self.settings.sort_by_id:
                studio_tracks.sort(key=lambda track: track.id)
            survivors = deduplicate_by_isrc(studio_tracks, result)

            progress.report(STAGE, 80, f"Ingesting {len(survivors)} studio tracks...")
            await self._write_tracks(survivors, request.artist_id, result, progress, concurrency)

            progress.report(
                STAGE,
                100,
                f"Catalog completed: {result.studio_tracks_ingested} studio tracks ingested "
                f"({len(result.errors)} errors)",
            )
        except Exception as exc:
            log.exception("Fatal error ingesting catalog for artist %s", request.artist_id)
            result.add_error(IngestErrorType.FATAL_ERROR, str(exc))
            progress.report_error(exc, STAGE)
            raise

        return result

    async def _collect_tracks(
        self,
        releases: list[CatalogRelease],
        result: IngestResult,
        progress: MonotonicProgress,
        concurrency: int,
    ) -> list[CatalogTrack]:
        collected: list[CatalogTrack] = []

        async def fetch(release: CatalogRelease) -> list[CatalogTrack]:
            tracks = await self.source.list_release_tracks(release)
            collected.extend(tracks)
            result.albums_processed += 1
            return tracks

        def on_progress(completed: int, total: int) -> None:
            progress.report(
                STAGE,
                min(35, 15 + (completed * 20) // total),
                f"Collected tracks from {completed}/{total} albums "
                f"({len(collected)} total tracks)",
            )

        def on_error(exc: Exception, release: CatalogRelease) -> None:
            log.warning(
                "Failed to list tracks for album %s (%s): %s", release.name, release.id, exc
            )
            result.add_error(
                IngestErrorType.ALBUM_TRACKS_FETCH,
                str(exc),
                {"album_id": release.id, "name": release.name},
            )

        await process_batch(
            releases,
            fetch,
            concurrency=concurrency,
            on_progress=on_progress,
            on_error=on_error,
        )
        log.info("Collected %s tracks from studio albums", len(collected))
        return collected

    def _apply_track_cap(
        self,
        tracks: list[CatalogTrack],
        result: IngestResult,
    ) -> list[CatalogTrack]:
        cap = self.settings.max_tracks
        if cap is None or len(tracks) <= cap:
            return tracks
        result.tracks_truncated = len(tracks) - cap
        log.warning(
            "Track cap reached: keeping %s of %s collected tracks",
            cap,
            len(tracks),
        )
        return tracks[:cap]

    async def _write_tracks(
        self,
        tracks: list[CatalogTrack],
        artist_id: UUID,
        result: IngestResult,
        progress: MonotonicProgress,
        concurrency: int,
    ) -> None:
        writer = UpsertWriter(self.unit_of_work_factory)

        async def write(track: CatalogTrack) -> UUID:
            song_id = await writer.write(track, artist_id=artist_id)
            result.studio_tracks_ingested += 1
            return song_id

        def on_progress(completed: int, total: int) -> None:
            progress.report(
                STAGE,
                min(95, 80 + (completed * 15) // total),
                f"Ingested {completed}/{total} studio tracks",
            )

        def on_error(exc: Exception, track: CatalogTrack) -> None:
            log.warning("Failed to ingest track %s (%s): %s", track.name, track.id, exc)
            result.add_error(
                IngestErrorType.TRACK_INGESTION,
                str(exc),
                {"track_id": track.id, "name": track.name},
            )

        await process_batch(
            tracks,
            write,
            concurrency=concurrency,
            on_progress=on_progress,
            on_error=on_error,
        )
