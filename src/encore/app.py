"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from encore.adapters.spotify import SpotifyCatalogClient, SpotifyCatalogSource
from encore.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from encore.config import get_ingest_settings, get_spotify_config
from encore.domain.catalog_ingest import (
    CatalogIngestService,
    IngestRequest,
    IngestWorker,
    LoggingProgressReporter,
    get_ingest_job,
    sample_studio_filter,
    submit_ingest_job,
)
from encore.domain.model import Artist
from encore.domain.ports.unit_of_work import CatalogUnitOfWork

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from uuid import UUID

    from encore.config import IngestSettings
    from encore.domain.catalog_ingest import IngestResult, ProgressReporter, StudioFilterSample
    from encore.domain.model import IngestJob
    from encore.domain.ports.fetching import CatalogSource

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = getLogger(__name__)


class ArtistNotFoundError(LookupError):
    """Raised when an artist id is not in the catalog store."""


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork


@asynccontextmanager
async def _catalog_source(source: CatalogSource | None) -> AsyncIterator[CatalogSource]:
    if source is not None:
        yield source
        return
    async with SpotifyCatalogClient(config=get_spotify_config()) as client:
        yield SpotifyCatalogSource(client)


def _load_artist(unit_of_work_factory: UnitOfWorkFactory, artist_id: UUID) -> Artist:
    with unit_of_work_factory() as uow:
        artist = uow.repositories.artists.get(artist_id)
    if artist is None:
        raise ArtistNotFoundError(f"Unknown artist: {artist_id}")
    if artist.spotify_id is None:
        raise ValueError(f"Artist {artist_id} has no Spotify id")
    return artist


def create_artist(
    *,
    name: str,
    spotify_id: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Artist:
    """Create an artist, or return the existing one with the same Spotify id."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        if spotify_id is not None:
            existing = uow.repositories.artists.get_by_spotify_id(spotify_id)
            if existing is not None:
                log.info("Artist %s already exists as %s", spotify_id, existing.id)
                return existing
        artist = Artist(name=name, spotify_id=spotify_id)
        uow.repositories.artists.add(artist)
        uow.commit()
    log.info("Created artist %s (%s)", artist.name, artist.id)
    return artist


def ingest_artist_catalog(
    *,
    artist_id: UUID,
    concurrency: int | None = None,
    source: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: IngestSettings | None = None,
    reporter: ProgressReporter | None = None,
) -> IngestResult:
    """Run one studio-catalog ingest for a stored artist and wait for it."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    artist = _load_artist(effective_uow, artist_id)
    request = IngestRequest(
        artist_id=artist.id,
        spotify_id=artist.spotify_id or "",
        concurrency=concurrency,
    )
    log.info("Starting catalog ingest for %s (%s)", artist.name, request.spotify_id)

    async def run() -> IngestResult:
        async with _catalog_source(source) as active_source:
            service = CatalogIngestService(
                source=active_source,
                unit_of_work_factory=effective_uow,
                settings=settings or get_ingest_settings(),
            )
            return await service.ingest(request, reporter=reporter or LoggingProgressReporter())

    result = asyncio.run(run())
    log.info(
        "Finished catalog ingest: ingested=%s, live_filtered=%s, duplicates=%s, errors=%s",
        result.studio_tracks_ingested,
        result.live_tracks_filtered,
        result.duplicates_filtered,
        len(result.errors),
    )
    return result


def submit_catalog_ingest(
    *,
    artist_id: UUID,
    concurrency: int | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> UUID:
    """Queue an ingest job for a stored artist and return the job id."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    artist = _load_artist(effective_uow, artist_id)
    return submit_ingest_job(
        unit_of_work_factory=effective_uow,
        artist_id=artist.id,
        spotify_id=artist.spotify_id or "",
        concurrency=concurrency,
    )


def run_ingest_worker(
    *,
    max_jobs: int | None = None,
    poll_interval: float | None = None,
    stop_when_idle: bool = False,
    source: CatalogSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: IngestSettings | None = None,
) -> int:
    """Process queued ingest jobs; return how many ran."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    effective_settings = settings or get_ingest_settings()

    async def run() -> int:
        async with _catalog_source(source) as active_source:
            worker = IngestWorker(
                service=CatalogIngestService(
                    source=active_source,
                    unit_of_work_factory=effective_uow,
                    settings=effective_settings,
                ),
                unit_of_work_factory=effective_uow,
            )
            if poll_interval is None:
                return await worker.run(max_jobs=max_jobs, stop_when_idle=stop_when_idle)
            return await worker.run(
                poll_interval=poll_interval,
                max_jobs=max_jobs,
                stop_when_idle=stop_when_idle,
            )

    processed = asyncio.run(run())
    log.info("Ingest worker stopped after %s jobs", processed)
    return processed


def get_job(
    job_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> IngestJob:
    return get_ingest_job(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        job_id=job_id,
    )


def analyze_catalog(
    *,
    spotify_id: str,
    limit: int = 50,
    source: CatalogSource | None = None,
    settings: IngestSettings | None = None,
) -> StudioFilterSample:
    """Sample the studio filter for an artist without touching the catalog store."""

    threshold = (settings or get_ingest_settings()).liveness_threshold

    async def run() -> StudioFilterSample:
        async with _catalog_source(source) as active_source:
            return await sample_studio_filter(
                active_source,
                spotify_id,
                limit=limit,
                liveness_threshold=threshold,
            )

    return asyncio.run(run())
