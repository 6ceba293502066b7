"""Queued ingest jobs.

Callers submit a job and get its id back immediately; a separate worker claims
queued jobs, runs the catalog ingest and records progress on the job row so a
polling endpoint can read it.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from encore.config.ingest import DEFAULT_WORKER_POLL_SECONDS
from encore.domain.model import IngestJob

from .pipeline import IngestRequest
from .result import IngestResult

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from encore.domain.ports.unit_of_work import CatalogUnitOfWork

    from .pipeline import CatalogIngestService

log = logging.getLogger(__name__)

type UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

INTERRUPTED_ERROR = "interrupted"


class JobNotFoundError(LookupError):
    """Raised when a job id does not exist."""


def submit_ingest_job(
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    artist_id: UUID,
    spotify_id: str,
    concurrency: int | None = None,
) -> UUID:
    job = IngestJob(artist_id=artist_id, spotify_id=spotify_id, concurrency=concurrency)
    with unit_of_work_factory() as uow:
        uow.repositories.jobs.add(job)
        uow.commit()
    log.info("Queued ingest job %s for artist %s (%s)", job.id, artist_id, spotify_id)
    return job.id


def get_ingest_job(*, unit_of_work_factory: UnitOfWorkFactory, job_id: UUID) -> IngestJob:
    with unit_of_work_factory() as uow:
        job = uow.repositories.jobs.get(job_id)
    if job is None:
        raise JobNotFoundError(f"Unknown ingest job: {job_id}")
    return job


class JobProgressReporter:
    """Progress sink that writes every checkpoint to the job row."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory, job_id: UUID) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._job_id = job_id

    def report(self, stage: str, progress: int, message: str) -> None:
        with self._unit_of_work_factory() as uow:
            job = uow.repositories.jobs.get(self._job_id)
            if job is None:
                log.warning("Progress for unknown job %s dropped", self._job_id)
                return
            job.record_progress(stage, progress, message)
            uow.commit()

    def report_error(self, error: BaseException, stage: str) -> None:
        # runs just before the pipeline re-raises; a store failure here must not replace it
        try:
            with self._unit_of_work_factory() as uow:
                job = uow.repositories.jobs.get(self._job_id)
                if job is None:
                    log.warning("Error report for unknown job %s dropped", self._job_id)
                    return
                job.record_progress(stage, job.progress, f"Failed: {error}")
                uow.commit()
        except Exception:
            log.exception("Could not record failure on ingest job %s", self._job_id)


@dataclass(slots=True)
class IngestWorker:
    service: CatalogIngestService
    unit_of_work_factory: UnitOfWorkFactory

    async def run_once(self) -> IngestJob | None:
        """Claim and execute the oldest queued job; return it, or None when idle."""

        claimed = self._claim_next()
        if claimed is None:
            return None

        reporter = JobProgressReporter(self.unit_of_work_factory, claimed.id)
        request = IngestRequest(
            artist_id=claimed.artist_id,
            spotify_id=claimed.spotify_id,
            concurrency=claimed.concurrency,
        )
        result = IngestResult()
        try:
            await self.service.ingest(request, reporter=reporter, result=result)
        except Exception as exc:
            log.error("Ingest job %s failed: %s", claimed.id, exc)  # noqa: TRY400
            self._finish(claimed.id, result=result, error=str(exc) or type(exc).__name__)
        except BaseException:
            # Ctrl+C, SystemExit or task cancellation: the row must not stay `running`
            log.warning("Ingest job %s interrupted", claimed.id)
            try:
                self._finish(claimed.id, result=result, error=INTERRUPTED_ERROR)
            except Exception:
                log.exception("Could not mark interrupted ingest job %s as failed", claimed.id)
            raise
        else:
            log.info(
                "Ingest job %s completed: %s studio tracks",
                claimed.id,
                result.studio_tracks_ingested,
            )
            self._finish(claimed.id, result=result)

        return get_ingest_job(unit_of_work_factory=self.unit_of_work_factory, job_id=claimed.id)

    async def run(
        self,
        *,
        poll_interval: float = DEFAULT_WORKER_POLL_SECONDS,
        max_jobs: int | None = None,
        stop_when_idle: bool = False,
    ) -> int:
        """Process jobs until ``max_jobs`` ran or, with ``stop_when_idle``, the queue drains."""

        processed = 0
        while max_jobs is None or processed < max_jobs:
            job = await self.run_once()
            if job is None:
                if stop_when_idle:
                    break
                await asyncio.sleep(poll_interval)
                continue
            processed += 1
        return processed

    def _claim_next(self) -> IngestJob | None:
        with self.unit_of_work_factory() as uow:
            job = uow.repositories.jobs.next_queued()
            if job is None:
                return None
            job.start()
            uow.commit()
        log.info("Claimed ingest job %s", job.id)
        return job

    def _finish(self, job_id: UUID, *, result: IngestResult, error: str | None = None) -> None:
        with self.unit_of_work_factory() as uow:
            job = uow.repositories.jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(f"Unknown ingest job: {job_id}")
            if error is None:
                job.complete(result.to_dict())
            else:
                job.fail(error, result.to_dict())
            uow.commit()
