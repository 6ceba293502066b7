"""Queued ingest jobs consumed by the worker."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from encore.domain.model.enums import IngestStage, JobStatus


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class IngestJob:
    artist_id: uuid.UUID
    spotify_id: str
    concurrency: int | None = None
    status: JobStatus = JobStatus.QUEUED
    stage: str = IngestStage.QUEUED
    progress: int = 0
    message: str | None = None
    error: str | None = None
    result: dict[str, object] | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    started_at: datetime | None = None
    finished_at: datetime | None = None
    updated_at: datetime = field(default_factory=_utcnow)

    def start(self) -> None:
        if self.status is not JobStatus.QUEUED:
            raise ValueError(f"Cannot start job {self.id} in status {self.status}")
        now = _utcnow()
        self.status = JobStatus.RUNNING
        self.started_at = now
        self.updated_at = now

    def record_progress(self, stage: str, progress: int, message: str) -> None:
        self.stage = stage
        self.progress = max(self.progress, progress)
        self.message = message
        self.updated_at = _utcnow()

    def complete(self, result: dict[str, object]) -> None:
        now = _utcnow()
        self.status = JobStatus.COMPLETED
        self.stage = IngestStage.COMPLETED
        self.progress = 100
        self.result = result
        self.finished_at = now
        self.updated_at = now

    def fail(self, error: str, result: dict[str, object] | None = None) -> None:
        now = _utcnow()
        self.status = JobStatus.FAILED
        self.stage = IngestStage.FAILED
        self.error = error
        self.result = result
        self.finished_at = now
        self.updated_at = now
