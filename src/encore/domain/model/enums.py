"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ReleaseType(StrEnum):
    ALBUM = "album"
    SINGLE = "single"
    COMPILATION = "compilation"
    APPEARS_ON = "appears_on"


class JobStatus(StrEnum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_finished(self) -> bool:
        return self in {JobStatus.COMPLETED, JobStatus.FAILED}


class IngestStage(StrEnum):
    """Stage names pushed to progress reporters."""

    QUEUED = "queued"
    IMPORTING_SONGS = "importing-songs"
    COMPLETED = "completed"
    FAILED = "failed"
