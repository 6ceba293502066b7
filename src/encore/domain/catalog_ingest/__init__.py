"""Studio-only catalog ingest pipeline."""

from __future__ import annotations

from .analysis import StudioFilterSample, sample_studio_filter
from .concurrency import process_batch
from .deduplication import deduplicate_by_isrc
from .filtering import (
    filter_studio_releases,
    filter_studio_tracks,
    is_live_release_name,
    is_live_title,
    is_studio_release,
)
from .jobs import (
    IngestWorker,
    JobNotFoundError,
    JobProgressReporter,
    get_ingest_job,
    submit_ingest_job,
)
from .pipeline import CatalogIngestService, IngestRequest
from .progress import (
    LoggingProgressReporter,
    MonotonicProgress,
    NullProgressReporter,
    ProgressBus,
    ProgressEvent,
    ProgressReporter,
)
from .result import IngestError, IngestErrorType, IngestResult
from .writer import UpsertWriter, song_from_track

__all__ = [
    "CatalogIngestService",
    "IngestError",
    "IngestErrorType",
    "IngestRequest",
    "IngestResult",
    "IngestWorker",
    "JobNotFoundError",
    "JobProgressReporter",
    "LoggingProgressReporter",
    "MonotonicProgress",
    "NullProgressReporter",
    "ProgressBus",
    "ProgressEvent",
    "ProgressReporter",
    "StudioFilterSample",
    "UpsertWriter",
    "deduplicate_by_isrc",
    "filter_studio_releases",
    "filter_studio_tracks",
    "get_ingest_job",
    "is_live_release_name",
    "is_live_title",
    "is_studio_release",
    "process_batch",
    "sample_studio_filter",
    "song_from_track",
    "submit_ingest_job",
]
