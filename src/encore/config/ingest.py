"""Defaults for catalog ingest runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_int_env

DEFAULT_CONCURRENCY: Final[int] = 8
DEFAULT_MAX_TRACKS: Final[int] = 2000
DEFAULT_LIVENESS_THRESHOLD: Final[float] = 0.8
DEFAULT_WORKER_POLL_SECONDS: Final[float] = 2.0


@dataclass(frozen=True, slots=True)
class IngestSettings:
    concurrency: int = DEFAULT_CONCURRENCY
    max_tracks: int | None = DEFAULT_MAX_TRACKS
    liveness_threshold: float = DEFAULT_LIVENESS_THRESHOLD
    prefilter_releases: bool = True
    sort_by_id: bool = False


def get_ingest_settings() -> IngestSettings:
    return IngestSettings(
        concurrency=optional_int_env("ENCORE_INGEST_CONCURRENCY", DEFAULT_CONCURRENCY),
        max_tracks=optional_int_env("ENCORE_MAX_TRACKS", DEFAULT_MAX_TRACKS),
    )
