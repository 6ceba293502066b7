"""Domain model for the catalog ingest."""

from __future__ import annotations

from .catalog import AcousticFeatures, CatalogRelease, CatalogTrack
from .enums import IngestStage, JobStatus, ReleaseType
from .jobs import IngestJob
from .library import Artist, ArtistSongLink, Song

__all__ = [
    "AcousticFeatures",
    "Artist",
    "ArtistSongLink",
    "CatalogRelease",
    "CatalogTrack",
    "IngestJob",
    "IngestStage",
    "JobStatus",
    "ReleaseType",
    "Song",
]
