from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from encore.app import (
    ArtistNotFoundError,
    analyze_catalog,
    create_artist,
    get_job,
    ingest_artist_catalog,
    run_ingest_worker,
    submit_catalog_ingest,
)
from encore.config import IngestSettings
from encore.domain.model import JobStatus
from tests.helpers.catalog import FakeCatalogSource, make_album_tracks, make_release

if TYPE_CHECKING:
    from collections.abc import Callable

    from encore.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork

    UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def _source() -> FakeCatalogSource:
    album = make_release("album-1", "First Record")
    return FakeCatalogSource(
        releases=[album],
        tracks_by_release={album.id: make_album_tracks(album)},
    )


def test_create_artist_is_idempotent_on_spotify_id(sqlite_unit_of_work: UowFactory) -> None:
    first = create_artist(
        name="Coldplay",
        spotify_id="4gzpq5DPGxSnKTe4SA8HAU",
        unit_of_work_factory=sqlite_unit_of_work,
    )
    second = create_artist(
        name="Coldplay (dup)",
        spotify_id="4gzpq5DPGxSnKTe4SA8HAU",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert second.id == first.id
    assert second.name == "Coldplay"


def test_ingest_artist_catalog_runs_pipeline(sqlite_unit_of_work: UowFactory) -> None:
    artist = create_artist(
        name="Test Artist",
        spotify_id="artist-spotify-id",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    result = ingest_artist_catalog(
        artist_id=artist.id,
        source=_source(),
        unit_of_work_factory=sqlite_unit_of_work,
        settings=IngestSettings(),
    )

    assert result.studio_tracks_ingested == 3


def test_ingest_unknown_artist_raises(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(ArtistNotFoundError):
        ingest_artist_catalog(
            artist_id=uuid.uuid4(),
            source=_source(),
            unit_of_work_factory=sqlite_unit_of_work,
        )


def test_artist_without_spotify_id_cannot_be_ingested(sqlite_unit_of_work: UowFactory) -> None:
    artist = create_artist(name="Local Band", unit_of_work_factory=sqlite_unit_of_work)

    with pytest.raises(ValueError, match="no Spotify id"):
        submit_catalog_ingest(artist_id=artist.id, unit_of_work_factory=sqlite_unit_of_work)


def test_submit_then_worker_then_status(sqlite_unit_of_work: UowFactory) -> None:
    artist = create_artist(
        name="Test Artist",
        spotify_id="artist-spotify-id",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    job_id = submit_catalog_ingest(
        artist_id=artist.id,
        concurrency=2,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    queued = get_job(job_id, unit_of_work_factory=sqlite_unit_of_work)
    processed = run_ingest_worker(
        stop_when_idle=True,
        source=_source(),
        unit_of_work_factory=sqlite_unit_of_work,
        settings=IngestSettings(),
    )
    finished = get_job(job_id, unit_of_work_factory=sqlite_unit_of_work)

    assert queued.status is JobStatus.QUEUED
    assert queued.concurrency == 2
    assert processed == 1
    assert finished.status is JobStatus.COMPLETED
    assert finished.result is not None
    assert finished.result["studio_tracks_ingested"] == 3


def test_analyze_catalog_does_not_need_the_store() -> None:
    sample = analyze_catalog(
        spotify_id="artist-spotify-id",
        limit=10,
        source=_source(),
        settings=IngestSettings(),
    )

    assert sample.total_tracks == 3
    assert sample.studio_tracks == 3
