from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy import inspect

from encore.domain.catalog_ingest import song_from_track
from encore.domain.model import Artist, IngestJob, JobStatus
from tests.helpers.catalog import make_release, make_track

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from encore.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork

    UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def test_migrations_create_catalog_tables(sqlite_engine: Engine) -> None:
    tables = set(inspect(sqlite_engine).get_table_names())

    assert {"artist", "song", "artist_song", "ingest_job", "alembic_version"} <= tables


def test_artist_lookup_by_spotify_id(sqlite_unit_of_work: UowFactory) -> None:
    artist = Artist(name="Coldplay", spotify_id="4gzpq5DPGxSnKTe4SA8HAU")
    with sqlite_unit_of_work() as uow:
        uow.repositories.artists.add(artist)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        by_spotify = uow.repositories.artists.get_by_spotify_id("4gzpq5DPGxSnKTe4SA8HAU")
        by_id = uow.repositories.artists.get(artist.id)
        missing = uow.repositories.artists.get_by_spotify_id("nope")

    assert by_spotify is not None
    assert by_spotify.name == "Coldplay"
    assert by_id is not None
    assert missing is None


def test_song_upsert_keeps_identity_and_refreshes_fields(sqlite_unit_of_work: UowFactory) -> None:
    release = make_release("album-1", "Parachutes")
    original = song_from_track(make_track("t1", "Yellow", release=release, popularity=40))
    refreshed = song_from_track(
        make_track("t1", "Yellow (Remastered)", release=release, popularity=86)
    )
    refreshed.is_explicit = True

    with sqlite_unit_of_work() as uow:
        first_id = uow.repositories.songs.upsert(original)
        uow.commit()
    with sqlite_unit_of_work() as uow:
        second_id = uow.repositories.songs.upsert(refreshed)
        uow.commit()

    assert first_id == second_id == original.id
    with sqlite_unit_of_work() as uow:
        song = uow.repositories.songs.get_by_spotify_id("t1")
    assert song is not None
    assert song.name == "Yellow (Remastered)"
    assert song.popularity == 86
    # only the refreshed columns are overwritten
    assert song.is_explicit is False
    assert song.created_at == original.created_at


def test_link_is_created_once(sqlite_unit_of_work: UowFactory, stored_artist: Artist) -> None:
    song = song_from_track(make_track("t1"))

    with sqlite_unit_of_work() as uow:
        song_id = uow.repositories.songs.upsert(song)
        created = uow.repositories.artist_songs.link(stored_artist.id, song_id)
        again = uow.repositories.artist_songs.link(stored_artist.id, song_id)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        count = uow.repositories.artist_songs.count_for_artist(stored_artist.id)
        songs = uow.repositories.songs.list_for_artist(stored_artist.id)

    assert created is True
    assert again is False
    assert count == 1
    assert [listed.spotify_id for listed in songs] == ["t1"]


def test_next_queued_returns_oldest_queued_job(
    sqlite_unit_of_work: UowFactory,
    stored_artist: Artist,
) -> None:
    running = IngestJob(artist_id=stored_artist.id, spotify_id="a")
    running.start()
    older = IngestJob(artist_id=stored_artist.id, spotify_id="b")
    newer = IngestJob(
        artist_id=stored_artist.id,
        spotify_id="c",
        created_at=older.created_at + timedelta(seconds=1),
    )
    with sqlite_unit_of_work() as uow:
        for job in (running, older, newer):
            uow.repositories.jobs.add(job)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        job = uow.repositories.jobs.next_queued()

    assert job is not None
    assert job.id == older.id
    assert job.status is JobStatus.QUEUED


def test_job_result_round_trips_as_json(
    sqlite_unit_of_work: UowFactory,
    stored_artist: Artist,
) -> None:
    job = IngestJob(artist_id=stored_artist.id, spotify_id="a")
    job.start()
    job.complete({"studio_tracks_ingested": 3, "errors": [{"type": "track_ingestion"}]})
    with sqlite_unit_of_work() as uow:
        uow.repositories.jobs.add(job)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        loaded = uow.repositories.jobs.get(job.id)

    assert loaded is not None
    assert loaded.status is JobStatus.COMPLETED
    assert loaded.result == {"studio_tracks_ingested": 3, "errors": [{"type": "track_ingestion"}]}
    assert loaded.finished_at is not None
    assert loaded.finished_at.tzinfo is not None
