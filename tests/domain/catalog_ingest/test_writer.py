from __future__ import annotations

import asyncio
import uuid
from typing import TYPE_CHECKING

from encore.domain.catalog_ingest import UpsertWriter, process_batch, song_from_track
from tests.helpers.catalog import make_album_tracks, make_release

if TYPE_CHECKING:
    from collections.abc import Callable

    from encore.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork
    from encore.domain.model import Artist, CatalogTrack

    UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def test_song_from_track_marks_studio_and_defaults_playable() -> None:
    track = make_album_tracks(make_release(), count=1)[0]

    song = song_from_track(track)

    assert song.spotify_id == track.id
    assert song.album_name == "First Record"
    assert song.is_studio
    assert song.is_playable


def test_writes_do_not_interleave_under_batch_concurrency(
    sqlite_unit_of_work: UowFactory,
    stored_artist: Artist,
) -> None:
    tracks = make_album_tracks(make_release(), count=5)
    order: list[str] = []
    writer = UpsertWriter(sqlite_unit_of_work)

    async def write(track: CatalogTrack) -> uuid.UUID:
        song_id = await writer.write(track, artist_id=stored_artist.id)
        order.append(track.id)
        return song_id

    written = asyncio.run(process_batch(tracks, write, concurrency=4))

    assert len(written) == 5
    assert order == [track.id for track in tracks]
