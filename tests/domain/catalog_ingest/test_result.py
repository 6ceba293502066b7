from __future__ import annotations

import json

from encore.domain.catalog_ingest import IngestErrorType, IngestResult, song_from_track
from tests.helpers.catalog import make_track


def test_result_serialises_to_json_ready_dict() -> None:
    result = IngestResult(albums_processed=2, studio_tracks_ingested=5, live_name_filtered=1)
    result.add_error(IngestErrorType.ALBUM_TRACKS_FETCH, "timeout", {"album_id": "a1", "name": "X"})
    result.add_error(IngestErrorType.FATAL_ERROR, "boom")

    payload = result.to_dict()

    assert json.loads(json.dumps(payload)) == payload
    assert payload["albums_processed"] == 2
    assert payload["errors"] == [
        {
            "type": "album_tracks_fetch",
            "message": "timeout",
            "item": {"album_id": "a1", "name": "X"},
        },
        {"type": "fatal_error", "message": "boom", "item": None},
    ]
    assert result.live_tracks_filtered == 1


def test_error_types_split_recoverable_from_fatal() -> None:
    assert IngestErrorType.ALBUM_TRACKS_FETCH.recoverable
    assert IngestErrorType.TRACK_INGESTION.recoverable
    assert not IngestErrorType.FATAL_ERROR.recoverable


def test_song_from_track_copies_catalog_fields() -> None:
    track = make_track("t1", "Clocks", isrc="GBAYE0200771", popularity=81)

    song = song_from_track(track)

    assert song.spotify_id == "t1"
    assert song.name == "Clocks"
    assert song.isrc == "GBAYE0200771"
    assert song.artist == "Test Artist"
    assert song.album_name == "First Record"
    assert song.album_id == "album-1"
    assert song.popularity == 81
    assert song.spotify_uri == "spotify:track:t1"
    assert song.is_studio
    assert song.is_playable
