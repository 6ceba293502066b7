"""Schema validation against captured Spotify payloads."""

from __future__ import annotations

from encore.adapters.spotify import (
    API_VERSION,
    AlbumsPage,
    AlbumTracksPage,
    AudioFeaturesResponse,
    TracksResponse,
)
from tests.helpers.spotify import load_fixture


def test_schema_targets_web_api_v1() -> None:
    assert API_VERSION == "v1"


def test_albums_page_parses_items_and_next_link() -> None:
    page = AlbumsPage.model_validate(load_fixture("artist_albums_page_1.json"))

    assert page.total == 3
    assert page.next is not None
    assert [album.album_group for album in page.items] == ["album", "album"]
    assert page.items[0].images[0].url == "https://i.scdn.co/image/parachutes-640"


def test_album_tracks_page_has_no_album_reference() -> None:
    page = AlbumTracksPage.model_validate(load_fixture("album_tracks.json"))

    assert page.next is None
    assert all(track.album is None for track in page.items)
    assert all(track.popularity == 0 for track in page.items)


def test_tracks_response_keeps_null_slots() -> None:
    response = TracksResponse.model_validate(load_fixture("tracks.json"))

    assert len(response.tracks) == 3
    assert response.tracks[1] is None
    first = response.tracks[0]
    assert first is not None
    assert first.external_ids["isrc"] == "GBAYE0000351"
    assert first.popularity == 86


def test_audio_features_ignore_unknown_fields() -> None:
    response = AudioFeaturesResponse.model_validate(load_fixture("audio_features.json"))

    features = response.audio_features[0]
    assert features is not None
    assert features.liveness == 0.234
    assert features.key == 11
    assert response.audio_features[1] is None
