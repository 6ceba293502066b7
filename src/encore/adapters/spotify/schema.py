"""Minimal Pydantic models for the Spotify Web API catalog endpoints."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from encore.config.spotify import SPOTIFY_API_VERSION

API_VERSION: Final[str] = SPOTIFY_API_VERSION


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SpotifyImage(SpotifyBaseModel):
    url: str
    height: int | None = None
    width: int | None = None


class SpotifyArtist(SpotifyBaseModel):
    id: str | None = None
    name: str


class SpotifyAlbum(SpotifyBaseModel):
    id: str
    name: str
    album_type: str | None = None
    album_group: str | None = None
    release_date: str | None = None
    total_tracks: int | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    images: list[SpotifyImage] = Field(default_factory=list["SpotifyImage"])


class SpotifyTrack(SpotifyBaseModel):
    id: str
    name: str
    album: SpotifyAlbum | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    track_number: int | None = None
    disc_number: int = 1
    duration_ms: int | None = None
    explicit: bool = False
    popularity: int = 0
    preview_url: str | None = None
    uri: str | None = None
    is_local: bool = False
    is_playable: bool | None = None
    external_ids: dict[str, str] = Field(default_factory=dict)
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyAudioFeatures(SpotifyBaseModel):
    id: str
    liveness: float
    acousticness: float | None = None
    danceability: float | None = None
    energy: float | None = None
    instrumentalness: float | None = None
    loudness: float | None = None
    speechiness: float | None = None
    valence: float | None = None
    tempo: float | None = None
    key: int | None = None
    mode: int | None = None
    time_signature: int | None = None
    duration_ms: int | None = None


class SpotifyPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    previous: str | None = None
    total: int | None = None


class AlbumsPage(SpotifyPage):
    items: list[SpotifyAlbum] = Field(default_factory=list["SpotifyAlbum"])


class AlbumTracksPage(SpotifyPage):
    # simplified track objects: no album, popularity or external ids
    items: list[SpotifyTrack] = Field(default_factory=list["SpotifyTrack"])


class TracksResponse(SpotifyBaseModel):
    tracks: list[SpotifyTrack | None] = Field(default_factory=list["SpotifyTrack | None"])


class AudioFeaturesResponse(SpotifyBaseModel):
    audio_features: list[SpotifyAudioFeatures | None] = Field(
        default_factory=list["SpotifyAudioFeatures | None"]
    )


class TokenResponse(SpotifyBaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
