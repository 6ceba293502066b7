"""Spotify adapter package."""

from __future__ import annotations

from .client import SpotifyAPIError, SpotifyAuthError, SpotifyCatalogClient
from .schema import (
    API_VERSION,
    AlbumsPage,
    AlbumTracksPage,
    AudioFeaturesResponse,
    SpotifyAlbum,
    SpotifyAudioFeatures,
    SpotifyTrack,
    TokenResponse,
    TracksResponse,
)
from .source import SpotifyCatalogSource
from .translator import translate_audio_features, translate_release, translate_track

__all__ = [
    "API_VERSION",
    "AlbumTracksPage",
    "AlbumsPage",
    "AudioFeaturesResponse",
    "SpotifyAPIError",
    "SpotifyAlbum",
    "SpotifyAudioFeatures",
    "SpotifyAuthError",
    "SpotifyCatalogClient",
    "SpotifyCatalogSource",
    "SpotifyTrack",
    "TokenResponse",
    "TracksResponse",
    "translate_audio_features",
    "translate_release",
    "translate_track",
]
