"""Async Spotify Web API client using the client-credentials flow."""

from __future__ import annotations

import asyncio
import time
from logging import getLogger
from typing import TYPE_CHECKING

from encore.adapters.http_resilience import ResilientClient

from .schema import (
    AlbumsPage,
    AlbumTracksPage,
    AudioFeaturesResponse,
    SpotifyAlbum,
    SpotifyAudioFeatures,
    SpotifyTrack,
    TokenResponse,
    TracksResponse,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Sequence
    from types import TracebackType

    import httpx

    from encore.config.http_resilience import ResilienceConfig
    from encore.config.spotify import SpotifyConfig

log = getLogger(__name__)

PAGE_LIMIT = 50
TRACKS_BATCH_SIZE = 50
AUDIO_FEATURES_BATCH_SIZE = 100
TOKEN_EXPIRY_BUFFER_SECONDS = 300.0


class SpotifyAPIError(RuntimeError):
    """Raised when the Spotify API returns an error status or an unexpected payload."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class SpotifyAuthError(SpotifyAPIError):
    """Raised when the token endpoint rejects the client credentials."""


def _chunks[T](items: Sequence[T], size: int) -> list[Sequence[T]]:
    return [items[start : start + size] for start in range(0, len(items), size)]


class SpotifyCatalogClient:
    """Low-level HTTP client for the Spotify catalog endpoints.

    One instance owns one resilient HTTP client and one access token; use it as
    an async context manager so the connection pool is closed.
    """

    def __init__(
        self,
        *,
        config: SpotifyConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._clock = clock
        self._client: ResilientClient | None = None
        self._access_token: str | None = None
        self._expires_at = 0.0
        self._token_lock = asyncio.Lock()

    async def __aenter__(self) -> SpotifyCatalogClient:
        self._http()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # credentials ---------------------------------------------------------

    async def ensure_access_token(self) -> str:
        """Return a valid access token, fetching a new one when missing or about to expire."""

        token = self._current_token()
        if token is not None:
            return token
        async with self._token_lock:
            # a concurrent caller may have refreshed while we waited
            token = self._current_token()
            if token is not None:
                return token
            return await self._request_token()

    def invalidate_token(self) -> None:
        self._access_token = None
        self._expires_at = 0.0

    def _current_token(self) -> str | None:
        if self._access_token is None:
            return None
        if self._clock() >= self._expires_at - TOKEN_EXPIRY_BUFFER_SECONDS:
            return None
        return self._access_token

    async def _request_token(self) -> str:
        response = await self._http().post(
            self._config.token_url,
            data={"grant_type": "client_credentials"},
            auth=(self._config.client_id, self._config.client_secret),
        )
        if response.is_error:
            raise SpotifyAuthError(
                f"Spotify token request failed with status {response.status_code}",
                status=response.status_code,
            )
        token = TokenResponse.model_validate(response.json())
        self._access_token = token.access_token
        self._expires_at = self._clock() + token.expires_in
        log.debug("Obtained Spotify access token valid for %ss", token.expires_in)
        return token.access_token

    # endpoints -----------------------------------------------------------

    async def iter_artist_albums(self, artist_id: str) -> AsyncIterator[SpotifyAlbum]:
        params: dict[str, str] | None = {
            "include_groups": ",".join(self._config.include_groups),
            "market": self._config.market,
            "limit": str(PAGE_LIMIT),
        }
        url: str | None = f"artists/{artist_id}/albums"
        while url is not None:
            page = AlbumsPage.model_validate(await self.get_json(url, params=params))
            for album in page.items:
                yield album
            # the next link already carries the query string
            url, params = page.next, None

    async def list_artist_albums(self, artist_id: str) -> list[SpotifyAlbum]:
        return [album async for album in self.iter_artist_albums(artist_id)]

    async def list_album_tracks(self, album_id: str) -> list[SpotifyTrack]:
        tracks: list[SpotifyTrack] = []
        params: dict[str, str] | None = {
            "market": self._config.market,
            "limit": str(PAGE_LIMIT),
        }
        url: str | None = f"albums/{album_id}/tracks"
        while url is not None:
            page = AlbumTracksPage.model_validate(await self.get_json(url, params=params))
            tracks.extend(page.items)
            url, params = page.next, None
        return tracks

    async def get_tracks(self, track_ids: Sequence[str]) -> list[SpotifyTrack]:
        tracks: list[SpotifyTrack] = []
        for batch in _chunks(track_ids, TRACKS_BATCH_SIZE):
            payload = await self.get_json(
                "tracks",
                params={"ids": ",".join(batch), "market": self._config.market},
            )
            response = TracksResponse.model_validate(payload)
            tracks.extend(track for track in response.tracks if track is not None)
        return tracks

    async def get_audio_features(self, track_ids: Sequence[str]) -> list[SpotifyAudioFeatures]:
        features: list[SpotifyAudioFeatures] = []
        for batch in _chunks(track_ids, AUDIO_FEATURES_BATCH_SIZE):
            try:
                payload = await self.get_json("audio-features", params={"ids": ",".join(batch)})
            except SpotifyAPIError as exc:
                if exc.status != 403:  # noqa: PLR2004
                    raise
                log.warning(
                    "Audio features unavailable for %d tracks (403); liveness unknown",
                    len(batch),
                )
                continue
            response = AudioFeaturesResponse.model_validate(payload)
            features.extend(item for item in response.audio_features if item is not None)
        return features

    # transport -----------------------------------------------------------

    async def get_json(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
    ) -> dict[str, object]:
        response = await self._authorized_get(url, params=params)
        if response.status_code == 401:  # noqa: PLR2004
            log.info("Spotify rejected the access token; refreshing once")
            self.invalidate_token()
            response = await self._authorized_get(url, params=params)
        if response.is_error:
            raise SpotifyAPIError(
                f"Spotify request to {url} failed with status {response.status_code}",
                status=response.status_code,
            )

        payload = response.json()
        if not isinstance(payload, dict):
            raise SpotifyAPIError("Unexpected Spotify response payload")
        return payload  # pyright: ignore[reportUnknownVariableType]

    async def _authorized_get(
        self,
        url: str,
        *,
        params: dict[str, str] | None,
    ) -> httpx.Response:
        token = await self.ensure_access_token()
        return await self._http().get(
            url,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client
