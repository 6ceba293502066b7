"""Shared fixtures for Spotify adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from encore.adapters.http_resilience import ResilienceConfig
from encore.adapters.spotify import SpotifyCatalogClient
from encore.config.spotify import SPOTIFY_API_BASE_URL, SpotifyConfig
from tests.helpers.spotify import make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.spotify import Handler


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    return SpotifyConfig(
        client_id="client-id",
        client_secret="client-secret",  # noqa: S106
        resilience=ResilienceConfig(
            name="spotify-test",
            base_url=SPOTIFY_API_BASE_URL,
            cache=None,
        ),
    )


@pytest.fixture
def make_spotify_client(
    spotify_config: SpotifyConfig,
) -> Callable[[Handler], SpotifyCatalogClient]:
    def build(handler: Handler) -> SpotifyCatalogClient:
        return SpotifyCatalogClient(
            config=spotify_config,
            client_factory=make_client_factory(handler),
        )

    return build
