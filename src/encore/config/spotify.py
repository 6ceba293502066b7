"""Spotify configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

SPOTIFY_API_VERSION: Final[str] = "v1"
SPOTIFY_API_BASE_URL: Final[str] = f"https://api.spotify.com/{SPOTIFY_API_VERSION}"
SPOTIFY_TOKEN_URL: Final[str] = "https://accounts.spotify.com/api/token"
SPOTIFY_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_MARKET: Final[str] = "US"
DEFAULT_INCLUDE_GROUPS: Final[tuple[str, ...]] = ("album", "single")


def default_spotify_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="spotify",
        base_url=SPOTIFY_API_BASE_URL,
        timeout_seconds=SPOTIFY_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        cache=CacheConfig(backend="memory"),
        headers={"Accept": "application/json"},
    )


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    market: str = DEFAULT_MARKET
    include_groups: tuple[str, ...] = DEFAULT_INCLUDE_GROUPS
    token_url: str = SPOTIFY_TOKEN_URL
    resilience: ResilienceConfig = field(default_factory=default_spotify_resilience)


def get_spotify_config(*, resilience: ResilienceConfig | None = None) -> SpotifyConfig:
    values = require_env_vars(("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"))
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        resilience=resilience or default_spotify_resilience(),
    )
