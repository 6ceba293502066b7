"""Retry, rate-limit and cache settings for outbound catalog HTTP clients."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

CachePredicate = Callable[[object], bool]

# Spotify answers bursts with 429 + Retry-After and has short 5xx blips during deploys.
TRANSIENT_STATUSES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})
CATALOG_CACHE_TTL_SECONDS: Final[float] = 6 * 60 * 60


def cacheable_catalog_payload(payload: object) -> bool:
    """Only catalog pages are worth caching; tokens and error bodies are not."""

    if not isinstance(payload, dict):
        return False
    return "error" not in payload and "access_token" not in payload


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    backoff_jitter: float = 1.0
    respect_retry_after_header: bool = True
    methods: frozenset[str] = field(default_factory=lambda: frozenset({"GET", "POST"}))
    statuses: frozenset[int] = TRANSIENT_STATUSES
    exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    ttl_seconds: float | None = CATALOG_CACHE_TTL_SECONDS
    cacheable: CachePredicate | None = cacheable_catalog_payload


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    headers: Mapping[str, str] | None = None
