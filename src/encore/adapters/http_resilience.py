"""Shared async HTTP client for catalog sources.

Requests pass through an ``aiolimiter`` bucket, an ``httpx-retries`` transport that
backs off on transient statuses, and optionally a ``hishel`` cache for catalog pages.
"""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from encore.config.http_resilience import (
    CacheConfig,
    CachePredicate,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)
from encore.config.storage import get_storage_config

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
]

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        backoff_jitter=policy.backoff_jitter,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=sorted(policy.methods),
        status_forcelist=sorted(policy.statuses),
        retry_on_exceptions=policy.exceptions,
    )


class ResilientClient:
    """Rate-limited, retrying ``httpx.AsyncClient`` for one upstream service."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = _build_limiter(config.ratelimit)
        transport = RetryTransport(retry=build_retry(config.retry))
        headers = dict(config.headers or {})
        storage, policy = _build_cache(config.cache)
        if storage is None:
            self._client = httpx.AsyncClient(
                base_url=config.base_url or "",
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
            )
        else:
            self._client = AsyncCacheClient(
                base_url=config.base_url or "",
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
                storage=storage,
                policy=policy,
            )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        return await self._send("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        *,
        data: Mapping[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        return await self._send("POST", url, data=data, auth=auth, headers=headers)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        if self._limiter is None:
            response = await self._client.request(
                method, url, params=params, data=data, auth=auth, headers=headers
            )
        else:
            async with self._limiter:
                response = await self._client.request(
                    method, url, params=params, data=data, auth=auth, headers=headers
                )
        log.debug(
            "%s %s %s -> %s", self.config.name, method, response.request.url, response.status_code
        )
        return response


def _build_limiter(ratelimit: RateLimit | None) -> AsyncLimiter | None:
    if ratelimit is None:
        return None
    return AsyncLimiter(ratelimit.max_calls, ratelimit.per_seconds)


class _JsonPayloadFilter(BaseFilter[HishelCacheResponse]):
    """Let a JSON predicate decide whether a response body may be stored."""

    def __init__(self, predicate: CachePredicate) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return False
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def _build_cache(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage | None, FilterPolicy | None]:
    if config is None or not config.enabled:
        return None, None

    if config.backend == "sqlite":
        database_path = config.sqlite_path or str(get_storage_config().http_cache_path())
    elif config.backend == "memory":
        database_path = ":memory:"
    else:
        raise ValueError(f"Unsupported cache backend: {config.backend}")

    storage = AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)
    policy = None
    if config.cacheable is not None:
        policy = FilterPolicy(response_filters=[_JsonPayloadFilter(config.cacheable)])
    return storage, policy
