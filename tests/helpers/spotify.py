"""Mock transport helpers for Spotify adapter tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import httpx

from encore.adapters.http_resilience import ResilienceConfig, ResilientClient

SpotifyPayload = dict[str, object]
Handler = Callable[[httpx.Request], httpx.Response]
FIXTURES = Path(__file__).resolve().parents[1] / "data" / "spotify"


def load_fixture(name: str) -> SpotifyPayload:
    return json.loads((FIXTURES / name).read_text())


def make_client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


class FakeSpotifyAPI:
    """Route mock requests by path, issue numbered tokens and record every call.

    A list route is consumed one response per request; a single response is
    replayed for every request.
    """

    def __init__(self, routes: dict[str, list[httpx.Response] | httpx.Response]) -> None:
        self._routes = routes
        self.token_requests = 0
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "accounts.spotify.com":
            self.token_requests += 1
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{self.token_requests}",
                    "token_type": "Bearer",
                    "expires_in": 3600,
                },
            )
        route = self._routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": {"status": 404, "message": "not found"}})
        if isinstance(route, list):
            return route.pop(0)
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    def api_requests(self) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.host != "accounts.spotify.com"]
