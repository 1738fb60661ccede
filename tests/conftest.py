"""Shared fixtures: stubbed proxy transport and fetcher factory."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from config import SERIES_IDS
from sources import FetcherConfig, SeriesFetcher

PROXY_BASE = "http://proxy.test"


def observations_body(rows: list[tuple[str, str]]) -> dict[str, Any]:
    return {"observations": [{"date": d, "value": v} for d, v in rows]}


def proxy_transport(
    bodies: dict[str, Any],
    *,
    health_status: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """
    Fake proxy. ``bodies`` maps series codes to either a JSON body, a
    ``(status, body)`` tuple, or an exception class to raise as a transport
    error. Unlisted series return an empty observation list.
    """

    async def _handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path == "/health":
            return httpx.Response(
                health_status,
                json={"status": "ok", "timestamp": "2026-10-19T00:00:00Z"},
                request=request,
            )

        series_id = request.url.path.rsplit("/", 1)[-1]
        body = bodies.get(series_id, {"observations": []})
        if isinstance(body, type) and issubclass(body, Exception):
            raise body("connection refused", request=request)
        status = 200
        if isinstance(body, tuple):
            status, body = body
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body, request=request)
        return httpx.Response(status, json=body, request=request)

    return httpx.MockTransport(_handler)


@pytest.fixture
async def make_fetcher():
    clients: list[httpx.AsyncClient] = []

    def _make(bodies: dict[str, Any] | None = None, **kwargs: Any) -> SeriesFetcher:
        api_key_provider = kwargs.pop("api_key_provider", None)
        client = httpx.AsyncClient(transport=proxy_transport(bodies or {}, **kwargs))
        clients.append(client)
        return SeriesFetcher(
            FetcherConfig(base_url=PROXY_BASE, api_key_provider=api_key_provider),
            client=client,
        )

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def codes() -> dict[str, str]:
    return dict(SERIES_IDS)
