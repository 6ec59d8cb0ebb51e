"""Shared fixtures for fan-out library tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from libs.fanout import DownstreamClient

BASE_URL = "http://downstream"

ClientFactory = Callable[..., DownstreamClient]


def _delayed_transport(delays_ms: dict[str, int], values: dict[str, int]) -> httpx.MockTransport:
    async def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        delay = delays_ms[path]
        if delay < 0:
            return httpx.Response(500)
        await asyncio.sleep(delay / 1000)
        return httpx.Response(200, json=values.get(path, delay))

    return httpx.MockTransport(handler)


@pytest.fixture()
async def downstream() -> AsyncIterator[DownstreamClient]:
    """Client whose requests are intercepted by respx."""
    client = DownstreamClient(BASE_URL)
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture()
async def delayed_client() -> AsyncIterator[ClientFactory]:
    """Factory for clients served by an in-memory transport with per-path delays.

    ``delayed_client({"api/2": 10, "api/3": -1}, values={"api/2": 5})`` answers
    api/2 with 5 after 10ms and api/3 immediately with a 500. Without a
    configured value the body is the delay itself.
    """
    clients: list[DownstreamClient] = []

    def factory(delays_ms: dict[str, int], values: dict[str, int] | None = None) -> DownstreamClient:
        client = DownstreamClient(BASE_URL, transport=_delayed_transport(delays_ms, values or {}))
        clients.append(client)
        return client

    try:
        yield factory
    finally:
        for client in clients:
            await client.close()
