"""Fixtures for Fan-Out Gateway tests.

The app fans out to itself through httpx.ASGITransport, the in-process
equivalent of calling its own host, so no sockets are opened.
"""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.fanout_gateway.app_factory import build_orchestrator, create_app
from apps.fanout_gateway.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        downstream_base_url="http://testserver",
        deadline_ms=200,
        random_delay_min_ms=1,
        random_delay_max_ms=20,
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    app = create_app(settings)
    downstream, orchestrator = build_orchestrator(settings, httpx.ASGITransport(app=app))
    app.state.downstream = downstream
    app.state.orchestrator = orchestrator
    return app


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
