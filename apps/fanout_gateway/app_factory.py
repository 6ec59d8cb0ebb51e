"""Application factory for the Fan-Out Gateway.

create_app() wires settings, the downstream client and the orchestrator into
app.state, so tests can build isolated applications with their own settings
or an in-process transport.

Usage:
    # Production (main.py)
    app = create_app()

    # Tests: fan out to the app itself without opening sockets
    app = create_app(Settings(deadline_ms=100))
    downstream, orchestrator = build_orchestrator(settings, httpx.ASGITransport(app=app))
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from apps.fanout_gateway import __version__
from apps.fanout_gateway.config import Settings, get_settings
from apps.fanout_gateway.routes import router
from apps.fanout_gateway.schemas import HealthResponse, ServiceInfoResponse
from libs.common.logging.middleware import add_trace_id_middleware
from libs.fanout import DownstreamClient, FanOutExecutor, FanOutOrchestrator

logger = logging.getLogger(__name__)


def build_orchestrator(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[DownstreamClient, FanOutOrchestrator]:
    """Create the downstream client and the orchestrator that uses it."""
    client = DownstreamClient(
        settings.downstream_base_url,
        timeout_seconds=settings.http_timeout_seconds,
        max_connections=settings.http_max_connections,
        transport=transport,
    )
    orchestrator = FanOutOrchestrator(FanOutExecutor(client, deadline_ms=settings.deadline_ms))
    return client, orchestrator


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to environment settings)
        transport: Optional httpx transport for downstream calls

    Returns:
        Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            f"Starting {settings.service_name} (version={__version__})",
            extra={
                "context": {
                    "downstream_base_url": settings.downstream_base_url,
                    "deadline_ms": settings.deadline_ms,
                }
            },
        )
        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.service_name}...")
            await app.state.downstream.close()

    app = FastAPI(
        title="Fan-Out Gateway",
        description="Fans /api/1 out to /api/2 and /api/3 under a shared deadline",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    downstream, orchestrator = build_orchestrator(settings, transport)
    app.state.settings = settings
    app.state.downstream = downstream
    app.state.orchestrator = orchestrator

    add_trace_id_middleware(app)
    app.include_router(router)
    app.mount("/metrics", make_asgi_app())

    @app.get("/", response_model=ServiceInfoResponse, tags=["Service"])
    async def root() -> ServiceInfoResponse:
        return ServiceInfoResponse(
            service=settings.service_name,
            version=__version__,
            downstream_base_url=settings.downstream_base_url,
            deadline_ms=settings.deadline_ms,
        )

    @app.get("/health", response_model=HealthResponse, tags=["Service"])
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy", service=settings.service_name, version=__version__)

    return app
