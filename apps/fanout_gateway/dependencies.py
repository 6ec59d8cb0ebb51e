"""FastAPI dependencies resolving components stored on app.state."""

from __future__ import annotations

from fastapi import Request

from apps.fanout_gateway.config import Settings
from libs.fanout import FanOutOrchestrator


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings  # type: ignore[no-any-return]


def get_orchestrator(request: Request) -> FanOutOrchestrator:
    """Return the fan-out orchestrator shared by all requests."""
    return request.app.state.orchestrator  # type: ignore[no-any-return]
