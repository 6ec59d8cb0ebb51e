"""
API endpoints of the Fan-Out Gateway.

/api/1 is the fan-out entry point; /api/2 and /api/3 are the single-call
endpoints it targets. Every failure maps to an empty 500: diagnostics go to
the log only.
"""

from __future__ import annotations

import logging
import random
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import StrictInt

from apps.fanout_gateway.config import Settings
from apps.fanout_gateway.dependencies import get_app_settings, get_orchestrator
from apps.fanout_gateway.schemas import Api1PostRequest, Api1Response
from libs.fanout import (
    CallDescriptor,
    FanOutOrchestrator,
    OrchestrationResult,
    run_bounded,
    simulated_delay,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Api"])

API2_RESOURCE = "api/2"
API3_RESOURCE = "api/3"

_FAILURE_RESPONSES: dict[int | str, dict[str, str]] = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Any downstream or internal failure"}
}


def _internal_error() -> Response:
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _api1_response(result: OrchestrationResult) -> Api1Response | Response:
    if not result.ok:
        return _internal_error()
    api2_value, api3_value = result.values
    return Api1Response(api2_value=api2_value, api3_value=api3_value)


def _random_delay(settings: Settings) -> int:
    return random.randrange(settings.random_delay_min_ms, settings.random_delay_max_ms)


# =============================================================================
# Fan-out endpoints
# =============================================================================


@router.get("/1", response_model=Api1Response, responses=_FAILURE_RESPONSES)
async def get_api1(
    orchestrator: Annotated[FanOutOrchestrator, Depends(get_orchestrator)],
) -> Api1Response | Response:
    """Call GET api/2 and GET api/3 in parallel and compose their values."""
    result = await orchestrator.run(
        "get_api1",
        [CallDescriptor.get(API2_RESOURCE), CallDescriptor.get(API3_RESOURCE)],
    )
    return _api1_response(result)


@router.post("/1", response_model=Api1Response, responses=_FAILURE_RESPONSES)
async def post_api1(
    body: Api1PostRequest,
    orchestrator: Annotated[FanOutOrchestrator, Depends(get_orchestrator)],
) -> Api1Response | Response:
    """Forward each delay to POST api/2 and POST api/3 in parallel."""
    result = await orchestrator.run(
        "post_api1",
        [
            CallDescriptor.post(API2_RESOURCE, body.api2_delay),
            CallDescriptor.post(API3_RESOURCE, body.api3_delay),
        ],
    )
    return _api1_response(result)


# =============================================================================
# Single-call endpoints
# =============================================================================


async def _delayed(delay_ms: int, label: str) -> int | Response:
    result = await run_bounded(simulated_delay(delay_ms), label)
    if not result.ok:
        return _internal_error()
    return result.value  # type: ignore[no-any-return]


@router.get("/2", response_model=int, responses=_FAILURE_RESPONSES)
async def get_api2(settings: Annotated[Settings, Depends(get_app_settings)]) -> int | Response:
    """Sleep for a random delay and return it."""
    return await _delayed(_random_delay(settings), "get_api2")


@router.get("/3", response_model=int, responses=_FAILURE_RESPONSES)
async def get_api3(settings: Annotated[Settings, Depends(get_app_settings)]) -> int | Response:
    """Sleep for a random delay and return it."""
    return await _delayed(_random_delay(settings), "get_api3")


@router.post("/2", response_model=int, responses=_FAILURE_RESPONSES)
async def post_api2(delay: Annotated[StrictInt, Body()]) -> int | Response:
    """Sleep for the posted delay (ms) and return it."""
    return await _delayed(delay, "post_api2")


@router.post("/3", response_model=int, responses=_FAILURE_RESPONSES)
async def post_api3(delay: Annotated[StrictInt, Body()]) -> int | Response:
    """Sleep for the posted delay (ms) and return it."""
    return await _delayed(delay, "post_api3")
