"""Single-call orchestration: run one unit of work and map it to a result."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from libs.fanout.types import BoundedResult

logger = logging.getLogger(__name__)


async def run_bounded(work: Callable[[], Awaitable[Any]], label: str) -> BoundedResult:
    """
    Run ``work`` to completion and report its value, or a generic failure.

    Faults are logged tagged with ``label``; the caller only learns that the
    operation failed. Task cancellation is not a fault and propagates.

    Args:
        work: Zero-argument coroutine function producing the value
        label: Operation name used in the failure log

    Returns:
        BoundedResult.success(value) or BoundedResult.failure()
    """
    try:
        value = await work()
    except Exception:
        logger.exception(f"Failed {label} request.", extra={"context": {"operation": label}})
        return BoundedResult.failure()

    return BoundedResult.success(value)


def simulated_delay(delay_ms: int) -> Callable[[], Awaitable[int]]:
    """
    Build work that sleeps ``delay_ms`` milliseconds and returns the delay.

    Raises ValueError when run with a negative delay.
    """

    async def work() -> int:
        if delay_ms < 0:
            raise ValueError(f"Delay must be non-negative, got {delay_ms}ms")
        await asyncio.sleep(delay_ms / 1000)
        return delay_ms

    return work
