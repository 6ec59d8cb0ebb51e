"""
Fan-out orchestrator: executor and aggregator behind one fault boundary.

Nothing raised inside an orchestration escapes run(): unexpected faults are
logged and turned into a generic ORCHESTRATION_FAULT result.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from libs.fanout.aggregator import Aggregator
from libs.fanout.executor import FanOutExecutor
from libs.fanout.metrics import (
    fanout_orchestration_duration_seconds,
    fanout_orchestrations_total,
)
from libs.fanout.types import CallDescriptor, ErrorKind, OrchestrationResult

logger = logging.getLogger(__name__)


class FanOutOrchestrator:
    """
    Run one logical request as a fan-out batch and return a single result.

    Example:
        >>> orchestrator = FanOutOrchestrator(FanOutExecutor(client, deadline_ms=900))
        >>> result = await orchestrator.run(
        ...     "get_api1", [CallDescriptor.get("api/2"), CallDescriptor.get("api/3")]
        ... )
        >>> result.ok
        True
    """

    def __init__(self, executor: FanOutExecutor, aggregator: Aggregator | None = None) -> None:
        self.executor = executor
        self.aggregator = aggregator or Aggregator()

    async def run(self, operation: str, descriptors: Sequence[CallDescriptor]) -> OrchestrationResult:
        """
        Dispatch, join and aggregate.

        Args:
            operation: Logical operation name for diagnostics and metrics
            descriptors: Calls to make, in the order the payload expects them

        Returns:
            OrchestrationResult; never raises for call or setup failures
        """
        start = time.perf_counter()
        try:
            outcomes = await self.executor.run_all(descriptors)
            result = self.aggregator.reduce(operation, outcomes)
        except Exception:
            logger.exception(
                f"Failed {operation} request.",
                extra={"context": {"operation": operation, "kind": ErrorKind.ORCHESTRATION_FAULT.value}},
            )
            result = OrchestrationResult.failure(ErrorKind.ORCHESTRATION_FAULT)

        fanout_orchestration_duration_seconds.labels(operation=operation).observe(
            time.perf_counter() - start
        )
        fanout_orchestrations_total.labels(
            operation=operation, status="success" if result.ok else "failure"
        ).inc()

        return result
