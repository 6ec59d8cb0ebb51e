"""
Fan-out executor: run a batch of calls concurrently under one deadline.

The executor is a join barrier, not a race. Every descriptor produces exactly
one outcome, a failing call never cancels its siblings, and only the shared
deadline (or an abort of the caller) cuts calls short.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from libs.common.logging import log_with_context
from libs.fanout.client import DownstreamClient
from libs.fanout.deadline import new_bounded_context
from libs.fanout.metrics import fanout_downstream_calls_total
from libs.fanout.types import CallDescriptor, CallOutcome

logger = logging.getLogger(__name__)


class FanOutExecutor:
    """
    Dispatch call descriptors in parallel and collect their outcomes.

    One executor can serve any number of concurrent orchestrations: each
    run_all() creates and tears down its own deadline context and result list.

    Example:
        >>> executor = FanOutExecutor(DownstreamClient("http://localhost:8080"), deadline_ms=900)
        >>> outcomes = await executor.run_all(
        ...     [CallDescriptor.get("api/2"), CallDescriptor.get("api/3")]
        ... )
        >>> [o.resource for o in outcomes]
        ['api/2', 'api/3']
    """

    def __init__(self, client: DownstreamClient, deadline_ms: int) -> None:
        """
        Initialize executor.

        Args:
            client: Downstream client used for every call
            deadline_ms: Shared deadline applied to each batch
        """
        self.client = client
        self.deadline_ms = deadline_ms

    async def run_all(self, descriptors: Sequence[CallDescriptor]) -> list[CallOutcome]:
        """
        Execute all descriptors concurrently and wait for every one to settle.

        Args:
            descriptors: Calls of one orchestration, in declaration order

        Returns:
            One outcome per descriptor, in descriptor order (not completion order)

        Raises:
            ConfigurationError: If the deadline cannot be created. Failures
                outside the individual calls propagate to the caller, which
                reports the batch as a single orchestration fault. The first
                such failure is re-raised only after every call has settled.
        """
        deadline, cancel = new_bounded_context(self.deadline_ms)
        try:
            log_with_context(
                logger,
                "DEBUG",
                f"Dispatching {len(descriptors)} calls",
                resources=[d.resource for d in descriptors],
                deadline_ms=self.deadline_ms,
            )
            # gather keeps one result slot per awaitable, in submission order;
            # collecting exceptions makes it wait for every sibling to settle
            results = await asyncio.gather(
                *(self.client.execute(descriptor, deadline) for descriptor in descriptors),
                return_exceptions=True,
            )
        finally:
            cancel()

        for result in results:
            if isinstance(result, BaseException):
                raise result

        outcomes: list[CallOutcome] = list(results)  # type: ignore[arg-type]
        for outcome in outcomes:
            label = "success" if outcome.ok else outcome.error.kind.value  # type: ignore[union-attr]
            fanout_downstream_calls_total.labels(resource=outcome.resource, outcome=label).inc()

        return outcomes
