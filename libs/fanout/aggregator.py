"""
Aggregator: reduce the outcomes of a batch to one all-or-nothing result.

Failures are reported through an injected FailureLog so the reduction itself
stays a pure classification over CallOutcome values.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from libs.fanout.types import CallOutcome, ErrorKind, OrchestrationResult


class FailureLog(Protocol):
    """Capability that records one failed call for the operator."""

    def __call__(
        self,
        kind: ErrorKind,
        operation: str,
        resource: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None: ...


class StructuredFailureLog:
    """FailureLog that writes one ERROR record per failure with context fields."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def __call__(
        self,
        kind: ErrorKind,
        operation: str,
        resource: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        self.logger.error(
            f"Failed {operation}: calling {resource} - {message}",
            exc_info=cause,
            extra={
                "context": {
                    "kind": kind.value,
                    "operation": operation,
                    "resource": resource,
                }
            },
        )


class Aggregator:
    """
    All-or-nothing reduction of call outcomes.

    Example:
        >>> aggregator = Aggregator()
        >>> aggregator.reduce(
        ...     "get_api1",
        ...     [CallOutcome.success("api/2", 5), CallOutcome.success("api/3", 7)],
        ... )
        OrchestrationResult(ok=True, values=(5, 7), failure_kind=None)
    """

    def __init__(self, failure_log: FailureLog | None = None) -> None:
        self.failure_log: FailureLog = failure_log or StructuredFailureLog()

    def reduce(self, operation: str, outcomes: Sequence[CallOutcome]) -> OrchestrationResult:
        """
        Combine outcomes into one result.

        Every failed outcome is logged, not only the first. The batch succeeds
        only if all outcomes succeeded; the payload is then built positionally
        in the order the outcomes were given.

        Args:
            operation: Logical operation name used in diagnostics
            outcomes: Outcomes in descriptor order

        Returns:
            Success with ordered values, or a generic failure marker
        """
        first_failure: ErrorKind | None = None

        for outcome in outcomes:
            if outcome.ok:
                continue
            error = outcome.error
            kind = error.kind if error else ErrorKind.ORCHESTRATION_FAULT
            self.failure_log(
                kind,
                operation,
                outcome.resource,
                error.message if error else "Unknown error",
                error.cause if error else None,
            )
            if first_failure is None:
                first_failure = kind

        if first_failure is not None:
            return OrchestrationResult.failure(first_failure)

        return OrchestrationResult.success(tuple(outcome.value for outcome in outcomes))  # type: ignore[misc]
