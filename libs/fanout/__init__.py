"""Fan-out orchestration library.

Runs the independent calls of one logical request concurrently under a
shared deadline and reduces their outcomes to a single all-or-nothing result.

Components (leaf to root):
- DownstreamClient: one outbound call, failures returned as values
- DeadlineContext / new_bounded_context: per-orchestration cancellation
- FanOutExecutor: concurrent dispatch with a join barrier
- Aggregator: all-or-nothing reduction with per-failure diagnostics
- run_bounded: single-call orchestration
- FanOutOrchestrator: executor + aggregator behind the fault boundary
"""

from libs.fanout.aggregator import Aggregator, FailureLog, StructuredFailureLog
from libs.fanout.bounded import run_bounded, simulated_delay
from libs.fanout.client import DownstreamClient
from libs.fanout.deadline import DeadlineContext, new_bounded_context
from libs.fanout.executor import FanOutExecutor
from libs.fanout.orchestrator import FanOutOrchestrator
from libs.fanout.types import (
    BoundedResult,
    CallDescriptor,
    CallError,
    CallOutcome,
    ErrorKind,
    HttpVerb,
    OrchestrationResult,
)

__all__ = [
    "Aggregator",
    "BoundedResult",
    "CallDescriptor",
    "CallError",
    "CallOutcome",
    "DeadlineContext",
    "DownstreamClient",
    "ErrorKind",
    "FailureLog",
    "FanOutExecutor",
    "FanOutOrchestrator",
    "HttpVerb",
    "OrchestrationResult",
    "StructuredFailureLog",
    "new_bounded_context",
    "run_bounded",
    "simulated_delay",
]
