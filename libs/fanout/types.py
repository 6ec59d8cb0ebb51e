"""Value types shared by the fan-out components.

Failures travel as data: a call either produces a CallOutcome with a value or
one with a classified CallError. Nothing in the fan-out path raises for an
individual call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class HttpVerb(str, Enum):
    """HTTP methods a call descriptor may use."""

    GET = "GET"
    POST = "POST"


class ErrorKind(str, Enum):
    """Classification of a failed call or orchestration."""

    TRANSPORT_FAILURE = "transport_failure"  # downstream could not be reached
    REMOTE_FAILURE = "remote_failure"  # downstream answered with an error
    CANCELLED = "cancelled"  # deadline or explicit cancel fired first
    ORCHESTRATION_FAULT = "orchestration_fault"  # failure outside the individual calls


@dataclass(frozen=True)
class CallDescriptor:
    """One outbound call of a fan-out batch.

    Attributes:
        resource: Path relative to the downstream base URL (e.g. "api/2")
        verb: HTTP method
        payload: JSON body, only sent for POST
    """

    resource: str
    verb: HttpVerb = HttpVerb.GET
    payload: Any | None = None

    @classmethod
    def get(cls, resource: str) -> CallDescriptor:
        return cls(resource=resource, verb=HttpVerb.GET)

    @classmethod
    def post(cls, resource: str, payload: Any) -> CallDescriptor:
        return cls(resource=resource, verb=HttpVerb.POST, payload=payload)


@dataclass(frozen=True)
class CallError:
    """Why a call failed."""

    kind: ErrorKind
    message: str
    cause: BaseException | None = None


@dataclass(frozen=True)
class CallOutcome:
    """Terminal result of one call: a value when ok, an error otherwise."""

    resource: str
    ok: bool
    value: int | None = None
    error: CallError | None = None

    @classmethod
    def success(cls, resource: str, value: int) -> CallOutcome:
        return cls(resource=resource, ok=True, value=value)

    @classmethod
    def failure(
        cls,
        resource: str,
        kind: ErrorKind,
        message: str,
        cause: BaseException | None = None,
    ) -> CallOutcome:
        return cls(resource=resource, ok=False, error=CallError(kind, message, cause))


@dataclass(frozen=True)
class OrchestrationResult:
    """Combined outcome of a fan-out batch.

    On success, ``values`` holds one value per descriptor in declaration order.
    On failure it is empty and ``failure_kind`` records the first failure kind
    seen; per-call details only ever reach the operator log.
    """

    ok: bool
    values: tuple[int, ...] = ()
    failure_kind: ErrorKind | None = None

    @classmethod
    def success(cls, values: tuple[int, ...]) -> OrchestrationResult:
        return cls(ok=True, values=values)

    @classmethod
    def failure(cls, kind: ErrorKind) -> OrchestrationResult:
        return cls(ok=False, failure_kind=kind)


@dataclass(frozen=True)
class BoundedResult:
    """Result of a single bounded operation."""

    ok: bool
    value: Any | None = None

    @classmethod
    def success(cls, value: Any) -> BoundedResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls) -> BoundedResult:
        return cls(ok=False)
