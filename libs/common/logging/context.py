"""Trace ID propagation for request correlation.

A trace ID identifies one inbound request. It is kept in a ContextVar so that
asyncio tasks spawned while handling the request (one per fan-out call) inherit
it, and it is forwarded to downstream services in the X-Trace-ID header.
"""

import contextvars
import uuid

_trace_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)

# HTTP header name for trace ID propagation
TRACE_ID_HEADER = "X-Trace-ID"


def generate_trace_id() -> str:
    """Generate a new unique trace ID (UUID v4 string)."""
    return str(uuid.uuid4())


def get_trace_id() -> str | None:
    """Get the trace ID of the current context, or None if unset."""
    return _trace_id_var.get()


def set_trace_id(trace_id: str) -> None:
    """Set the trace ID for the current context.

    Raises:
        ValueError: If trace_id is empty or None
    """
    if not trace_id:
        raise ValueError("Trace ID cannot be empty")
    _trace_id_var.set(trace_id)


def clear_trace_id() -> None:
    """Clear the trace ID from the current context."""
    _trace_id_var.set(None)
