"""ASGI middleware for trace ID extraction and injection.

Example:
    >>> from fastapi import FastAPI
    >>> from libs.common.logging.middleware import add_trace_id_middleware
    >>>
    >>> app = FastAPI()
    >>> add_trace_id_middleware(app)
"""

from collections.abc import Callable

from fastapi import FastAPI
from starlette.types import ASGIApp

from libs.common.logging.context import (
    TRACE_ID_HEADER,
    clear_trace_id,
    generate_trace_id,
    set_trace_id,
)


class ASGITraceIDMiddleware:
    """Manage the trace ID of each HTTP request.

    Reads X-Trace-ID from the request (or generates one), makes it the current
    trace ID while the request is handled and echoes it on the response,
    including responses produced by exception handlers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        trace_id_bytes = headers.get(TRACE_ID_HEADER.lower().encode())
        trace_id = trace_id_bytes.decode() if trace_id_bytes else generate_trace_id()

        set_trace_id(trace_id)

        async def send_with_trace_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((TRACE_ID_HEADER.lower().encode(), trace_id.encode()))
                message["headers"] = response_headers

            await send(message)

        try:
            await self.app(scope, receive, send_with_trace_id)
        finally:
            clear_trace_id()


def add_trace_id_middleware(app: FastAPI) -> None:
    """Install ASGITraceIDMiddleware on a FastAPI application."""
    app.add_middleware(ASGITraceIDMiddleware)
