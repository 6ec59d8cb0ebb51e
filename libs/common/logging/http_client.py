"""HTTP client with automatic trace ID propagation.

Outbound fan-out calls carry the trace ID of the inbound request, so the
downstream service logs under the same ID.

Example:
    >>> async with get_traced_client(base_url="http://localhost:8080") as client:
    ...     response = await client.get("api/2")
    ...     # Request includes X-Trace-ID header automatically
"""

from typing import Any

import httpx

from libs.common.logging.context import TRACE_ID_HEADER, get_trace_id


class TracedHTTPXClient(httpx.AsyncClient):
    """httpx.AsyncClient that injects the current trace ID into every request."""

    async def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response:
        trace_id = get_trace_id()
        if trace_id and TRACE_ID_HEADER not in request.headers:
            request.headers[TRACE_ID_HEADER] = trace_id

        return await super().send(request, **kwargs)


def get_traced_client(
    base_url: str | None = None,
    timeout: float = 10.0,
    **kwargs: Any,
) -> TracedHTTPXClient:
    """Create a traced async HTTP client.

    Args:
        base_url: Base URL for all requests (optional)
        timeout: Request timeout in seconds
        **kwargs: Additional httpx.AsyncClient parameters (limits, transport, ...)

    Returns:
        Configured TracedHTTPXClient instance
    """
    client_kwargs: dict[str, Any] = {"timeout": timeout, **kwargs}
    if base_url is not None:
        client_kwargs["base_url"] = base_url

    return TracedHTTPXClient(**client_kwargs)
