"""
Downstream client: one outbound HTTP call bound to a deadline.

Every failure mode is returned as a CallOutcome rather than raised:
- TRANSPORT_FAILURE: connection refused, DNS error, client timeout
- REMOTE_FAILURE: non-2xx status, or a 2xx body that is not an integer
- CANCELLED: the shared deadline fired before a response arrived

The client never retries.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from libs.common.logging.http_client import TracedHTTPXClient, get_traced_client
from libs.fanout.deadline import DeadlineContext
from libs.fanout.types import CallDescriptor, CallOutcome, ErrorKind, HttpVerb

logger = logging.getLogger(__name__)


class DownstreamClient:
    """
    HTTP client for the services a fan-out batch calls.

    Holds one pooled httpx client for its lifetime; the pool is the only state
    shared between orchestrations and it carries no orchestration data.

    Example:
        >>> client = DownstreamClient("http://localhost:8080")
        >>> async with DeadlineContext(900) as deadline:
        ...     outcome = await client.execute(CallDescriptor.get("api/2"), deadline)
        >>> outcome.ok, outcome.value
        (True, 412)
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        max_connections: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize downstream client.

        Args:
            base_url: Base address every descriptor resource is resolved against
            timeout_seconds: Transport-level timeout; the orchestration deadline
                is normally much shorter and wins
            max_connections: Connection pool size
            transport: Optional httpx transport (tests, in-process ASGI calls)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_seconds
        self._limits = httpx.Limits(
            max_connections=max_connections, max_keepalive_connections=max_connections // 2
        )
        self._transport = transport
        # Created lazily so the client binds to the running loop
        self._client: TracedHTTPXClient | None = None

    async def _get_client(self) -> TracedHTTPXClient:
        if self._client is None or self._client.is_closed:
            self._client = get_traced_client(
                base_url=self.base_url,
                timeout=self.timeout,
                limits=self._limits,
                transport=self._transport,
            )
        return self._client

    async def execute(self, descriptor: CallDescriptor, deadline: DeadlineContext) -> CallOutcome:
        """
        Issue one call and wait for its response or the deadline, whichever is first.

        Args:
            descriptor: What to call
            deadline: Shared cancellation context of the current orchestration

        Returns:
            CallOutcome with the integer body on success, or a classified failure
        """
        if deadline.cancelled:
            return self._cancelled(descriptor, deadline)

        request = asyncio.ensure_future(self._send(descriptor))
        cancellation = asyncio.ensure_future(deadline.wait())
        try:
            await asyncio.wait({request, cancellation}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancellation.cancel()
            if not request.done():
                request.cancel()
            # Both tasks have finished unwinding once execute() returns, so the
            # connection is back in the pool and nothing outlives the call
            await asyncio.gather(request, cancellation, return_exceptions=True)

        if request.cancelled():
            return self._cancelled(descriptor, deadline)

        return request.result()

    async def _send(self, descriptor: CallDescriptor) -> CallOutcome:
        resource = descriptor.resource
        client = await self._get_client()

        try:
            if descriptor.verb is HttpVerb.POST:
                response = await client.post(resource, json=descriptor.payload)
            else:
                response = await client.get(resource)
        except httpx.TimeoutException as e:
            return CallOutcome.failure(resource, ErrorKind.TRANSPORT_FAILURE, "Timeout", e)
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            return CallOutcome.failure(resource, ErrorKind.TRANSPORT_FAILURE, message, e)

        if not response.is_success:
            message = f"HTTP {response.status_code}"
            if response.text:
                message = f"{message}: {response.text}"
            return CallOutcome.failure(resource, ErrorKind.REMOTE_FAILURE, message)

        try:
            value = response.json()
        except ValueError as e:
            return CallOutcome.failure(
                resource, ErrorKind.REMOTE_FAILURE, f"Invalid JSON response: {e}", e
            )

        # bool is an int subclass; reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool):
            return CallOutcome.failure(
                resource,
                ErrorKind.REMOTE_FAILURE,
                f"Expected an integer body, got {type(value).__name__}",
            )

        logger.debug("Call to %s succeeded", resource, extra={"status": response.status_code})
        return CallOutcome.success(resource, value)

    @staticmethod
    def _cancelled(descriptor: CallDescriptor, deadline: DeadlineContext) -> CallOutcome:
        if deadline.expired:
            message = f"Deadline exceeded after {deadline.duration_ms}ms"
        else:
            message = "Cancelled"
        return CallOutcome.failure(descriptor.resource, ErrorKind.CANCELLED, message)

    async def close(self) -> None:
        """Close the pooled HTTP client to release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
