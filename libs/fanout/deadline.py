"""Deadline controller: one cancellation context per orchestration.

A DeadlineContext is an asyncio.Event armed with a loop timer. Every call of
a fan-out batch waits on the same context; when the timer fires (or cancel()
is called) all of them observe it at once. Contexts hold no global state, so
deadlines of concurrent orchestrations are independent.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from types import TracebackType

from libs.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class DeadlineContext:
    """Cancellation signal with an absolute expiry.

    Must be created inside a running event loop. Use as an async context
    manager, or call close() on every exit path, to release the timer.

    Example:
        >>> async with DeadlineContext(900) as deadline:
        ...     await deadline.wait()
        >>> deadline.expired
        True
    """

    def __init__(self, duration_ms: int) -> None:
        if duration_ms <= 0:
            raise ConfigurationError(f"Deadline must be positive, got {duration_ms}ms")

        loop = asyncio.get_running_loop()
        self.duration_ms = duration_ms
        # Absolute expiry on the loop clock
        self.expires_at = loop.time() + duration_ms / 1000
        self._event = asyncio.Event()
        self._expired = False
        self._timer: asyncio.TimerHandle | None = loop.call_at(self.expires_at, self._expire)

    @property
    def cancelled(self) -> bool:
        """True once the deadline fired or cancel() was called."""
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        """True if the cancellation came from the timer rather than cancel()."""
        return self._expired

    def cancel(self) -> None:
        """Trigger cancellation early. Idempotent."""
        self._release_timer()
        self._event.set()

    async def wait(self) -> None:
        """Block until the context is cancelled."""
        await self._event.wait()

    def close(self) -> None:
        """Release the timer and cancel any waiter still attached."""
        self.cancel()

    def _expire(self) -> None:
        self._timer = None
        if not self._event.is_set():
            self._expired = True
            logger.debug("Deadline of %dms fired", self.duration_ms)
            self._event.set()

    def _release_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def __aenter__(self) -> DeadlineContext:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


def new_bounded_context(duration_ms: int) -> tuple[DeadlineContext, Callable[[], None]]:
    """Create a deadline context and its cancel function.

    Args:
        duration_ms: Milliseconds until the context cancels itself

    Returns:
        (context, cancel) where cancel() triggers cancellation early

    Raises:
        ConfigurationError: If duration_ms is not positive
    """
    context = DeadlineContext(duration_ms)
    return context, context.cancel
