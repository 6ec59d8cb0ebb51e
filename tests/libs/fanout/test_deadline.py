"""Tests for the per-orchestration deadline context."""

from __future__ import annotations

import asyncio

import pytest

from libs.common.exceptions import ConfigurationError
from libs.fanout.deadline import DeadlineContext, new_bounded_context


class TestDeadlineContext:
    @pytest.mark.asyncio()
    async def test_fires_after_duration(self) -> None:
        deadline, _ = new_bounded_context(20)

        await asyncio.wait_for(deadline.wait(), timeout=1.0)

        assert deadline.cancelled
        assert deadline.expired
        assert asyncio.get_running_loop().time() >= deadline.expires_at

    @pytest.mark.asyncio()
    async def test_manual_cancel_before_expiry(self) -> None:
        deadline, cancel = new_bounded_context(10_000)

        cancel()

        assert deadline.cancelled
        assert not deadline.expired
        await asyncio.wait_for(deadline.wait(), timeout=0.1)

    @pytest.mark.asyncio()
    async def test_cancel_is_idempotent(self) -> None:
        deadline, cancel = new_bounded_context(10_000)

        cancel()
        cancel()
        deadline.close()

        assert deadline.cancelled

    @pytest.mark.asyncio()
    async def test_not_cancelled_before_expiry(self) -> None:
        deadline, cancel = new_bounded_context(10_000)
        try:
            assert not deadline.cancelled
            now = asyncio.get_running_loop().time()
            assert now < deadline.expires_at <= now + 10.0
        finally:
            cancel()

    @pytest.mark.asyncio()
    async def test_context_manager_releases_on_exit(self) -> None:
        async with DeadlineContext(10_000) as deadline:
            assert not deadline.cancelled

        assert deadline.cancelled
        assert not deadline.expired

    @pytest.mark.asyncio()
    async def test_context_manager_releases_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            async with DeadlineContext(10_000) as deadline:
                raise RuntimeError("boom")

        assert deadline.cancelled

    @pytest.mark.asyncio()
    async def test_contexts_are_independent(self) -> None:
        short, _ = new_bounded_context(10)
        long, cancel_long = new_bounded_context(10_000)
        try:
            await asyncio.wait_for(short.wait(), timeout=1.0)

            assert short.expired
            assert not long.cancelled
        finally:
            cancel_long()

    @pytest.mark.asyncio()
    async def test_all_waiters_observe_expiry(self) -> None:
        deadline, _ = new_bounded_context(20)

        waiters = [asyncio.create_task(deadline.wait()) for _ in range(5)]
        await asyncio.wait_for(asyncio.gather(*waiters), timeout=1.0)

        assert all(w.done() for w in waiters)

    @pytest.mark.parametrize("duration_ms", [0, -1])
    def test_rejects_non_positive_duration(self, duration_ms: int) -> None:
        with pytest.raises(ConfigurationError, match="must be positive"):
            new_bounded_context(duration_ms)
