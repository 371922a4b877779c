"""
Unit tests for RequestContext.

Covers deadline and cancellation checks, guard() racing an awaitable
against the context, and sleep() waking early.
"""

from __future__ import annotations

import asyncio
import inspect
import time

import pytest

from scc_sdk.core.context import RequestContext
from scc_sdk.exceptions import DeadlineExceededError, RequestCancelledError


async def _value(result: str, delay: float = 0.0) -> str:
    await asyncio.sleep(delay)
    return result


class TestConstruction:
    """Tests for RequestContext construction."""

    def test_background_has_no_deadline(self):
        """A background context never expires."""
        ctx = RequestContext.background()
        assert ctx.deadline is None
        assert ctx.remaining() is None
        assert ctx.cancelled is False
        ctx.check()

    def test_timeout_sets_deadline(self):
        """timeout is converted to a monotonic deadline."""
        before = time.monotonic()
        ctx = RequestContext(timeout=5.0)
        assert ctx.deadline is not None
        assert before + 5.0 <= ctx.deadline <= time.monotonic() + 5.0
        remaining = ctx.remaining()
        assert remaining is not None
        assert 0 < remaining <= 5.0

    def test_timeout_and_deadline_are_exclusive(self):
        """Passing both timeout and deadline is rejected."""
        with pytest.raises(ValueError):
            RequestContext(timeout=1.0, deadline=time.monotonic() + 1.0)

    def test_negative_timeout_rejected(self):
        """A negative timeout is rejected."""
        with pytest.raises(ValueError):
            RequestContext(timeout=-1.0)


class TestCheck:
    """Tests for check()."""

    def test_cancelled_context_raises(self):
        """check() raises RequestCancelledError after cancel()."""
        ctx = RequestContext()
        ctx.cancel()
        assert ctx.cancelled is True
        with pytest.raises(RequestCancelledError):
            ctx.check()

    def test_cancel_is_idempotent(self):
        """Cancelling twice is harmless."""
        ctx = RequestContext()
        ctx.cancel()
        ctx.cancel()
        assert ctx.cancelled is True

    def test_expired_deadline_raises(self):
        """check() raises DeadlineExceededError once the deadline passed."""
        ctx = RequestContext(deadline=time.monotonic() - 1.0)
        with pytest.raises(DeadlineExceededError):
            ctx.check()

    def test_cancellation_wins_over_deadline(self):
        """A cancelled context reports cancellation even if it also expired."""
        ctx = RequestContext(deadline=time.monotonic() - 1.0)
        ctx.cancel()
        with pytest.raises(RequestCancelledError):
            ctx.check()


class TestGuard:
    """Tests for guard() and sleep()."""

    async def test_returns_result(self):
        """guard() returns the awaited value."""
        ctx = RequestContext(timeout=5.0)
        assert await ctx.guard(_value("ok")) == "ok"

    async def test_propagates_exceptions(self):
        """Exceptions of the guarded awaitable propagate unchanged."""

        async def fail() -> None:
            raise KeyError("boom")

        with pytest.raises(KeyError):
            await RequestContext().guard(fail())

    async def test_cancelled_context_closes_coroutine(self):
        """A guarded coroutine is closed, never started, on a cancelled context."""
        ctx = RequestContext()
        ctx.cancel()
        coro = _value("never")
        with pytest.raises(RequestCancelledError):
            await ctx.guard(coro)
        assert inspect.getcoroutinestate(coro) == inspect.CORO_CLOSED

    async def test_cancel_interrupts_guarded_await(self):
        """cancel() from another task stops a pending guard()."""
        ctx = RequestContext()
        task = asyncio.create_task(ctx.guard(_value("late", delay=10.0)))
        await asyncio.sleep(0)

        ctx.cancel()

        with pytest.raises(RequestCancelledError):
            await asyncio.wait_for(task, timeout=2.0)

    async def test_deadline_interrupts_guarded_await(self):
        """An expiring deadline stops a pending guard()."""
        ctx = RequestContext(timeout=0.05)
        started = time.monotonic()
        with pytest.raises(DeadlineExceededError):
            await ctx.guard(_value("late", delay=10.0))
        assert time.monotonic() - started < 2.0

    async def test_outer_cancellation_propagates(self):
        """asyncio cancellation of the calling task is re-raised untouched."""
        ctx = RequestContext()
        task = asyncio.create_task(ctx.guard(_value("late", delay=10.0)))
        await asyncio.sleep(0)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_sleep_completes(self):
        """sleep() returns normally for a live context."""
        await RequestContext(timeout=5.0).sleep(0)

    async def test_sleep_wakes_on_cancel(self):
        """sleep() raises promptly once the context is cancelled."""
        ctx = RequestContext()
        task = asyncio.create_task(ctx.sleep(30.0))
        await asyncio.sleep(0)

        ctx.cancel()

        with pytest.raises(RequestCancelledError):
            await asyncio.wait_for(task, timeout=2.0)
