# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request context: cancellation and deadlines for in-flight operations.

Every suspension point of an operation (token fetch, HTTP send, body read,
retry back-off sleep) runs through a RequestContext so that a cancelled
context or an expired deadline stops the operation at the next await.

Usage:
    >>> ctx = RequestContext(timeout=10.0)
    >>> response = await service.get_report(options, context=ctx)

    From another task:
    >>> ctx.cancel()
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable
from typing import TypeVar

from ..exceptions import DeadlineExceededError, RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestContext:
    """
    Cancellation handle with an optional deadline.

    Deadlines are measured on the monotonic clock. A context is not bound to
    an event loop, so one instance may be shared by several operations; once
    cancelled it stays cancelled.

    Args:
        timeout: Seconds from now until the deadline
        deadline: Absolute deadline as a ``time.monotonic()`` value

    Raises:
        ValueError: If both timeout and deadline are given, or timeout is negative
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        deadline: float | None = None,
    ) -> None:
        if timeout is not None and deadline is not None:
            raise ValueError("Specify either timeout or deadline, not both")
        if timeout is not None:
            if timeout < 0:
                raise ValueError("timeout must be non-negative")
            deadline = time.monotonic() + timeout

        self._deadline = deadline
        self._cancelled = False
        self._waiters: set[asyncio.Future[None]] = set()

    @classmethod
    def background(cls) -> RequestContext:
        """Return a fresh context that is never cancelled and has no deadline."""
        return cls()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        """Cancel the context and wake every operation waiting on it."""
        if self._cancelled:
            return
        self._cancelled = True
        for waiter in list(self._waiters):
            loop = waiter.get_loop()
            loop.call_soon_threadsafe(_release, waiter)
        logger.debug("Request context cancelled")

    def check(self) -> None:
        """
        Raise if the context can no longer be used.

        Raises:
            RequestCancelledError: If cancel() was called
            DeadlineExceededError: If the deadline has passed
        """
        if self._cancelled:
            raise RequestCancelledError()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise DeadlineExceededError()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Await ``awaitable`` unless the context is cancelled or times out first.

        The wrapped operation is cancelled when the context wins the race.

        Raises:
            RequestCancelledError: If the context is cancelled
            DeadlineExceededError: If the deadline passes
        """
        try:
            self.check()
        except (RequestCancelledError, DeadlineExceededError):
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise

        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(awaitable)
        waiter: asyncio.Future[None] = loop.create_future()
        self._waiters.add(waiter)
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise  # Always re-raise for graceful shutdown
        finally:
            self._waiters.discard(waiter)
            if not waiter.done():
                waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        self.check()
        raise DeadlineExceededError()

    async def sleep(self, delay: float) -> None:
        """Sleep for ``delay`` seconds, waking early on cancellation or deadline."""
        await self.guard(asyncio.sleep(delay))

    def __repr__(self) -> str:
        return (
            f"RequestContext(cancelled={self._cancelled}, "
            f"remaining={self.remaining()})"
        )


def _release(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)


__all__ = ["RequestContext"]
