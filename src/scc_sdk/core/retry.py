# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Retry policy for transient request failures.

A request is retried when the network fails for a reason other than
cancellation, when the server answers 429, or when it answers with a 5xx
status other than 501. Delays grow exponentially with a small jitter and
never exceed ``max_retry_interval``; a parseable ``Retry-After`` header
replaces the computed delay (still capped).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 4
"""Retries used when a policy is enabled with max_retries=0."""

DEFAULT_MAX_RETRY_INTERVAL = 30.0
"""Back-off cap in seconds used when a policy is enabled with max_retry_interval=0."""

DEFAULT_BASE_DELAY = 1.0
"""Delay before the first retry, in seconds."""

BACKOFF_JITTER_FACTOR = 0.1
"""Upper bound of the jitter, as a fraction of the computed delay."""


def is_retryable_status(status_code: int) -> bool:
    """Return True for 429 and for 5xx responses other than 501 Not Implemented."""
    if status_code == 429:
        return True
    return 500 <= status_code < 600 and status_code != 501


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """
    Parse a Retry-After header value.

    Args:
        value: Delta-seconds (``"120"``) or an HTTP-date
        now: Reference time for HTTP-dates, defaults to the current UTC time

    Returns:
        Non-negative delay in seconds, or None if the value is absent or unparseable
    """
    if not value:
        return None
    value = value.strip()

    if value.isdigit():
        return float(value)

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring unparseable Retry-After header: {value!r}")
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0.0, (when - now).total_seconds())


@dataclass
class RetryPolicy:
    """
    Retry configuration of a service handle.

    A value of 0 for ``max_retries`` or ``max_retry_interval`` selects the
    default. A request makes at most ``1 + max_retries`` attempts.
    """

    enabled: bool = False
    """Whether failed requests are retried at all."""

    max_retries: int = DEFAULT_MAX_RETRIES
    """Maximum number of retries after the first attempt."""

    max_retry_interval: float = DEFAULT_MAX_RETRY_INTERVAL
    """Maximum single back-off delay in seconds."""

    base_delay: float = DEFAULT_BASE_DELAY
    """Delay before the first retry, doubled on each further retry."""

    status_predicate: Callable[[int], bool] = is_retryable_status
    """Decides which HTTP status codes are retried."""

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.max_retry_interval < 0:
            raise ValueError("max_retry_interval must be non-negative")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")
        if self.max_retries == 0:
            self.max_retries = DEFAULT_MAX_RETRIES
        if self.max_retry_interval == 0:
            self.max_retry_interval = DEFAULT_MAX_RETRY_INTERVAL

    @classmethod
    def disabled(cls) -> RetryPolicy:
        return cls(enabled=False)

    @property
    def max_attempts(self) -> int:
        """Total attempts allowed for one request."""
        return 1 + self.max_retries if self.enabled else 1

    def should_retry_status(self, status_code: int) -> bool:
        return self.enabled and self.status_predicate(status_code)

    def calculate_backoff(self, attempt: int) -> float:
        """
        Calculate the exponential back-off delay for a retry.

        Args:
            attempt: Number of attempts already made minus one (0-based)

        Returns:
            Delay in seconds, never above max_retry_interval
        """
        delay = self.base_delay * (2.0**attempt)
        # Add small jitter to prevent thundering herd
        delay += delay * BACKOFF_JITTER_FACTOR * (time.time() % 1)
        delay = min(delay, self.max_retry_interval)
        logger.debug(f"Calculated backoff for attempt {attempt}: {delay:.2f}s")
        return delay

    def retry_delay(self, attempt: int, retry_after: str | None = None) -> float:
        """Return the delay before the next attempt, preferring Retry-After."""
        parsed = parse_retry_after(retry_after)
        if parsed is not None:
            return min(parsed, self.max_retry_interval)
        return self.calculate_backoff(attempt)


__all__ = [
    "BACKOFF_JITTER_FACTOR",
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MAX_RETRY_INTERVAL",
    "RetryPolicy",
    "is_retryable_status",
    "parse_retry_after",
]
