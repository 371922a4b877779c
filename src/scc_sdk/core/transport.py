# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
HTTP transport with authentication, retries and cancellation.

HttpTransport sends a PreparedRequest through an injected
``httpx.AsyncClient``. Each attempt builds a fresh ``httpx.Request``, lets
the authenticator add credentials, and sends it under the caller's
RequestContext. Transient failures are retried according to the handle's
RetryPolicy; the context is checked before every attempt and observed
during every back-off sleep.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import httpx

from ..auth.base import Authenticator
from ..exceptions import TransportError
from ..observability.collector import SdkMetricsCollector
from .context import RequestContext
from .request import PreparedRequest
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

RETRY_AFTER = "Retry-After"


class HttpTransport:
    """
    Executes prepared requests for one service handle.

    Args:
        client: The shared httpx.AsyncClient
        authenticator: Adds credentials to each attempt
        retry_policy: Retry configuration; read at send time
        default_headers: Headers added when a request does not already carry them
        service_name: Service name used in logs and metric labels
        metrics: Optional metrics collector
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        authenticator: Authenticator,
        retry_policy: RetryPolicy,
        *,
        default_headers: Mapping[str, Sequence[str]] | None = None,
        service_name: str = "",
        metrics: SdkMetricsCollector | None = None,
    ) -> None:
        self.client = client
        self.authenticator = authenticator
        self.retry_policy = retry_policy
        self.default_headers = {k: list(v) for k, v in (default_headers or {}).items()}
        self.service_name = service_name
        self.metrics = metrics

    def _apply_default_headers(self, request: httpx.Request) -> None:
        for name, values in self.default_headers.items():
            if name not in request.headers and values:
                request.headers[name] = ", ".join(values)

    async def send(
        self,
        request: PreparedRequest,
        context: RequestContext,
        *,
        operation: str = "",
        stream: bool = False,
    ) -> httpx.Response:
        """
        Send a request, retrying transient failures.

        Responses with any status code are returned; mapping status codes to
        errors is left to the caller. With ``stream=True`` the body is not
        read and the caller must close the response.

        Args:
            request: The request to send
            context: Cancellation scope for every suspension point
            operation: Operation id for logs and metrics
            stream: Return before reading the body

        Returns:
            The response of the final attempt

        Raises:
            RequestCancelledError: If the context is cancelled
            DeadlineExceededError: If the context deadline passes
            TransportError: If the network fails and no retry remains
        """
        policy = self.retry_policy
        max_attempts = policy.max_attempts
        attempt = 0

        while True:
            context.check()

            http_request = request.to_httpx(self.client)
            self._apply_default_headers(http_request)
            await context.guard(self.authenticator.authenticate(http_request))

            try:
                response = await context.guard(
                    self.client.send(http_request, stream=stream)
                )
            except httpx.HTTPError as e:
                retryable = isinstance(e, httpx.TransportError)
                if not retryable or attempt + 1 >= max_attempts:
                    if policy.enabled and retryable:
                        logger.warning(
                            f"{operation or request.method} {request.url} failed after "
                            f"{attempt + 1} attempts: {e}"
                        )
                    raise TransportError(f"{request.method} {request.url}: {e}") from e
                delay = policy.calculate_backoff(attempt)
                reason = "network"
                logger.info(
                    f"Retrying {operation or request.method} after network error "
                    f"(attempt {attempt + 1}/{max_attempts}, delay {delay:.2f}s): {e}"
                )
            else:
                if attempt + 1 >= max_attempts or not policy.should_retry_status(
                    response.status_code
                ):
                    return response
                delay = policy.retry_delay(attempt, response.headers.get(RETRY_AFTER))
                reason = str(response.status_code)
                logger.info(
                    f"Retrying {operation or request.method} after HTTP "
                    f"{response.status_code} (attempt {attempt + 1}/{max_attempts}, "
                    f"delay {delay:.2f}s)"
                )
                await response.aclose()

            if self.metrics is not None:
                self.metrics.record_retry(self.service_name, operation, reason)
            attempt += 1
            await context.sleep(delay)


__all__ = ["RETRY_AFTER", "HttpTransport"]
