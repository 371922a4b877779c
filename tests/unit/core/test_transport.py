"""
Unit tests for HttpTransport.

Retries, Retry-After handling, cancellation between attempts and default
headers are exercised against an httpx.MockTransport-backed client.
"""

from __future__ import annotations

import time

import httpx
import pytest

from scc_sdk.auth import BearerTokenAuthenticator, NoAuthAuthenticator
from scc_sdk.core.context import RequestContext
from scc_sdk.core.request import RequestBuilder
from scc_sdk.core.retry import RetryPolicy
from scc_sdk.core.transport import HttpTransport
from scc_sdk.exceptions import DeadlineExceededError, RequestCancelledError, TransportError
from scc_sdk.observability.constants import REQUEST_RETRIES_TOTAL

URL = "https://scc.example.com/settings"


def _request():
    return RequestBuilder("GET").resolve_request_url(URL, "").build()


def _transport(mock_server, policy, **kwargs):
    return HttpTransport(
        mock_server.client(),
        kwargs.pop("authenticator", NoAuthAuthenticator()),
        policy,
        **kwargs,
    )


class TestRetries:
    """Tests for the retry loop."""

    async def test_success_without_retry(self, mock_server):
        """A 200 is returned after a single attempt."""
        mock_server.add(200, json_body={"ok": True})
        transport = _transport(mock_server, RetryPolicy(enabled=True))

        response = await transport.send(_request(), RequestContext())

        assert response.status_code == 200
        assert len(mock_server.requests) == 1

    async def test_retries_503_then_succeeds(self, mock_server, no_sleep, metrics):
        """A 503 is retried and the following 200 returned."""
        mock_server.add(503).add(200, json_body={"ok": True})
        transport = _transport(
            mock_server,
            RetryPolicy(enabled=True, max_retries=3),
            service_name="admin_service_api",
            metrics=metrics,
        )

        response = await transport.send(_request(), RequestContext(), operation="GetSettings")

        assert response.status_code == 200
        assert len(mock_server.requests) == 2
        no_sleep.assert_awaited_once()
        labels = {"service": "admin_service_api", "operation": "GetSettings", "reason": "503"}
        assert metrics.get_counter(REQUEST_RETRIES_TOTAL, labels) == 1

    async def test_retry_after_header_used(self, mock_server, no_sleep):
        """The Retry-After delay replaces the computed back-off."""
        mock_server.add(429, headers={"Retry-After": "2"}).add(200)
        transport = _transport(mock_server, RetryPolicy(enabled=True))

        await transport.send(_request(), RequestContext())

        no_sleep.assert_awaited_once_with(2.0)

    async def test_attempts_bounded(self, mock_server, no_sleep):
        """At most 1 + max_retries attempts are made; the last response is returned."""
        for _ in range(5):
            mock_server.add(500)
        transport = _transport(mock_server, RetryPolicy(enabled=True, max_retries=2))

        response = await transport.send(_request(), RequestContext())

        assert response.status_code == 500
        assert len(mock_server.requests) == 3
        assert no_sleep.await_count == 2

    async def test_501_not_retried(self, mock_server, no_sleep):
        """501 Not Implemented is returned immediately."""
        mock_server.add(501).add(200)
        transport = _transport(mock_server, RetryPolicy(enabled=True))

        response = await transport.send(_request(), RequestContext())

        assert response.status_code == 501
        assert len(mock_server.requests) == 1
        no_sleep.assert_not_awaited()

    async def test_disabled_policy_does_not_retry(self, mock_server, no_sleep):
        """Without retries a 503 is returned as is."""
        mock_server.add(503).add(200)
        transport = _transport(mock_server, RetryPolicy.disabled())

        response = await transport.send(_request(), RequestContext())

        assert response.status_code == 503
        assert len(mock_server.requests) == 1

    async def test_network_error_retried(self, mock_server, no_sleep, metrics):
        """A connection error is retried like a retryable status."""
        mock_server.add_error(httpx.ConnectError("connection refused")).add(200)
        transport = _transport(
            mock_server,
            RetryPolicy(enabled=True),
            service_name="results_reports_api",
            metrics=metrics,
        )

        response = await transport.send(_request(), RequestContext(), operation="GetReport")

        assert response.status_code == 200
        labels = {"service": "results_reports_api", "operation": "GetReport", "reason": "network"}
        assert metrics.get_counter(REQUEST_RETRIES_TOTAL, labels) == 1

    async def test_network_error_exhausted(self, mock_server, no_sleep):
        """A persistent network failure surfaces as TransportError."""
        for _ in range(3):
            mock_server.add_error(httpx.ConnectError("connection refused"))
        transport = _transport(mock_server, RetryPolicy(enabled=True, max_retries=2))

        with pytest.raises(TransportError) as exc_info:
            await transport.send(_request(), RequestContext())

        assert "connection refused" in str(exc_info.value)
        assert exc_info.value.cancelled is False
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(mock_server.requests) == 3


class TestCancellation:
    """Tests for context handling in the transport."""

    async def test_cancelled_before_first_attempt(self, mock_server):
        """A cancelled context sends nothing."""
        ctx = RequestContext()
        ctx.cancel()
        transport = _transport(mock_server, RetryPolicy(enabled=True))

        with pytest.raises(RequestCancelledError):
            await transport.send(_request(), ctx)

        assert mock_server.requests == []

    async def test_cancel_during_attempt_stops_retries(self, mock_server):
        """Cancelling while a retryable attempt runs prevents further attempts."""
        ctx = RequestContext()

        def cancel_and_fail(request):
            ctx.cancel()
            return httpx.Response(503)

        mock_server.add_callback(cancel_and_fail).add(200)
        transport = _transport(mock_server, RetryPolicy(enabled=True))

        with pytest.raises(RequestCancelledError) as exc_info:
            await transport.send(_request(), ctx)

        assert exc_info.value.cancelled is True
        assert len(mock_server.requests) == 1

    async def test_expired_deadline_sends_nothing(self, mock_server):
        """A deadline already in the past fails before the first attempt."""
        ctx = RequestContext(deadline=time.monotonic() - 1)
        transport = _transport(mock_server, RetryPolicy(enabled=True))

        with pytest.raises(DeadlineExceededError):
            await transport.send(_request(), ctx)

        assert mock_server.requests == []

    async def test_deadline_during_backoff_stops_retries(self, mock_server):
        """A deadline shorter than the back-off ends the call after one attempt."""
        mock_server.add(500).add(500).add(200)
        transport = _transport(mock_server, RetryPolicy(enabled=True, max_retries=3))

        with pytest.raises(DeadlineExceededError):
            await transport.send(_request(), RequestContext(timeout=0.3))

        assert len(mock_server.requests) == 1


class TestHeaders:
    """Tests for per-attempt header handling."""

    async def test_default_headers_added_when_absent(self, mock_server):
        """Default headers are added unless the request already has them."""
        mock_server.add(200)
        request = (
            RequestBuilder("GET")
            .resolve_request_url(URL, "")
            .set_header("X-Team", "from-request")
            .build()
        )
        transport = _transport(
            mock_server,
            RetryPolicy.disabled(),
            default_headers={"X-Team": ["default"], "X-Env": ["a", "b"]},
        )

        await transport.send(request, RequestContext())

        sent = mock_server.last_request
        assert sent.headers["X-Team"] == "from-request"
        assert sent.headers["X-Env"] == "a, b"

    async def test_authenticator_applied_on_every_attempt(self, mock_server, no_sleep):
        """Each attempt carries the credentials."""
        mock_server.add(503).add(200)
        transport = _transport(
            mock_server,
            RetryPolicy(enabled=True),
            authenticator=BearerTokenAuthenticator("tok"),
        )

        await transport.send(_request(), RequestContext())

        assert [r.headers["Authorization"] for r in mock_server.requests] == [
            "Bearer tok",
            "Bearer tok",
        ]
