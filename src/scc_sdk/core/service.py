# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base service handle and operation dispatcher.

BaseService holds the per-service state (URL, authenticator, retry policy,
gzip flag, default headers, HTTP client) and implements ``_invoke``, the
single code path every generated operation goes through:

    build request -> send (auth, retries, cancellation) -> map status -> decode

Service classes subclass it, set the class-level identity constants and
add one thin async method per operation.
"""

from __future__ import annotations

import asyncio
import copy
import dataclasses
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any, ClassVar

import httpx
from typing_extensions import Self

from ..auth.base import Authenticator
from ..auth.factory import get_authenticator_from_environment
from ..config import read_external_sources
from ..exceptions import (
    DecodeError,
    HttpStatusError,
    SccError,
    ValidationError,
)
from ..observability.collector import SdkMetricsCollector, get_metrics_collector
from .context import RequestContext
from .headers import get_sdk_headers
from .request import ACCEPT, RequestBuilder
from .response import DetailedResponse, ResponseStream
from .retry import RetryPolicy
from .transport import HttpTransport
from .url import construct_service_url

logger = logging.getLogger(__name__)

CORRELATION_ID = "X-Correlation-Id"
JSON_MIME = "application/json"

DEFAULT_TIMEOUT = 60.0
"""Default httpx timeout in seconds for clients created by a service."""

MAX_ERROR_TEXT_BYTES = 4096
"""Largest non-JSON error body kept on HttpStatusError."""


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        pass
    content = response.content
    if not content or len(content) > MAX_ERROR_TEXT_BYTES:
        return None
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _error_message(body: Any, response: httpx.Response) -> str:
    """Pick the most specific error message from a standard error body."""
    if isinstance(body, Mapping):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], Mapping):
            message = errors[0].get("message")
            if isinstance(message, str) and message:
                return message
        for key in ("error", "message", "errorMessage"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, Mapping) and isinstance(value.get("message"), str):
                return value["message"]
    return response.reason_phrase or "Unknown error"


class BaseService:
    """
    State and request pipeline shared by all SCC service handles.

    Handles are async context managers; leaving the context closes the HTTP
    client if the handle created it. Handle state must not be changed while
    requests are in flight.

    Args:
        authenticator: Adds credentials to every request
        service_url: Base URL, defaults to DEFAULT_SERVICE_URL
        http_client: Optional httpx.AsyncClient; the handle creates and owns one
            when omitted
        disable_ssl_verification: Skip TLS verification on the created client
        metrics: Metrics collector, defaults to the global collector
        metrics_enabled: Set to False to record no metrics

    Raises:
        ValidationError: If authenticator is None
    """

    DEFAULT_SERVICE_URL: ClassVar[str] = ""
    DEFAULT_SERVICE_NAME: ClassVar[str] = ""
    SERVICE_VERSION: ClassVar[str] = ""
    PARAMETERIZED_SERVICE_URL: ClassVar[str] = ""
    DEFAULT_URL_VARIABLES: ClassVar[Mapping[str, str]] = {}

    def __init__(
        self,
        authenticator: Authenticator | None,
        *,
        service_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        disable_ssl_verification: bool = False,
        metrics: SdkMetricsCollector | None = None,
        metrics_enabled: bool = True,
    ) -> None:
        if authenticator is None:
            raise ValidationError("authenticator must be provided")
        self.authenticator = authenticator
        self._owns_authenticator = False
        self.service_url = self.DEFAULT_SERVICE_URL if service_url is None else service_url
        self.retry_policy = RetryPolicy.disabled()
        self.enable_gzip_compression = False
        self.default_headers: dict[str, list[str]] = {}
        self.disable_ssl_verification = disable_ssl_verification
        self._client = http_client
        self._owns_client = http_client is None
        self._retired_clients: list[httpx.AsyncClient] = []
        self.metrics: SdkMetricsCollector | None = None
        if metrics_enabled:
            self.metrics = metrics if metrics is not None else get_metrics_collector()

    # =========================================================================
    # Construction from external configuration
    # =========================================================================

    @classmethod
    def new_instance(
        cls,
        service_name: str | None = None,
        authenticator: Authenticator | None = None,
        **kwargs: Any,
    ) -> Self:
        """
        Create a handle configured from the credentials file or environment.

        An authenticator built from configuration belongs to the handle and is
        closed by aclose(); one passed in by the caller is not.

        Args:
            service_name: Property prefix, defaults to DEFAULT_SERVICE_NAME
            authenticator: Authenticator to use instead of the configured one
            **kwargs: Passed to the constructor

        Raises:
            ValidationError: If the configuration is missing or invalid
        """
        service_name = service_name or cls.DEFAULT_SERVICE_NAME
        owns_authenticator = authenticator is None
        if authenticator is None:
            authenticator = get_authenticator_from_environment(service_name)
        service = cls(authenticator, **kwargs)
        service._owns_authenticator = owns_authenticator
        service.configure_service(service_name)
        return service

    def configure_service(self, service_name: str) -> None:
        """Apply URL, TLS, gzip and retry properties from external configuration."""
        props = read_external_sources(service_name)
        if props is None:
            return
        if props.url:
            self.set_service_url(props.url)
        if props.disable_ssl:
            self.set_disable_ssl_verification(True)
        if props.enable_gzip is not None:
            self.set_enable_gzip_compression(props.enable_gzip)
        if props.enable_retries:
            self.enable_retries(
                max_retries=props.max_retries or 0,
                max_retry_interval=props.retry_interval or 0,
            )
        logger.debug(f"Applied external configuration for {service_name}")

    @classmethod
    def construct_service_url(
        cls, provided_url_variables: Mapping[str, str] | None = None
    ) -> str:
        """
        Build a service URL from the parameterized template.

        Raises:
            ValidationError: If a variable name is not recognised
        """
        return construct_service_url(
            cls.PARAMETERIZED_SERVICE_URL,
            cls.DEFAULT_URL_VARIABLES,
            provided_url_variables,
        )

    @staticmethod
    def get_service_url_for_region(region: str) -> str:
        """Regional URLs are not published for SCC services."""
        raise ValidationError("service does not support regional URLs")

    # =========================================================================
    # Handle state
    # =========================================================================

    def set_service_url(self, service_url: str) -> None:
        """Set the base URL; an empty URL makes every request fail with UrlMissingError."""
        self.service_url = service_url

    def get_service_url(self) -> str:
        return self.service_url

    def set_default_headers(self, headers: Mapping[str, str | Sequence[str]] | None) -> None:
        """Set headers added to every request that does not already carry them."""
        self.default_headers = {}
        for name, value in (headers or {}).items():
            self.default_headers[name] = [value] if isinstance(value, str) else list(value)

    def set_enable_gzip_compression(self, enabled: bool) -> None:
        self.enable_gzip_compression = enabled

    def get_enable_gzip_compression(self) -> bool:
        return self.enable_gzip_compression

    def enable_retries(self, max_retries: int = 0, max_retry_interval: float = 0) -> None:
        """
        Retry transient failures.

        Args:
            max_retries: Retries after the first attempt; 0 selects the default (4)
            max_retry_interval: Longest back-off in seconds; 0 selects the default (30)
        """
        self.retry_policy = RetryPolicy(
            enabled=True,
            max_retries=max_retries,
            max_retry_interval=max_retry_interval,
        )

    def disable_retries(self) -> None:
        self.retry_policy = RetryPolicy.disabled()

    def set_disable_ssl_verification(self, disabled: bool) -> None:
        """Toggle TLS verification; an owned client is recreated on next use."""
        if disabled != self.disable_ssl_verification and self._owns_client:
            self._discard_client()
        self.disable_ssl_verification = disabled

    def set_http_client(self, client: httpx.AsyncClient) -> None:
        """Use a caller-managed client; the handle will not close it."""
        self._discard_client()
        self._client = client
        self._owns_client = False

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The HTTP client, created on first use when none was injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=not self.disable_ssl_verification,
                timeout=DEFAULT_TIMEOUT,
            )
            self._owns_client = True
        return self._client

    def _discard_client(self) -> None:
        client = self._client
        self._client = None
        if client is not None and self._owns_client:
            # Closed by aclose(); requests may still be using it
            self._retired_clients.append(client)

    def clone(self) -> Self:
        """
        Return a distinct handle with the same URL and authenticator.

        The clone has its own retry policy, default headers and gzip flag. It
        shares the HTTP client and authenticator but never closes them.
        """
        clone = copy.copy(self)
        clone.retry_policy = dataclasses.replace(self.retry_policy)
        clone.default_headers = {k: list(v) for k, v in self.default_headers.items()}
        clone._client = self.http_client
        clone._owns_client = False
        clone._owns_authenticator = False
        clone._retired_clients = []
        return clone

    async def aclose(self) -> None:
        """Close the HTTP client and authenticator if this handle created them."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
        while self._retired_clients:
            await self._retired_clients.pop().aclose()
        if self._owns_authenticator:
            self._owns_authenticator = False
            await self.authenticator.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # =========================================================================
    # Dispatcher
    # =========================================================================

    def _new_transport(self) -> HttpTransport:
        return HttpTransport(
            self.http_client,
            self.authenticator,
            self.retry_policy,
            default_headers=self.default_headers,
            service_name=self.DEFAULT_SERVICE_NAME,
            metrics=self.metrics,
        )

    async def _invoke(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        path_params: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        correlation_id: str | None = None,
        body: Any = None,
        content_type: str = JSON_MIME,
        accept: str = JSON_MIME,
        decoder: Callable[[Any], Any] | None = None,
        stream: bool = False,
        context: RequestContext | None = None,
    ) -> DetailedResponse[Any]:
        """
        Run one operation through the request pipeline.

        Args:
            operation: Operation id, e.g. ``"GetReport"``
            method: HTTP method
            path: Path template relative to the service URL
            path_params: Values for the path template
            query: Query parameters; None values are omitted
            headers: Caller headers, applied last so they override defaults
            correlation_id: Sent as X-Correlation-Id when set
            body: JSON body (model, list of models, or plain JSON value)
            content_type: Content-Type of the body
            accept: Accept header value
            decoder: Turns the decoded JSON into the result model
            stream: Hand the body to the caller as a ResponseStream
            context: Cancellation scope; a fresh background scope when None

        Raises:
            UrlMissingError: If the service URL is empty
            ValidationError: If a path parameter is missing or empty
            TransportError: On network failure, cancellation or deadline
            HttpStatusError: If the final status is 400 or above
            DecodeError: If a successful body cannot be decoded
        """
        context = context if context is not None else RequestContext.background()
        started = time.perf_counter()
        outcome = "success"

        try:
            builder = RequestBuilder(method)
            builder.set_enable_gzip(self.enable_gzip_compression)
            builder.resolve_request_url(self.service_url, path, path_params)
            sdk_headers = get_sdk_headers(
                self.DEFAULT_SERVICE_NAME, self.SERVICE_VERSION, operation
            )
            for name, value in sdk_headers.items():
                builder.add_header(name, value)
            builder.set_header(ACCEPT, accept)
            if correlation_id is not None:
                builder.set_header(CORRELATION_ID, correlation_id)
            builder.add_headers(headers)
            for name, value in (query or {}).items():
                builder.add_query(name, value)
            if body is not None:
                builder.set_body_content_json(body, content_type)
            request = builder.build()

            logger.debug(
                f"Dispatching {operation}: {request.method} {request.url}"
                + (f" (correlation id {correlation_id})" if correlation_id else "")
            )
            response = await self._new_transport().send(
                request, context, operation=operation, stream=stream
            )
            return await self._process_response(
                operation, response, decoder, stream, context
            )
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise  # Always re-raise for graceful shutdown
        except SccError as e:
            outcome = type(e).__name__
            raise
        finally:
            if self.metrics is not None:
                self.metrics.record_request(
                    self.DEFAULT_SERVICE_NAME,
                    operation,
                    outcome,
                    time.perf_counter() - started,
                )

    async def _process_response(
        self,
        operation: str,
        response: httpx.Response,
        decoder: Callable[[Any], Any] | None,
        stream: bool,
        context: RequestContext,
    ) -> DetailedResponse[Any]:
        detail: DetailedResponse[Any] = DetailedResponse.from_httpx(response)

        if response.status_code >= 400:
            if stream:
                try:
                    await context.guard(response.aread())
                finally:
                    await response.aclose()
            body = _error_body(response)
            message = _error_message(body, response)
            logger.warning(f"{operation} failed with HTTP {response.status_code}: {message}")
            raise HttpStatusError(response.status_code, message, body=body, response=detail)

        if stream:
            if response.headers.get("content-length") == "0":
                await response.aclose()
                return detail
            detail.result = ResponseStream(response)
            return detail

        if not response.content:
            return detail

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(
                f"{operation}: unable to parse response body as JSON: {e}",
                response=detail,
            ) from e

        if decoder is None:
            detail.result = data
            return detail
        try:
            detail.result = decoder(data)
        except DecodeError as e:
            raise DecodeError(f"{operation}: {e}", response=detail) from e
        return detail


__all__ = ["CORRELATION_ID", "JSON_MIME", "BaseService"]
