# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the SCC client library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from SccError, making it easy to catch every
client-side failure with a single except clause.

Exceptions raised after a response was received carry it as ``response``
(a DetailedResponse whose ``result`` is None) so callers can still inspect
the status code and headers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .core.response import DetailedResponse


class SccError(Exception):
    """Base exception for all SCC client errors.

    Example:
        try:
            response = await service.get_settings(GetSettingsOptions())
        except SccError as e:
            logger.error(f"SCC request failed: {e}")
    """

    pass


class ValidationError(SccError, ValueError):
    """Raised when input is rejected before any HTTP call is made.

    Covers a missing options object, a missing required field, an empty
    required path parameter, an unknown URL variable, an unknown
    authentication type, and a pager started with ``start`` already set.

    Example:
        try:
            await service.get_report(GetReportOptions(instance_id="", report_id="r"))
        except ValidationError as e:
            print(f"Bad input: {e}")
    """

    pass


class UrlMissingError(SccError):
    """Raised when a request is attempted while the service URL is empty."""

    def __init__(self, message: str = "service URL is empty") -> None:
        super().__init__(message)


class TransportError(SccError):
    """Raised when the request could not be completed at the network level.

    Attributes:
        cancelled: True when the request was stopped by a cancelled context.
        deadline_exceeded: True when the request context ran out of time.
    """

    cancelled: bool = False
    deadline_exceeded: bool = False


class RequestCancelledError(TransportError):
    """Raised when the caller cancelled the request context."""

    cancelled = True

    def __init__(self, message: str = "request cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(TransportError):
    """Raised when the request context deadline passed."""

    deadline_exceeded = True

    def __init__(self, message: str = "request deadline exceeded") -> None:
        super().__init__(message)


class DecodeError(SccError):
    """Raised when a successful response body cannot be decoded.

    Attributes:
        response: The received response (status and headers, no result).
            None when decoding happens outside a request, e.g. when a model
            is built directly with ``from_dict``.

    Example:
        try:
            response = await service.get_settings(GetSettingsOptions())
        except DecodeError as e:
            print(e.response.status_code, e.response.headers)
    """

    def __init__(
        self,
        message: str,
        response: DetailedResponse | None = None,
    ):
        super().__init__(message)
        self.response = response


class HttpStatusError(SccError):
    """Raised when the server answers with a status code of 400 or above.

    Attributes:
        status_code: The HTTP status code.
        message: The error message reported by the server.
        body: The decoded JSON body, the raw text when small UTF-8, or None.
        response: The received response (status and headers, no result).

    Example:
        try:
            await service.get_report(options)
        except HttpStatusError as e:
            if e.status_code == 404:
                logger.warning(f"Report not found: {e}")
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        body: Any = None,
        response: DetailedResponse | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.response = response

    def __str__(self) -> str:
        return f"Error: {self.args[0]}, Status code: {self.status_code}"


class PaginationError(SccError):
    """Raised when a pager is exhausted or a next-page link is malformed."""

    pass


__all__ = [
    "DeadlineExceededError",
    "DecodeError",
    "HttpStatusError",
    "PaginationError",
    "RequestCancelledError",
    "SccError",
    "TransportError",
    "UrlMissingError",
    "ValidationError",
]
