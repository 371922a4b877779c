# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request construction.

RequestBuilder accumulates the pieces of one HTTP request (method, resolved
URL, query parameters, headers and body) and produces an immutable
PreparedRequest that the transport can send any number of times, once per
retry attempt.

Usage:
    >>> builder = RequestBuilder("GET")
    >>> builder.resolve_request_url(
    ...     "https://us-south.compliance.cloud.ibm.com",
    ...     "/instances/{instance_id}/v3/reports/{report_id}",
    ...     {"instance_id": "abc", "report_id": "r1"},
    ... )
    >>> builder.add_query("limit", 10)
    >>> request = builder.build()
"""

from __future__ import annotations

import gzip
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import quote

import httpx
from typing_extensions import Self

from ..exceptions import UrlMissingError, ValidationError
from .codec import encode_json, format_datetime

SUPPORTED_METHODS = frozenset({"GET", "POST", "PATCH", "PUT", "DELETE"})

CONTENT_TYPE = "Content-Type"
CONTENT_ENCODING = "Content-Encoding"
ACCEPT = "Accept"

_PATH_PARAM = re.compile(r"\{([^{}]+)\}")


def stringify(value: Any) -> str:
    """
    Render a query or path value the way the server expects.

    Booleans become ``true``/``false``, enums their value, datetimes
    RFC 3339 and lists a comma-separated string.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class PreparedRequest:
    """Immutable request produced by RequestBuilder.build()."""

    method: str
    url: str
    params: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    content: bytes | None = None

    def get_header(self, name: str) -> str | None:
        """Return the first value of a header, matching the name case-insensitively."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def has_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    def to_httpx(self, client: httpx.AsyncClient) -> httpx.Request:
        """Build a fresh httpx.Request for one send attempt."""
        return client.build_request(
            self.method,
            self.url,
            params=list(self.params),
            headers=list(self.headers),
            content=self.content,
        )


class RequestBuilder:
    """
    Mutable accumulator for a single request.

    Header names keep the caller's spelling; lookups and replacement are
    case-insensitive.
    """

    def __init__(self, method: str) -> None:
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValidationError(f"unsupported HTTP method: {method}")
        self.method = method
        self.url: str | None = None
        self.enable_gzip = False
        self._query: list[tuple[str, str]] = []
        self._headers: dict[str, list[str]] = {}
        self._header_names: dict[str, str] = {}
        self._body: bytes | None = None

    # === URL ===

    def resolve_request_url(
        self,
        service_url: str | None,
        path: str,
        path_params: Mapping[str, Any] | None = None,
    ) -> Self:
        """
        Join the service URL with a path template.

        Each ``{name}`` in ``path`` is replaced by the percent-escaped value
        of ``path_params[name]``.

        Raises:
            UrlMissingError: If service_url is empty
            ValidationError: If a path parameter is missing or empty
        """
        if not service_url:
            raise UrlMissingError()

        path_params = path_params or {}

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            value = path_params.get(name)
            if value is None:
                raise ValidationError(f"path parameter '{name}' is missing")
            text = stringify(value)
            if text == "":
                raise ValidationError(f"'{name}' is an empty path parameter")
            return quote(text, safe="")

        resolved = _PATH_PARAM.sub(_substitute, path)
        self.url = service_url.rstrip("/") + resolved
        return self

    # === Query ===

    def add_query(self, name: str, value: Any) -> Self:
        """Add a query parameter; None values are skipped."""
        if value is not None:
            self._query.append((name, stringify(value)))
        return self

    # === Headers ===

    def add_header(self, name: str, value: str) -> Self:
        """Append a header value, keeping any existing values."""
        stored = self._header_names.setdefault(name.lower(), name)
        self._headers.setdefault(stored, []).append(value)
        return self

    def set_header(self, name: str, value: str) -> Self:
        """Replace every value of a header."""
        self.remove_header(name)
        return self.add_header(name, value)

    def remove_header(self, name: str) -> Self:
        stored = self._header_names.pop(name.lower(), None)
        if stored is not None:
            del self._headers[stored]
        return self

    def add_headers(self, headers: Mapping[str, str] | None) -> Self:
        """Set each header from a mapping, replacing same-named headers."""
        for name, value in (headers or {}).items():
            self.set_header(name, value)
        return self

    def get_header(self, name: str) -> str | None:
        stored = self._header_names.get(name.lower())
        if stored is None:
            return None
        return self._headers[stored][0]

    # === Body ===

    def set_body_content_json(
        self, value: Any, content_type: str = "application/json"
    ) -> Self:
        """
        Set a JSON body from a structured value.

        Raises:
            ValidationError: If value is raw bytes; use set_body_content_bytes
        """
        if isinstance(value, (bytes, bytearray, memoryview)):
            raise ValidationError(
                "JSON body must be a structured value, not bytes; "
                "use set_body_content_bytes for pre-serialized content"
            )
        self._body = encode_json(value)
        self.set_header(CONTENT_TYPE, content_type)
        return self

    def set_body_content_bytes(self, data: bytes, content_type: str) -> Self:
        self._body = bytes(data)
        self.set_header(CONTENT_TYPE, content_type)
        return self

    def set_enable_gzip(self, enabled: bool) -> Self:
        self.enable_gzip = enabled
        return self

    # === Build ===

    def build(self) -> PreparedRequest:
        """
        Produce the immutable request.

        Raises:
            UrlMissingError: If no URL was resolved
        """
        if not self.url:
            raise UrlMissingError()

        body = self._body
        if body is not None and self.enable_gzip:
            body = gzip.compress(body)
            self.set_header(CONTENT_ENCODING, "gzip")

        headers = tuple(
            (name, value) for name, values in self._headers.items() for value in values
        )
        return PreparedRequest(
            method=self.method,
            url=self.url,
            params=tuple(self._query),
            headers=headers,
            content=body,
        )


__all__ = [
    "ACCEPT",
    "CONTENT_ENCODING",
    "CONTENT_TYPE",
    "PreparedRequest",
    "RequestBuilder",
    "SUPPORTED_METHODS",
    "stringify",
]
