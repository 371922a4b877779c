# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Response envelope returned by every operation.

DetailedResponse carries the HTTP status, the response headers and a result
slot. The slot holds None for an empty body, a decoded model for JSON
operations, or a ResponseStream for binary downloads.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx
from typing_extensions import Self

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DetailedResponse(Generic[T]):
    """
    HTTP status, headers and the decoded result of one operation.

    Attributes:
        status_code: HTTP status code of the final attempt
        headers: Response headers (case-insensitive lookups)
        result: Decoded model, a ResponseStream, or None for an empty body
    """

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    result: T | None = None

    def get_result(self) -> T | None:
        return self.result

    def get_status_code(self) -> int:
        return self.status_code

    def get_headers(self) -> httpx.Headers:
        return self.headers

    @classmethod
    def from_httpx(cls, response: httpx.Response, result: Any = None) -> DetailedResponse[Any]:
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            result=result,
        )

    def __str__(self) -> str:
        return f"DetailedResponse(status_code={self.status_code}, result={self.result!r})"


class ResponseStream:
    """
    Unread response body handed to the caller.

    The caller owns the stream and must close it, either with ``aclose()``
    or by using it as an async context manager.

    Usage:
        async with response.result as stream:
            data = await stream.aread()
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def content_type(self) -> str | None:
        return self._response.headers.get("content-type")

    @property
    def closed(self) -> bool:
        return self._response.is_closed

    async def aread(self) -> bytes:
        """Read the remaining body into memory and close the stream."""
        try:
            return await self._response.aread()
        finally:
            await self._response.aclose()

    async def aiter_bytes(self, chunk_size: int | None = None) -> AsyncIterator[bytes]:
        """Iterate over the body in chunks; the stream is closed at the end."""
        try:
            async for chunk in self._response.aiter_bytes(chunk_size):
                yield chunk
        finally:
            await self._response.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


__all__ = ["DetailedResponse", "ResponseStream"]
