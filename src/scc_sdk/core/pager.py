# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Cursor-based pagination over list operations.

The server hands out an opaque ``start`` cursor inside ``next.href`` of each
page; a pager feeds it into the next list call and stops when a page has
no next link (or the link has no ``start`` parameter). The cursor is never
built on the client.

States:
    Ready      -> get_next() fetches a page
    Exhausted  -> get_next() raises PaginationError

Usage:
    >>> pager = ReportsPager(service, ListReportsOptions(instance_id="...", limit=50))
    >>> while pager.has_next():
    ...     reports = await pager.get_next()

    or
    >>> async for report in pager:
    ...     print(report.id)
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any, Generic, Protocol, TypeVar
from urllib.parse import parse_qs, urlsplit

from ..exceptions import PaginationError, ValidationError
from .context import RequestContext

logger = logging.getLogger(__name__)

T = TypeVar("T")
OptionsT = TypeVar("OptionsT")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class Page(Protocol[T]):
    """A decoded page envelope."""

    @property
    def items(self) -> list[T]: ...

    def get_next_start(self) -> str | None: ...


def get_query_param(url: str | None, name: str) -> str | None:
    """
    Return the first value of query parameter ``name`` in ``url``.

    Raises:
        PaginationError: If the URL cannot be parsed
    """
    if url is None:
        return None
    try:
        if _BAD_ESCAPE.search(url) or any(ord(c) < 0x20 or ord(c) == 0x7F for c in url):
            raise ValueError("invalid escape or control character")
        values = parse_qs(urlsplit(url).query, keep_blank_values=True)
    except ValueError as e:
        raise PaginationError(
            f"error retrieving '{name}' query parameter from URL '{url}': {e}"
        ) from e
    found = values.get(name)
    return found[0] if found else None


class BasePager(ABC, Generic[OptionsT, T]):
    """
    Lazily walks the pages of one list operation.

    The pager keeps a private copy of the options and owns their ``start``
    field. Calls to ``get_next`` on one pager are serialized, so pages are
    fetched strictly in order.

    Args:
        options: Options of the list operation; ``start`` must not be set

    Raises:
        ValidationError: If options is None or options.start is set
    """

    def __init__(self, options: OptionsT | None) -> None:
        if options is None:
            raise ValidationError("options cannot be None")
        if getattr(options, "start", None):
            raise ValidationError("the 'options.start' field should not be set")
        self._options: OptionsT = dataclasses.replace(options)  # type: ignore[type-var]
        self._cursor: str | None = None
        self._has_next = True
        self._pages_fetched = 0
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _fetch_page(self, options: OptionsT, context: RequestContext | None) -> Page[T]:
        """Invoke the underlying list operation and return its page."""

    def has_next(self) -> bool:
        """Return True while another page may be fetched."""
        return self._has_next

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    async def get_next(self, context: RequestContext | None = None) -> list[T]:
        """
        Fetch the next page.

        Returns:
            The items of the page (possibly empty)

        Raises:
            PaginationError: If the pager is exhausted or next.href is malformed
        """
        async with self._lock:
            if not self._has_next:
                raise PaginationError("no more results available")

            options: Any = dataclasses.replace(self._options, start=self._cursor)  # type: ignore[type-var]
            page = await self._fetch_page(options, context)
            next_start = page.get_next_start()

            self._pages_fetched += 1
            self._cursor = next_start or None
            self._has_next = self._cursor is not None
            logger.debug(
                f"{type(self).__name__} fetched page {self._pages_fetched} "
                f"({len(page.items)} items, has_next={self._has_next})"
            )
            return list(page.items)

    async def get_all(self, context: RequestContext | None = None) -> list[T]:
        """Fetch every remaining page and return all items in server order."""
        results: list[T] = []
        while self.has_next():
            results.extend(await self.get_next(context))
        return results

    async def iterate(self, context: RequestContext | None = None) -> AsyncIterator[T]:
        """Yield items one at a time, fetching pages as needed."""
        while self.has_next():
            for item in await self.get_next(context):
                yield item

    def __aiter__(self) -> AsyncIterator[T]:
        return self.iterate()


__all__ = ["BasePager", "Page", "get_query_param"]
