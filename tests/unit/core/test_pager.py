"""
Unit tests for BasePager and get_query_param().
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from scc_sdk.core.pager import BasePager, get_query_param
from scc_sdk.exceptions import PaginationError, ValidationError


@dataclass
class ListThingsOptions:
    limit: int | None = None
    start: str | None = None


@dataclass
class ThingPage:
    things: list[str]
    next_start: str | None = None

    @property
    def items(self):
        return self.things

    def get_next_start(self):
        return self.next_start


@dataclass
class FakeServer:
    """Serves pages keyed by the start cursor."""

    pages: dict[str | None, ThingPage]
    calls: list[str | None] = field(default_factory=list)
    delay: float = 0.0

    async def list_things(self, options):
        self.calls.append(options.start)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.pages[options.start]


class ThingsPager(BasePager[ListThingsOptions, str]):
    def __init__(self, server, options):
        super().__init__(options)
        self.server = server

    async def _fetch_page(self, options, context):
        return await self.server.list_things(options)


def _three_pages():
    return FakeServer(
        pages={
            None: ThingPage(["a", "b"], next_start="c1"),
            "c1": ThingPage(["c"], next_start="c2"),
            "c2": ThingPage([], next_start=None),
        }
    )


class TestGetQueryParam:
    """Tests for get_query_param()."""

    def test_extracts_value(self):
        """The first value of the parameter is returned."""
        url = "https://x.example.com/reports?limit=10&start=abc%3D&start=other"
        assert get_query_param(url, "start") == "abc="

    def test_missing_parameter(self):
        """An absent parameter yields None."""
        assert get_query_param("https://x.example.com/reports?limit=10", "start") is None

    def test_none_url(self):
        """A None URL yields None."""
        assert get_query_param(None, "start") is None

    def test_relative_url(self):
        """Relative hrefs are accepted."""
        assert get_query_param("/reports?start=xyz", "start") == "xyz"

    def test_malformed_escape(self):
        """A broken percent escape raises PaginationError."""
        with pytest.raises(PaginationError, match="error retrieving 'start' query parameter"):
            get_query_param("https://x.example.com/reports?start=%zz", "start")

    def test_control_character(self):
        """Control characters raise PaginationError."""
        with pytest.raises(PaginationError):
            get_query_param("https://x.example.com/reports?start=a\x00b", "start")


class TestBasePager:
    """Tests for the BasePager state machine."""

    def test_rejects_none_options(self):
        """Options are required."""
        with pytest.raises(ValidationError, match="options cannot be None"):
            ThingsPager(_three_pages(), None)

    def test_rejects_start(self):
        """The caller may not set the start cursor."""
        with pytest.raises(ValidationError, match="'options.start' field should not be set"):
            ThingsPager(_three_pages(), ListThingsOptions(start="abc"))

    def test_allows_empty_start(self):
        """An empty start is treated as unset."""
        pager = ThingsPager(_three_pages(), ListThingsOptions(start=""))
        assert pager.has_next() is True

    async def test_walks_pages_in_order(self):
        """Each call fetches the next page using the previous cursor."""
        server = _three_pages()
        pager = ThingsPager(server, ListThingsOptions(limit=2))

        assert await pager.get_next() == ["a", "b"]
        assert pager.has_next() is True
        assert await pager.get_next() == ["c"]
        assert await pager.get_next() == []
        assert pager.has_next() is False
        assert pager.pages_fetched == 3
        assert server.calls == [None, "c1", "c2"]

    async def test_exhausted_pager_raises(self):
        """get_next() after the last page raises without a request."""
        server = FakeServer(pages={None: ThingPage(["only"])})
        pager = ThingsPager(server, ListThingsOptions())
        await pager.get_next()

        with pytest.raises(PaginationError, match="no more results available"):
            await pager.get_next()
        assert len(server.calls) == 1

    async def test_empty_cursor_ends_iteration(self):
        """An empty next cursor means there are no more pages."""
        server = FakeServer(pages={None: ThingPage(["x"], next_start="")})
        pager = ThingsPager(server, ListThingsOptions())
        await pager.get_next()
        assert pager.has_next() is False

    async def test_get_all(self):
        """get_all() concatenates every page in order."""
        pager = ThingsPager(_three_pages(), ListThingsOptions())
        assert await pager.get_all() == ["a", "b", "c"]
        assert pager.has_next() is False

    async def test_async_iteration(self):
        """The pager can be used with async for."""
        pager = ThingsPager(_three_pages(), ListThingsOptions())
        assert [thing async for thing in pager] == ["a", "b", "c"]

    async def test_caller_options_untouched(self):
        """The pager works on a copy of the options."""
        options = ListThingsOptions(limit=2)
        pager = ThingsPager(_three_pages(), options)
        await pager.get_all()
        assert options.start is None

    async def test_concurrent_calls_are_serialized(self):
        """Concurrent get_next() calls fetch distinct pages in order."""
        server = _three_pages()
        server.delay = 0.01
        pager = ThingsPager(server, ListThingsOptions())

        first, second = await asyncio.gather(pager.get_next(), pager.get_next())

        assert first == ["a", "b"]
        assert second == ["c"]
        assert server.calls == [None, "c1"]
