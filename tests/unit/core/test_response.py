"""
Unit tests for DetailedResponse and ResponseStream.
"""

from __future__ import annotations

import httpx

from scc_sdk.core.response import DetailedResponse, ResponseStream


class TestDetailedResponse:
    """Tests for DetailedResponse."""

    def test_getters(self):
        """Getters expose status, headers and result."""
        headers = httpx.Headers({"X-Correlation-Id": "abc"})
        response = DetailedResponse(status_code=200, headers=headers, result={"a": 1})
        assert response.get_status_code() == 200
        assert response.get_headers()["x-correlation-id"] == "abc"
        assert response.get_result() == {"a": 1}

    def test_defaults(self):
        """Headers default to empty and result to None."""
        response = DetailedResponse(status_code=204)
        assert len(response.get_headers()) == 0
        assert response.get_result() is None

    def test_from_httpx(self):
        """from_httpx copies status and headers from an httpx response."""
        raw = httpx.Response(201, headers={"Location": "/x"})
        response = DetailedResponse.from_httpx(raw, result="done")
        assert response.status_code == 201
        assert response.headers["location"] == "/x"
        assert response.result == "done"

    def test_str(self):
        """The string form includes status and result."""
        assert str(DetailedResponse(status_code=200, result=1)) == (
            "DetailedResponse(status_code=200, result=1)"
        )


class TestResponseStream:
    """Tests for ResponseStream."""

    async def test_aread_closes(self):
        """aread() returns the body and closes the stream."""
        stream = ResponseStream(
            httpx.Response(200, content=b"a,b\n1,2\n", headers={"Content-Type": "application/csv"})
        )
        assert stream.content_type == "application/csv"
        assert await stream.aread() == b"a,b\n1,2\n"
        assert stream.closed is True

    async def test_aiter_bytes(self):
        """aiter_bytes() yields the whole body and closes the stream."""
        stream = ResponseStream(httpx.Response(200, content=b"0123456789"))
        chunks = [chunk async for chunk in stream.aiter_bytes()]
        assert b"".join(chunks) == b"0123456789"
        assert stream.closed is True

    async def test_context_manager_closes(self):
        """Leaving the async context closes the stream."""
        stream = ResponseStream(httpx.Response(200, content=b"x"))
        async with stream as entered:
            assert entered is stream
        assert stream.closed is True
