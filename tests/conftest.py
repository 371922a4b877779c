# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for the SCC SDK test suite.

HTTP traffic never leaves the process: services are given an
``httpx.AsyncClient`` backed by ``httpx.MockTransport`` that serves canned
responses from a MockServer queue and records every request it receives.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
from prometheus_client import CollectorRegistry

from scc_sdk.admin import AdminServiceApiV1
from scc_sdk.auth import NoAuthAuthenticator
from scc_sdk.config import CREDENTIALS_FILE_ENV
from scc_sdk.core.context import RequestContext
from scc_sdk.observability import SdkMetricsCollector
from scc_sdk.reports import ResultsReportsApiV3

SERVICE_URL = "https://scc.example.com"
ADMIN_URL = "https://scc.example.com/instances/abc/v3"


class MockServer:
    """Serves queued responses in order and records the requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception | Callable[..., Any]] = []

    def add(
        self,
        status_code: int = 200,
        *,
        json_body: Any = None,
        content: bytes | str | None = None,
        headers: dict[str, str] | None = None,
    ) -> MockServer:
        if json_body is not None:
            response = httpx.Response(status_code, json=json_body, headers=headers)
        else:
            response = httpx.Response(status_code, content=content, headers=headers)
        self._responses.append(response)
        return self

    def add_error(self, error: Exception) -> MockServer:
        self._responses.append(error)
        return self

    def add_callback(self, callback: Callable[[httpx.Request], httpx.Response]) -> MockServer:
        self._responses.append(callback)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(599, json={"error": "no response queued"})
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        return item

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Keep real credentials files and SCC environment variables out of tests."""
    monkeypatch.setenv(CREDENTIALS_FILE_ENV, str(tmp_path / "no-credentials.env"))
    for name in list(os.environ):
        if name.startswith(("ADMIN_SERVICE_API_", "RESULTS_REPORTS_API_")):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_server() -> MockServer:
    return MockServer()


@pytest.fixture
def metrics() -> SdkMetricsCollector:
    return SdkMetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def reports_service(
    mock_server: MockServer, metrics: SdkMetricsCollector
) -> ResultsReportsApiV3:
    return ResultsReportsApiV3(
        NoAuthAuthenticator(),
        service_url=SERVICE_URL,
        http_client=mock_server.client(),
        metrics=metrics,
    )


@pytest.fixture
def admin_service(mock_server: MockServer, metrics: SdkMetricsCollector) -> AdminServiceApiV1:
    return AdminServiceApiV1(
        NoAuthAuthenticator(),
        service_url=ADMIN_URL,
        http_client=mock_server.client(),
        metrics=metrics,
    )


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Replace back-off sleeps with an AsyncMock that records the delays."""
    sleep = AsyncMock()
    monkeypatch.setattr(RequestContext, "sleep", sleep)
    return sleep
