# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""SDK identification headers sent with every operation."""

from __future__ import annotations

import platform

from .. import __version__

SDK_NAME = "scc-python-sdk"

HEADER_USER_AGENT = "User-Agent"
HEADER_SDK_ANALYTICS = "X-IBMCloud-SDK-Analytics"


def get_user_agent() -> str:
    """Return the User-Agent value describing this SDK and its platform."""
    return (
        f"{SDK_NAME}/{__version__} "
        f"(lang=python; arch={platform.machine()}; os={platform.system()}; "
        f"python.version={platform.python_version()})"
    )


def get_sdk_headers(
    service_name: str,
    service_version: str,
    operation_id: str,
) -> dict[str, str]:
    """
    Build the identifying headers for one operation.

    Args:
        service_name: e.g. ``"results_reports_api"``
        service_version: e.g. ``"V3"``
        operation_id: e.g. ``"ListReports"``

    Returns:
        Header name to value mapping
    """
    return {
        HEADER_USER_AGENT: get_user_agent(),
        HEADER_SDK_ANALYTICS: (
            f"service_name={service_name};"
            f"service_version={service_version};"
            f"operation_id={operation_id}"
        ),
    }


__all__ = [
    "HEADER_SDK_ANALYTICS",
    "HEADER_USER_AGENT",
    "SDK_NAME",
    "get_sdk_headers",
    "get_user_agent",
]
