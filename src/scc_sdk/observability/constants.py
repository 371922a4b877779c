# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the ``scc_sdk_`` prefix.

Label Best Practices:
    Only bounded labels are used:
    - `service` - Service name (admin_service_api, results_reports_api)
    - `operation` - Operation id (GetSettings, ListReports, ...)
    - `outcome` - success, or the error class name
    - `reason` - Retry reason (status code or network)

    NEVER use:
    - `correlation_id` - Unique per request (unbounded!)
    - `report_id` - Unique per report (unbounded!)
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "scc_sdk"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Request Metrics (core/service.py, core/transport.py)
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total operations dispatched, labelled by outcome."""

REQUEST_RETRIES_TOTAL = f"{METRIC_PREFIX}_request_retries_total"
"""Total retry attempts."""

REQUEST_DURATION_SECONDS = f"{METRIC_PREFIX}_request_duration_seconds"
"""Wall-clock duration of operations including retries."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
    60.0,
]
"""Buckets for request duration, in seconds."""


__all__ = [
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "REQUEST_RETRIES_TOTAL",
]
