# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the SCC client library.

Request counts, retries and durations are exported through prometheus_client
and mirrored in a JSON-friendly snapshot.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    SdkMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    REQUEST_DURATION_SECONDS,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
)

__all__ = [
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "REQUESTS_TOTAL",
    "REQUEST_DURATION_SECONDS",
    "REQUEST_RETRIES_TOTAL",
    "MetricDefinition",
    "SdkMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
