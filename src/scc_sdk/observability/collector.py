# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics collector for SDK requests, backed by prometheus_client.

Every metric update is mirrored into plain dicts so that a snapshot can be
exported as JSON without scraping Prometheus.

Usage:
    >>> from scc_sdk.observability import get_metrics_collector
    >>> collector = get_metrics_collector()
    >>> collector.record_request("results_reports_api", "ListReports", "success", 0.12)
    >>> collector.get_metrics()["counters"]

Thread Safety:
    All operations are thread-safe. Uses RLock for reentrant locking.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

from .constants import (
    LATENCY_BUCKETS,
    REQUEST_DURATION_SECONDS,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
)

logger = logging.getLogger(__name__)


@dataclass
class MetricDefinition:
    """Schema of one metric: type, description, labels and histogram buckets."""

    name: str
    metric_type: str  # 'counter', 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: list[float] | None = None


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    REQUESTS_TOTAL: MetricDefinition(
        REQUESTS_TOTAL,
        "counter",
        "Total SCC operations dispatched",
        ("service", "operation", "outcome"),
    ),
    REQUEST_RETRIES_TOTAL: MetricDefinition(
        REQUEST_RETRIES_TOTAL,
        "counter",
        "Total SCC request retries",
        ("service", "operation", "reason"),
    ),
    REQUEST_DURATION_SECONDS: MetricDefinition(
        REQUEST_DURATION_SECONDS,
        "histogram",
        "Duration of SCC operations including retries",
        ("service", "operation"),
        buckets=LATENCY_BUCKETS,
    ),
}


class SdkMetricsCollector:
    """
    Request metrics with Prometheus export and a dict mirror.

    Cardinality Protection:
        At most MAX_LABEL_COMBINATIONS unique label combinations are tracked
        per metric; further combinations are dropped with a warning.

    Example:
        >>> collector = SdkMetricsCollector(registry=CollectorRegistry())
        >>> collector.record_retry("admin_service_api", "GetSettings", "503")
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Whether to register Prometheus metrics
            registry: Prometheus registry, defaults to the global REGISTRY
        """
        self._enable_prometheus = enable_prometheus
        self._registry = registry if registry is not None else REGISTRY

        self._counters: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._histograms: dict[str, dict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._lock = threading.RLock()
        self._prom_metrics: dict[str, Any] = {}
        self._label_combinations: dict[str, set[str]] = defaultdict(set)

        logger.debug(
            f"SdkMetricsCollector initialized "
            f"(prometheus={'enabled' if self._enable_prometheus else 'disabled'})"
        )

    def _labels_to_key(self, labels: dict[str, str] | None) -> str:
        """Convert labels dict to a stable string key."""
        if not labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))

    def _check_cardinality(self, name: str, label_key: str) -> bool:
        if label_key in self._label_combinations[name]:
            return True
        if len(self._label_combinations[name]) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                f"Cardinality limit ({self.MAX_LABEL_COMBINATIONS}) reached "
                f"for metric {name}. Dropping label combination: {label_key}"
            )
            return False
        self._label_combinations[name].add(label_key)
        return True

    def _get_or_create_prom_metric(self, name: str) -> Any | None:
        """Get or lazily register the Prometheus metric for ``name``."""
        if not self._enable_prometheus:
            return None
        defn = METRIC_DEFINITIONS.get(name)
        if defn is None:
            return None

        with self._lock:
            if name not in self._prom_metrics:
                try:
                    if defn.metric_type == "histogram":
                        metric: Any = Histogram(
                            name,
                            defn.description,
                            list(defn.label_names),
                            buckets=defn.buckets or LATENCY_BUCKETS,
                            registry=self._registry,
                        )
                    else:
                        metric = Counter(
                            name,
                            defn.description,
                            list(defn.label_names),
                            registry=self._registry,
                        )
                except ValueError as e:
                    # Already registered by another collector on this registry
                    logger.warning(f"Failed to create Prometheus metric {name}: {e}")
                    metric = None
                self._prom_metrics[name] = metric
            return self._prom_metrics[name]

    # === Generic Operations ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Increment a counter metric.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._counters[name][label_key] += value

        prom_counter = self._get_or_create_prom_metric(name)
        if prom_counter is not None:
            if labels:
                prom_counter.labels(**labels).inc(value)
            else:
                prom_counter.inc(value)

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Record an observation in a histogram."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            observations = self._histograms[name][label_key]
            observations.append(value)
            # Keep only recent observations to prevent memory growth
            if len(observations) > 10000:
                self._histograms[name][label_key] = observations[-5000:]

        prom_histogram = self._get_or_create_prom_metric(name)
        if prom_histogram is not None:
            if labels:
                prom_histogram.labels(**labels).observe(value)
            else:
                prom_histogram.observe(value)

    # === SDK Operations ===

    def record_request(
        self,
        service: str,
        operation: str,
        outcome: str,
        duration: float,
    ) -> None:
        """Record one finished operation and its duration."""
        self.inc_counter(
            REQUESTS_TOTAL,
            labels={"service": service, "operation": operation, "outcome": outcome},
        )
        self.observe_histogram(
            REQUEST_DURATION_SECONDS,
            duration,
            labels={"service": service, "operation": operation},
        )

    def record_retry(self, service: str, operation: str, reason: str) -> None:
        """Record one retry of an operation."""
        self.inc_counter(
            REQUEST_RETRIES_TOTAL,
            labels={"service": service, "operation": operation, "reason": reason},
        )

    # === Snapshot Operations ===

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a snapshot of all metrics, suitable for JSON serialization.

        Returns:
            {"counters": {name: {label_key: value}},
             "histograms": {name: {label_key: {count, sum, avg, min, max}}}}
        """
        with self._lock:
            counters = {
                name: dict(label_values)
                for name, label_values in self._counters.items()
            }
            histograms: dict[str, dict[str, dict[str, Any]]] = {}
            for name, label_values in self._histograms.items():
                histograms[name] = {}
                for label_key, observations in label_values.items():
                    if observations:
                        histograms[name][label_key] = {
                            "count": len(observations),
                            "sum": sum(observations),
                            "avg": sum(observations) / len(observations),
                            "min": min(observations),
                            "max": max(observations),
                        }

        return {"counters": counters, "histograms": histograms}

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Return the mirrored value of one counter label combination."""
        with self._lock:
            return self._counters.get(name, {}).get(self._labels_to_key(labels), 0)

    def reset(self) -> None:
        """Reset the dict mirror. Prometheus metrics are left untouched."""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()
            self._label_combinations.clear()
        logger.debug("Metrics collector reset")

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry


# =============================================================================
# Singleton Pattern
# =============================================================================

_global_collector: SdkMetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector(enable_prometheus: bool = True) -> SdkMetricsCollector:
    """
    Get or create the global metrics collector singleton.

    Args:
        enable_prometheus: Whether to enable Prometheus metrics
            (only used on first call)
    """
    global _global_collector

    if _global_collector is None:
        with _collector_lock:
            if _global_collector is None:
                _global_collector = SdkMetricsCollector(
                    enable_prometheus=enable_prometheus
                )

    return _global_collector


def reset_metrics_collector() -> None:
    """Reset the global metrics collector singleton (mainly for testing)."""
    global _global_collector
    with _collector_lock:
        if _global_collector:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "SdkMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
