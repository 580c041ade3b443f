"""
Shared metrics configuration for the GraphQL query gateway.
"""

from typing import Dict, Any, Optional
import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry


class GatewayMetrics:
    """Prometheus metrics for one gateway instance.

    Every instance owns a private ``CollectorRegistry`` unless one is passed
    in, so several gateways can be constructed in the same process without
    duplicate-timeseries errors.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up gateway metrics."""
        self._metrics["cache_hits_total"] = Counter(
            "graphql_gateway_cache_hits_total",
            "Total query responses served from the response cache",
            registry=self.registry
        )

        self._metrics["cache_misses_total"] = Counter(
            "graphql_gateway_cache_misses_total",
            "Total queries that required a network exchange",
            registry=self.registry
        )

        self._metrics["requests_total"] = Counter(
            "graphql_gateway_requests_total",
            "Total network exchanges by operation and outcome",
            ["operation", "outcome"],
            registry=self.registry
        )

        self._metrics["request_duration_seconds"] = Histogram(
            "graphql_gateway_request_duration_seconds",
            "Network exchange duration in seconds",
            ["operation"],
            registry=self.registry
        )

        self._metrics["broadcasts_total"] = Counter(
            "graphql_gateway_broadcasts_total",
            "Total mutation broadcasts delivered to observers",
            registry=self.registry
        )

        self._metrics["subscriptions"] = Gauge(
            "graphql_gateway_subscriptions",
            "Number of registered observers",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def _resolve(self, metric_name: str, labels: Dict[str, str]):
        metric = self._metrics[metric_name]
        return metric.labels(**labels) if labels else metric

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start_time
            if operation_name in self._metrics:
                self._resolve(operation_name, labels).observe(duration)

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            self._resolve(metric_name, labels).inc()

    def set_gauge(self, metric_name: str, value: float, **labels):
        """Set a gauge metric value."""
        if metric_name in self._metrics:
            self._resolve(metric_name, labels).set(value)

    def sample(self, sample_name: str, **labels) -> float:
        """Read the current value of a sample, ``0.0`` when never recorded."""
        value = self.registry.get_sample_value(sample_name, labels or None)
        return value if value is not None else 0.0
