"""Performance monitoring utilities using Prometheus metrics."""

from __future__ import annotations

import psutil
from prometheus_client import Counter, Gauge, Histogram


REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_ERRORS = Counter(
    "http_request_errors_total",
    "Total number of 5xx responses",
    ["method", "path"],
)
realtime_connections = Gauge("realtime_connections", "Open realtime connections")
active_subscribers = Gauge("loyalty_active_subscribers", "Users holding a push subscription")
push_deliveries_total = Counter(
    "push_deliveries_total", "Web push delivery attempts", labelnames=("outcome",)
)


def record_push_delivery(sent: bool) -> None:
    push_deliveries_total.labels(outcome="sent" if sent else "failed").inc()


class PerformanceMonitor:
    def __init__(self) -> None:
        self.metrics = {
            "request_latency": REQUEST_LATENCY,
            "request_errors": REQUEST_ERRORS,
            "realtime_connections": realtime_connections,
            "active_subscribers": active_subscribers,
            "push_deliveries_total": push_deliveries_total,
        }

    def record_realtime_connections(self, count: int) -> None:
        realtime_connections.set(count)

    def record_active_subscribers(self, count: int) -> None:
        active_subscribers.set(count)

    def gather_host_metrics(self) -> dict:
        process = psutil.Process()
        memory_info = process.memory_info()
        return {
            "memory_rss": memory_info.rss,
            "cpu_percent": process.cpu_percent(interval=None),
        }
