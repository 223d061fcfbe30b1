"""Health check and metrics blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from utils.performance import PerformanceMonitor
from web.routes.common import get_notifier, get_repository

health_bp = Blueprint("health", __name__)
monitor = PerformanceMonitor()


@health_bp.route("/health")
def health_check():
    counts = get_repository().counts()
    connections = len(get_notifier())
    monitor.record_active_subscribers(counts["active_users"])
    monitor.record_realtime_connections(connections)

    data = {
        "status": "ok",
        **counts,
        "realtime_connections": connections,
        "host": monitor.gather_host_metrics(),
    }
    return jsonify(data)


@health_bp.route("/metrics")
def metrics():
    """Expose Prometheus metrics."""
    return generate_latest(), 200, {"Content-Type": CONTENT_TYPE_LATEST}
