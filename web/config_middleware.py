"""Flask application configuration and middleware setup."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from flask import Flask, g, request

from config import DEFAULT_SECRET_KEY
from core import get_logger
from utils.performance import REQUEST_ERRORS, REQUEST_LATENCY

if TYPE_CHECKING:
    from config import Config

logger = get_logger(__name__)


def configure_app(app: Flask, config: Config, testing: bool = False) -> None:
    """Configure Flask application settings.

    Args:
        app: Flask application instance
        config: Application configuration
        testing: Whether running in testing mode
    """
    app.config.update(
        SECRET_KEY=config.secret_key,
        SEND_FILE_MAX_AGE_DEFAULT=0 if config.debug else 3600,
        DATA_FILE=config.data_file,
        MENU_FILE=config.menu_file,
        SLOW_REQUEST_SECONDS=config.slow_request_seconds,
        TESTING=testing,
    )
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # Warn if insecure defaults detected
    if config.environment == 'production':
        if config.uses_default_admin:
            logger.warning("Default admin credentials are in use in production")
        if config.secret_key == DEFAULT_SECRET_KEY:
            logger.warning("SECRET_KEY is not set properly")


def setup_security_headers(app: Flask) -> None:
    """Setup security headers middleware.

    Args:
        app: Flask application instance
    """
    @app.after_request
    def add_security_headers(response):
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'same-origin')
        return response


def setup_metrics(app: Flask) -> None:
    """Record request latency and 5xx responses, and log slow requests.

    Args:
        app: Flask application instance
    """
    @app.before_request
    def before_metrics():
        g._metrics_start = time.perf_counter()

    @app.after_request
    def after_metrics(response):
        start = getattr(g, '_metrics_start', None)
        if start is None:
            return response
        duration = time.perf_counter() - start
        path = getattr(request.url_rule, 'rule', request.path)
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(duration)
        if response.status_code >= 500:
            REQUEST_ERRORS.labels(method=request.method, path=path).inc()

        if duration > app.config.get("SLOW_REQUEST_SECONDS", 1.0):
            logger.warning(f"Slow request: {request.method} {request.path} took {duration:.2f}s")
        response.headers['X-Response-Time'] = f"{duration:.3f}s"
        return response
