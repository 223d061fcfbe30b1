"""Web layer: Flask app, routes and the realtime channel."""

from web.app import create_app

__all__ = ["create_app"]
