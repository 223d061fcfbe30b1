"""Route registration for the Flask app."""

from __future__ import annotations

from flask import Flask

from .clients import clients_bp
from .frontend import frontend_bp
from .health import health_bp
from .menu import menu_bp
from .prizes import prizes_bp
from .push import push_bp
from .session import session_bp


def register_routes(app: Flask) -> None:
    app.register_blueprint(frontend_bp)
    app.register_blueprint(clients_bp)
    app.register_blueprint(prizes_bp)
    app.register_blueprint(push_bp)
    app.register_blueprint(session_bp)
    app.register_blueprint(menu_bp)
    app.register_blueprint(health_bp)
