"""Flask application factory wiring the state, notifier and push services."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from flask_socketio import SocketIO
from werkzeug.exceptions import HTTPException

from config import Config, load_config
from core import get_logger
from core.exceptions import ApplicationError
from database import AdminCredentials, MenuStore, PersistentStore, StateRepository
from services import ChangeNotifier, PushService, load_or_create_vapid_keys
from web.config_middleware import configure_app, setup_metrics, setup_security_headers
from web.routes import register_routes
from web.websocket_manager import init_websocket_manager

logger = get_logger(__name__)


def create_app(
    config: Optional[Config] = None,
    repository: Optional[StateRepository] = None,
    notifier: Optional[ChangeNotifier] = None,
    push_service: Optional[PushService] = None,
    menu_store: Optional[MenuStore] = None,
    testing: bool = False,
) -> Flask:
    """Create and configure Flask application.

    Collaborators not passed in are built from ``config``. The Socket.IO
    server is available afterwards as ``app.extensions["socketio"]``.

    Args:
        config: Application configuration
        repository: State repository owning the loyalty data
        notifier: Realtime observer registry
        push_service: Web push sender
        menu_store: Menu document storage
        testing: Whether running in testing mode

    Returns:
        Configured Flask application
    """
    config = config or load_config()
    app = Flask(
        __name__,
        static_folder=str(Path(config.static_folder).resolve()),
        static_url_path="",
    )
    configure_app(app, config, testing)
    setup_security_headers(app)
    setup_metrics(app)

    if repository is None:
        store = PersistentStore(
            config.data_file,
            default_admin=AdminCredentials(config.admin_username, config.admin_password),
        )
        repository = StateRepository(store)
    if notifier is None:
        notifier = ChangeNotifier()
    if push_service is None:
        push_service = PushService(
            load_or_create_vapid_keys(config.vapid_private_key_path),
            subject=config.vapid_subject,
            ttl=config.push_ttl,
            greeting=config.push_greeting,
        )
    if menu_store is None:
        menu_store = MenuStore(config.menu_file)

    app.config.update(
        STATE_REPOSITORY=repository,
        CHANGE_NOTIFIER=notifier,
        PUSH_SERVICE=push_service,
        MENU_STORE=menu_store,
    )

    register_routes(app)
    _setup_error_handlers(app)

    socketio = SocketIO(app, async_mode="threading", cors_allowed_origins="*")
    init_websocket_manager(socketio, notifier)
    return app


def _setup_error_handlers(app: Flask) -> None:
    """Answer every error as a JSON object with a readable message.

    Args:
        app: Flask application instance
    """
    @app.errorhandler(ApplicationError)
    def application_error(error: ApplicationError):
        if error.status_code >= 500:
            logger.error(f"Request failed: {error.message}")
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        logger.error(f"Internal server error: {error}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500
