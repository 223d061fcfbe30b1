"""Application entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from config import Config, load_config
from core import setup_logger
from core.exceptions import ConfigurationError
from web import create_app


def server_options(config: Config) -> Dict[str, Any]:
    """Keyword arguments for ``SocketIO.run``.

    Raises:
        ConfigurationError: if Werkzeug's development server is not allowed
    """
    if not config.allow_dev_server:
        raise ConfigurationError(
            "The built-in server is disabled in production. Serve web.create_app "
            "with a WSGI server or set ALLOW_DEV_SERVER=true."
        )
    return {
        "host": config.web_host,
        "port": config.web_port,
        "debug": config.debug,
        "use_reloader": False,
        "allow_unsafe_werkzeug": True,
    }


def main() -> None:
    config = load_config()
    logger = setup_logger(
        name="",
        level=logging.DEBUG if config.debug else logging.INFO,
        log_file=str(Path(config.log_folder) / "app.log"),
        colored=True,
    )

    options = server_options(config)
    app = create_app(config)
    socketio = app.extensions["socketio"]

    logger.info(f"Server listening on http://{config.web_host}:{config.web_port}")
    socketio.run(app, **options)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logging.getLogger("app").info("Application stopped by user")
