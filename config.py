"""Application configuration module.

Reads settings from environment variables with defaults suited to a single
shop running one process next to its static front-end.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


DEFAULT_ADMIN_USERNAME = "REBL"
DEFAULT_ADMIN_PASSWORD = "Corp"
DEFAULT_SECRET_KEY = "loyalty_secret_key_must_be_changed_in_production"


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


@dataclass(frozen=True)
class Config:
    environment: str
    debug: bool
    web_host: str
    web_port: int
    secret_key: str
    data_file: str
    menu_file: str
    static_folder: str
    log_folder: str
    admin_username: str
    admin_password: str
    vapid_private_key_path: str
    vapid_subject: str
    push_ttl: int
    push_greeting: str
    slow_request_seconds: float
    allow_dev_server: bool

    @property
    def uses_default_admin(self) -> bool:
        return (
            self.admin_username == DEFAULT_ADMIN_USERNAME
            and self.admin_password == DEFAULT_ADMIN_PASSWORD
        )


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration with validated values
    """
    environment = _get_str("ENVIRONMENT", "development")
    return Config(
        environment=environment,
        debug=_get_bool("DEBUG", False),
        web_host=_get_str("WEB_HOST", "0.0.0.0"),
        web_port=_get_int("WEB_PORT", 3000),
        secret_key=_get_str("SECRET_KEY", DEFAULT_SECRET_KEY),
        data_file=_get_str("DATA_FILE", "data/data.json"),
        menu_file=_get_str("MENU_FILE", "data/menu_data.json"),
        static_folder=_get_str("STATIC_FOLDER", "public"),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        admin_username=_get_str("ADMIN_USERNAME", DEFAULT_ADMIN_USERNAME),
        admin_password=_get_str("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
        vapid_private_key_path=_get_str("VAPID_PRIVATE_KEY_PATH", "data/vapid_private.pem"),
        vapid_subject=_get_str("VAPID_SUBJECT", "mailto:admin@example.com"),
        push_ttl=_get_int("PUSH_TTL", 86400),
        push_greeting=_get_str("PUSH_GREETING", "Hola"),
        slow_request_seconds=_get_float("SLOW_REQUEST_SECONDS", 1.0),
        # Werkzeug's server is refused in production unless explicitly allowed
        allow_dev_server=_get_bool("ALLOW_DEV_SERVER", environment != "production"),
    )
