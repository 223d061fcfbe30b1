"""Helpers shared by the route blueprints."""

from __future__ import annotations

from typing import Any, Dict

from flask import current_app, request

from core.exceptions import ValidationError
from database.menu_store import MenuStore
from database.repositories import StateRepository
from services.notifier import ChangeNotifier
from services.push import PushService


def get_repository() -> StateRepository:
    return current_app.config["STATE_REPOSITORY"]


def get_notifier() -> ChangeNotifier:
    return current_app.config["CHANGE_NOTIFIER"]


def get_push_service() -> PushService:
    return current_app.config["PUSH_SERVICE"]


def get_menu_store() -> MenuStore:
    return current_app.config["MENU_STORE"]


def json_body() -> Dict[str, Any]:
    """Parsed JSON object of the request, ``{}`` when there is none."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def notify(category) -> None:
    """Signal a state change to realtime observers once the mutation is saved."""
    get_notifier().broadcast(category)
