"""Client (loyalty-card holder) endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from core import ChangeCategory, get_logger
from utils.validators import require_fields, require_text, validate_subscription
from web.routes.common import get_repository, json_body, notify

logger = get_logger(__name__)

clients_bp = Blueprint("clients", __name__)


@clients_bp.route("/subscribe", methods=["POST"])
def subscribe():
    """Register or refresh a browser push subscription."""
    data = json_body()
    require_fields(data, ("name", "phone"), "Missing name or phone")
    subscription = validate_subscription(data.get("subscription"))

    user, is_new = get_repository().upsert_subscription(
        str(data["name"]).strip(), str(data["phone"]).strip(), subscription
    )
    notify(ChangeCategory.CLIENTS_CHANGED)
    return jsonify({"message": "Subscription saved", "id": user.id, "isNew": is_new}), 201


@clients_bp.route("/clientes", methods=["GET"])
def list_clients():
    return jsonify(get_repository().list_active_users())


@clients_bp.route("/agregarSello", methods=["POST"])
def add_stamp():
    user_id = require_text(json_body(), "id", "Missing user id")
    result = get_repository().add_stamp(user_id)
    notify(ChangeCategory.CLIENTS_CHANGED)
    return jsonify({"message": "Stamp added", "stamps": result.stamps, "prize": result.prize})


@clients_bp.route("/api/usuarios", methods=["POST"])
def register_user():
    """Register a user by name only, as the plain sign-up form does."""
    name = require_text(json_body(), "name", "Missing name")
    _, is_new = get_repository().register_user(name)
    notify(ChangeCategory.CLIENTS_CHANGED)
    if is_new:
        return jsonify({"message": "User registered"}), 201
    return jsonify({"message": "User already registered"}), 200


@clients_bp.route("/clientes/<user_id>", methods=["DELETE"])
def delete_client(user_id: str):
    get_repository().delete_user(user_id)
    notify(ChangeCategory.CLIENTS_CHANGED)
    return jsonify({"message": "Client deleted"})
