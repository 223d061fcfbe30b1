"""Admin login endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from web.auth import issue_token, validate_credentials, validate_token
from web.routes.common import get_repository, json_body

session_bp = Blueprint("session", __name__)


@session_bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    credentials = get_repository().admin
    if validate_credentials(credentials, data.get("usuario"), data.get("password")):
        return jsonify({"success": True, "token": issue_token(credentials.username)})
    return jsonify({"success": False})


@session_bp.route("/validate", methods=["POST"])
def validate():
    token = json_body().get("token")
    return jsonify({"valid": validate_token(get_repository().admin, token)})
