"""Menu document endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from web.routes.common import get_menu_store

menu_bp = Blueprint("menu", __name__)


@menu_bp.route("/menu_data", methods=["GET"])
def read_menu():
    return jsonify(get_menu_store().load())


@menu_bp.route("/menu_data", methods=["POST"])
def save_menu():
    get_menu_store().save(request.get_json(silent=True))
    return jsonify({"success": True})
