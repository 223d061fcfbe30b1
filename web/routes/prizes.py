"""Prize catalogue and card redemption endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from core import ChangeCategory
from utils.validators import require_text
from web.routes.common import get_repository, json_body, notify

prizes_bp = Blueprint("prizes", __name__, url_prefix="/premios")


@prizes_bp.route("", methods=["GET"])
def list_prizes():
    return jsonify([prize.to_dict() for prize in get_repository().list_prizes()])


@prizes_bp.route("", methods=["POST"])
def create_prize():
    name = require_text(json_body(), "name", "Missing prize name")
    prize_id = get_repository().create_prize(name)
    notify(ChangeCategory.PRIZES_CHANGED)
    return jsonify({"message": "Prize created", "id": prize_id}), 201


@prizes_bp.route("/<prize_id>", methods=["DELETE"])
def delete_prize(prize_id: str):
    get_repository().delete_prize(prize_id)
    notify(ChangeCategory.PRIZES_CHANGED)
    return jsonify({"message": "Prize deleted"})


@prizes_bp.route("/canjear", methods=["POST"])
def redeem_card():
    """Reset a user's card once the prize has been handed over."""
    user_id = require_text(json_body(), "userId", "Missing user id")
    get_repository().redeem_card(user_id)
    notify(ChangeCategory.CLIENTS_CHANGED)
    return jsonify({"message": "Card reset"})
