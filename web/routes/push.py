"""Web push endpoints."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from services.async_runner import run_sync
from utils.validators import require_fields
from web.routes.common import get_push_service, get_repository, json_body

push_bp = Blueprint("push", __name__)


@push_bp.route("/vapidPublicKey", methods=["GET"])
def vapid_public_key():
    return Response(get_push_service().public_key, mimetype="text/plain")


@push_bp.route("/sendPush", methods=["POST"])
def send_push():
    """Send a push message to all subscribers or to the listed user ids."""
    data = json_body()
    require_fields(data, ("title", "message"), "Missing title or message")

    recipients = get_repository().users_for_push(data.get("ids"))
    report = run_sync(
        get_push_service().send_to_users(
            recipients, str(data["title"]), str(data["message"]), icon=data.get("icon") or None
        )
    )
    return jsonify({
        "message": f"Notifications sent to {report.sent} clients",
        "sent": report.sent,
        "failed": report.failed,
    })
