"""Static front-end entry points."""

from __future__ import annotations

from flask import Blueprint, current_app, redirect

frontend_bp = Blueprint("frontend", __name__)


@frontend_bp.route("/")
def index():
    return current_app.send_static_file("index.html")


@frontend_bp.route("/data.json")
def hide_state_document():
    """The state document may sit next to the static files; never serve it."""
    return redirect("/index.html")
