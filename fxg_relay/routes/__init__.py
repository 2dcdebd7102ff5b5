"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask, jsonify

from fxg_relay.utils.auth import get_relay, now_iso

from .applicants import bp as applicants_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints and health checks on the provided Flask app."""
    app.register_blueprint(applicants_bp)

    @app.get("/")
    def index():
        relay = get_relay()
        return (
            jsonify(
                status="online" if relay.ready else "connecting",
                bot=relay.platform.bot_tag or "connecting...",
                ready=relay.ready,
                timestamp=now_iso(),
            ),
            200,
        )

    @app.get("/ping")
    def ping():
        return jsonify(pong=True, timestamp=now_iso(), botReady=get_relay().ready), 200
