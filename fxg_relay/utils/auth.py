"""Request gates shared by the applicant endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from flask import current_app, jsonify, request

from fxg_relay.services.relay_service import RelayService


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def get_relay() -> RelayService:
    """Return the relay service attached to the running Flask app."""
    return current_app.extensions["relay"]


def require_api_key() -> Optional[Any]:
    """Validate the Bearer shared secret; return an error response on mismatch."""
    auth_header = request.headers.get("Authorization", "")
    api_key = auth_header.replace("Bearer ", "", 1)
    secret = get_relay().config.api_secret
    if not secret or api_key != secret:
        return jsonify(error="Unauthorized"), 401
    return None


def require_ready() -> Optional[Any]:
    """Reject the request while the Discord connection is down."""
    if not get_relay().ready:
        return jsonify(error="Bot not ready", status="connecting"), 503
    return None
