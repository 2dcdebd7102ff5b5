"""Flask application setup, relay wiring and bot startup.

``create_app()`` with no arguments builds the production relay and logs the
bot in on its own loop thread, so it can be served by ``app.py``, by
``flask --app "fxg_relay.main:create_app()" run`` or by a single-worker WSGI
server. Each process gets its own bot; run exactly one.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Optional

from flask import Flask
from flask_cors import CORS

from fxg_relay.config import RelayConfig
from fxg_relay.routes import register_routes
from fxg_relay.services.discord_service import DiscordPlatform
from fxg_relay.services.relay_service import RelayService
from fxg_relay.utils.loop import EventLoopThread

REQUEST_LIMIT_BYTES = 64 * 1024  # webhook bodies are tiny

_LOGGER = logging.getLogger(__name__)


def build_relay(config: Optional[RelayConfig] = None) -> RelayService:
    """Create the production relay: discord.py client on its own loop thread."""
    config = config or RelayConfig.from_env()
    missing = config.missing_required()
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
    platform = DiscordPlatform(config)
    relay = RelayService(config, platform, EventLoopThread())
    platform.bind(relay)
    return relay


def create_app(relay: Optional[RelayService] = None) -> Flask:
    """Configure and return the Flask application instance.

    When no relay is passed in, the production relay is built and its bot is
    started; an injected relay is used as-is.
    """
    app = Flask(__name__)
    CORS(app, resources={r"/*": {"origins": "*"}})

    app.config["MAX_CONTENT_LENGTH"] = REQUEST_LIMIT_BYTES
    app.extensions["relay"] = relay or build_relay()

    register_routes(app)

    if relay is None:
        start_bot(app)

    return app


def _log_bot_exit(future: Future) -> None:
    if future.cancelled():
        _LOGGER.info("Discord client task cancelled")
        return
    exc = future.exception()
    if exc is not None:
        _LOGGER.error("Discord client stopped: %s", exc, exc_info=exc)
    else:
        _LOGGER.info("Discord client stopped")


def start_bot(app: Flask) -> Future:
    """Start the relay's event loop thread and log the bot in on it."""
    relay: RelayService = app.extensions["relay"]
    relay.loop_thread.start()
    future = relay.loop_thread.submit(relay.platform.start())
    future.add_done_callback(_log_bot_exit)
    return future
