"""Development entrypoint: start the Discord bot and serve the webhook API."""

import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fxg_relay.main import create_app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        app = create_app()
    except RuntimeError as exc:
        print(f"❌ {exc}")
        sys.exit(1)

    port = app.extensions["relay"].config.port
    app.logger.info("🚀 API server running on port %s", port)
    app.run(host="0.0.0.0", port=port, threaded=True)
