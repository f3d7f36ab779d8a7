"""Flask application factory."""

from __future__ import annotations

import logging
import secrets

from flask import Flask
from flask_cors import CORS
from redis import Redis
from rq import Queue

from ..config import APP_CONFIG, QUEUE_CONFIG
from .routes import api_bp

logger = logging.getLogger(__name__)


def create_app(*, queue: Queue | None = None) -> Flask:
    """Create and configure the Flask application.

    ``queue`` replaces the Redis-backed queue, which lets tests run
    conversions inline.
    """

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = APP_CONFIG.max_upload_bytes
    app.config["SECRET_KEY"] = APP_CONFIG.secret_key or _ephemeral_secret_key()

    CORS(app, supports_credentials=True)
    app.register_blueprint(api_bp, url_prefix="/api")

    if queue is None:
        redis_connection = Redis.from_url(QUEUE_CONFIG.redis_url)
        queue = Queue(
            name=QUEUE_CONFIG.queue_name,
            connection=redis_connection,
            default_timeout=QUEUE_CONFIG.default_timeout,
        )
    app.extensions["rq"] = {"queue": queue}

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    logger.info("Flask application initialised")
    return app


def _ephemeral_secret_key() -> str:
    logger.warning(
        "KML_CSV_SECRET_KEY is not set; using a random key, sessions will not "
        "survive a restart or be shared between processes"
    )
    return secrets.token_hex(32)

