"""Application factory and app-wide configuration."""

import logging
import time
from typing import Optional

from flask import Flask, request
from flask_cors import CORS

from savings_calculator.app.api.routes import api_bp
from savings_calculator.app.extensions import limiter
from savings_calculator.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or default_settings
    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["STARTED_AT"] = time.monotonic()

    allowed_origins = settings.allowed_origins
    CORS(
        app,
        resources={r"/api/*": {"origins": allowed_origins}},
        supports_credentials=settings.CORS_CREDENTIALS,
    )

    @app.before_request
    def _log_rejected_origin():
        # requests without an Origin header (curl, server-to-server) are always served
        origin = request.headers.get("Origin")
        if origin and origin not in allowed_origins:
            logger.warning("Origin %s not allowed by CORS", origin)

    # standard RateLimit-* header names rather than the X- prefixed defaults
    app.config["RATELIMIT_HEADER_LIMIT"] = "RateLimit-Limit"
    app.config["RATELIMIT_HEADER_REMAINING"] = "RateLimit-Remaining"
    app.config["RATELIMIT_HEADER_RESET"] = "RateLimit-Reset"
    limiter.init_app(app)

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
