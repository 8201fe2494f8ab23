"""Flask extensions shared by the app factory and the blueprints."""

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(
    key_func=get_remote_address,
    strategy="fixed-window",
    headers_enabled=True,
    storage_uri="memory://",
)


def calculation_limit() -> str:
    """Limit string for the calculation routes, e.g. "50 per 900 second"."""
    settings = current_app.config["SETTINGS"]
    return f"{settings.RATE_LIMIT_MAX} per {settings.RATE_LIMIT_WINDOW_SECONDS} second"


def window_minutes(window_seconds: int) -> float:
    minutes = window_seconds / 60
    return int(minutes) if minutes.is_integer() else minutes
