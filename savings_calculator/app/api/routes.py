"""HTTP routes for the Flask API."""

import logging
import time
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

from savings_calculator.app.extensions import calculation_limit, limiter, window_minutes
from savings_calculator.core.errors import CalculationError, ErrorCode
from savings_calculator.core.health import get_health
from savings_calculator.core.projection import project
from savings_calculator.schemas.calculation import ErrorResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(RateLimitExceeded)
def _handle_rate_limit(exc: RateLimitExceeded):
    """Answer with the calculator's TOO_MANY_REQUESTS body instead of Flask-Limiter's HTML page."""
    settings = current_app.config["SETTINGS"]
    minutes = window_minutes(settings.RATE_LIMIT_WINDOW_SECONDS)
    current = limiter.current_limit
    reset_at = current.reset_at if current is not None else time.time() + settings.RATE_LIMIT_WINDOW_SECONDS
    logger.warning("Rate limit exceeded for %s", request.remote_addr)

    body = ErrorResponse(
        error=ErrorCode.TOO_MANY_REQUESTS.value,
        message="You have exceeded the rate limit. Please try again later.",
        retryAfter=f"{minutes} minutes",
        details={
            "limitPerWindow": settings.RATE_LIMIT_MAX,
            "windowDurationMinutes": minutes,
            "rateLimitReset": int(reset_at * 1000),
        },
    )
    return jsonify(body.model_dump(exclude_none=True)), HTTPStatus.TOO_MANY_REQUESTS


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    """Convert typed calculation errors into JSON responses."""
    logger.info("Rejected calculation: %s (%s)", exc.code.value, exc.message)
    return jsonify(exc.to_payload()), exc.status


@api_bp.errorhandler(Exception)
def _handle_unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception("Unexpected error while handling %s", request.path)
    body = ErrorResponse(
        error=ErrorCode.SERVER_ERROR.value,
        message="An unexpected error occurred",
    )
    return jsonify(body.model_dump(exclude_none=True)), HTTPStatus.INTERNAL_SERVER_ERROR


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = get_health(current_app.config["STARTED_AT"])
    return jsonify(response.model_dump())


@api_bp.post("/calculations")
@api_bp.post("/get-calculation")
@limiter.shared_limit(calculation_limit, scope="calculations")
def calculations() -> Any:
    """Validate the four calculator inputs and return the projection."""
    raw_payload = request.get_json(silent=True)
    payload: Dict[str, Any] = raw_payload if isinstance(raw_payload, dict) else {}
    result = project(payload, current_app.config["SETTINGS"].limits)
    return jsonify(result.model_dump())
