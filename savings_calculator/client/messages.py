"""User-facing messages for API error responses."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from savings_calculator.core.errors import ErrorCode
from savings_calculator.core.validation import format_bound

NETWORK_ERROR_MESSAGE = (
    "Unable to reach the calculation service. Please check your connection and try again."
)
FALLBACK_MESSAGE = "Failed to calculate"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

_FIXED_MESSAGES = {
    ErrorCode.NEGATIVE_INITIAL_SAVINGS.value: "Initial savings must be a positive number",
    ErrorCode.NEGATIVE_MONTHLY_DEPOSIT.value: "Monthly deposit must be a positive number",
    ErrorCode.NEGATIVE_INTEREST_RATE.value: "Interest rate must be a positive number",
    ErrorCode.INVALID_YEARS.value: "Years must be greater than 0",
}

_EXCESSIVE_LABELS = {
    ErrorCode.EXCESSIVE_INITIAL_SAVINGS.value: ("Initial savings", "$"),
    ErrorCode.EXCESSIVE_MONTHLY_DEPOSIT.value: ("Monthly deposit", "$"),
    ErrorCode.EXCESSIVE_INTEREST_RATE.value: ("Interest rate", "%"),
    ErrorCode.EXCESSIVE_YEARS.value: ("Years", ""),
}


def _details(body: Mapping[str, Any]) -> Mapping[str, Any]:
    details = body.get("details")
    return details if isinstance(details, Mapping) else {}


def error_message(body: Optional[Mapping[str, Any]]) -> str:
    """Translate an error response body into the message shown to the user."""
    if not body or not body.get("error"):
        return UNKNOWN_ERROR_MESSAGE

    code = body["error"]
    message = body.get("message") or ""
    details = _details(body)

    if code == ErrorCode.MISSING_PARAMETERS.value:
        missing = details.get("missingParams") or details.get("requiredParams") or []
        return f"Missing required parameters: {', '.join(missing)}"

    if code == ErrorCode.INVALID_PARAMETER_TYPE.value:
        return f"Invalid parameter type: {message}"

    if code in _FIXED_MESSAGES:
        # years can also fail the whole-number rule under the same code
        if code == ErrorCode.INVALID_YEARS.value and message:
            return message
        return _FIXED_MESSAGES[code]

    if code in _EXCESSIVE_LABELS:
        label, unit = _EXCESSIVE_LABELS[code]
        max_allowed = details.get("maxAllowed")
        if max_allowed is None:
            return message or f"{label} exceeds maximum allowed value"
        return f"{label} exceeds maximum allowed value of {format_bound(max_allowed, unit)}"

    if code == ErrorCode.SERVER_ERROR.value:
        return f"Server error: {message}"

    if code == ErrorCode.TOO_MANY_REQUESTS.value:
        minutes = details.get("windowDurationMinutes", 15)
        limit = details.get("limitPerWindow", 50)
        retry_after = body.get("retryAfter", f"{minutes} minutes")
        return (
            f"Rate limit exceeded: {message} You can make up to {limit} requests "
            f"per {minutes} minutes. Please try again in {retry_after}."
        )

    return message or FALLBACK_MESSAGE
