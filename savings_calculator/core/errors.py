"""Error codes shared by the API and the client."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    MISSING_PARAMETERS = "MISSING_PARAMETERS"
    INVALID_PARAMETER_TYPE = "INVALID_PARAMETER_TYPE"
    NEGATIVE_INITIAL_SAVINGS = "NEGATIVE_INITIAL_SAVINGS"
    NEGATIVE_MONTHLY_DEPOSIT = "NEGATIVE_MONTHLY_DEPOSIT"
    NEGATIVE_INTEREST_RATE = "NEGATIVE_INTEREST_RATE"
    INVALID_YEARS = "INVALID_YEARS"
    EXCESSIVE_INITIAL_SAVINGS = "EXCESSIVE_INITIAL_SAVINGS"
    EXCESSIVE_MONTHLY_DEPOSIT = "EXCESSIVE_MONTHLY_DEPOSIT"
    EXCESSIVE_INTEREST_RATE = "EXCESSIVE_INTEREST_RATE"
    EXCESSIVE_YEARS = "EXCESSIVE_YEARS"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    SERVER_ERROR = "SERVER_ERROR"


class CalculationError(ValueError):
    """A typed calculation failure that maps directly onto an error response."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status: HTTPStatus = HTTPStatus.BAD_REQUEST,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.status = status

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.code.value, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload
