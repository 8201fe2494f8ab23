"""Thin HTTP client for the calculation API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

logger = logging.getLogger(__name__)


class ConnectionFailure(Exception):
    """The API could not be reached or did not answer with JSON."""


@dataclass(frozen=True)
class ApiResponse:
    status: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class CalculationClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        path: str = "/api/calculations",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.timeout = timeout
        self.session = session or requests.Session()

    def _read(self, response: requests.Response) -> ApiResponse:
        try:
            body = response.json()
        except ValueError as exc:
            raise ConnectionFailure(f"Non-JSON response (HTTP {response.status_code})") from exc
        return ApiResponse(status=response.status_code, body=body if isinstance(body, dict) else {})

    def calculate(self, payload: Mapping[str, Any]) -> ApiResponse:
        """POST ``payload`` to the calculation endpoint."""
        url = f"{self.base_url}{self.path}"
        try:
            response = self.session.post(url, json=dict(payload), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Calculation request to %s failed: %s", url, exc)
            raise ConnectionFailure(str(exc)) from exc
        return self._read(response)

    def health(self) -> ApiResponse:
        url = f"{self.base_url}/api/health"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ConnectionFailure(str(exc)) from exc
        return self._read(response)
