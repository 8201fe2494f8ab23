from __future__ import annotations

import json
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import urlsplit

import pytest
from flask import Flask
from flask.testing import FlaskClient

from savings_calculator.app import create_app
from savings_calculator.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        CORS_ALLOWED_ORIGINS="http://localhost:5173,http://127.0.0.1:5173",
        RATE_LIMIT_MAX=50,
        RATE_LIMIT_WINDOW_SECONDS=15 * 60,
    )


@pytest.fixture()
def app(settings: Settings) -> Flask:
    flask_app = create_app(settings)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


def valid_payload(**overrides: Any) -> dict:
    payload = {
        "initialSavings": 1000,
        "monthlyDeposit": 100,
        "interestRate": 5,
        "years": 5,
    }
    payload.update(overrides)
    return payload


class FakeResponse:
    """Just enough of ``requests.Response`` for ``CalculationClient``."""

    def __init__(self, status_code: int, data: bytes):
        self.status_code = status_code
        self._data = data

    def json(self) -> Any:
        return json.loads(self._data)


class FlaskSession:
    """Routes ``requests.Session`` style calls into a Flask test client."""

    def __init__(self, flask_client: FlaskClient):
        self.flask_client = flask_client
        self.calls: List[Tuple[str, str, Optional[dict]]] = []

    def post(self, url: str, json: Optional[dict] = None, timeout: Optional[float] = None) -> FakeResponse:
        path = urlsplit(url).path
        self.calls.append(("POST", path, json))
        resp = self.flask_client.post(path, json=json)
        return FakeResponse(resp.status_code, resp.get_data())

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        path = urlsplit(url).path
        self.calls.append(("GET", path, None))
        resp = self.flask_client.get(path)
        return FakeResponse(resp.status_code, resp.get_data())


class ManualScheduler:
    """Scheduler driven by ``advance`` instead of wall-clock time."""

    class Handle:
        def __init__(self, due: float, callback: Callable[[], None]):
            self.due = due
            self.callback = callback
            self.cancelled = False

        def cancel(self) -> None:
            self.cancelled = True

    def __init__(self):
        self.now = 0.0
        self.handles: List["ManualScheduler.Handle"] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> "ManualScheduler.Handle":
        handle = self.Handle(round(self.now + delay, 6), callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List["ManualScheduler.Handle"]:
        return [handle for handle in self.handles if not handle.cancelled]

    def advance(self, seconds: float) -> None:
        self.now = round(self.now + seconds, 6)
        while True:
            due = [h for h in self.pending if h.due <= self.now]
            if not due:
                return
            handle = min(due, key=lambda h: h.due)
            self.handles.remove(handle)
            handle.callback()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()
