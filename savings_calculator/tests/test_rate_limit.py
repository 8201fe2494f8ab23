from __future__ import annotations

import pytest

from conftest import valid_payload
from savings_calculator.app import create_app
from savings_calculator.app.extensions import calculation_limit, window_minutes
from savings_calculator.config import Settings


def test_window_minutes():
    assert window_minutes(900) == 15
    assert window_minutes(90) == 1.5


def test_calculation_limit_follows_settings():
    app = create_app(Settings(RATE_LIMIT_MAX=7, RATE_LIMIT_WINDOW_SECONDS=120))

    with app.app_context():
        assert calculation_limit() == "7 per 120 second"


@pytest.fixture()
def limited_client():
    app = create_app(Settings(RATE_LIMIT_MAX=2, RATE_LIMIT_WINDOW_SECONDS=15 * 60))
    with app.test_client() as test_client:
        yield test_client


def test_api_returns_429_after_limit(limited_client):
    for _ in range(2):
        assert limited_client.post("/api/calculations", json=valid_payload()).status_code == 200

    resp = limited_client.post("/api/calculations", json=valid_payload())

    assert resp.status_code == 429
    body = resp.get_json()
    assert body["error"] == "TOO_MANY_REQUESTS"
    assert body["retryAfter"] == "15 minutes"
    assert body["details"]["limitPerWindow"] == 2
    assert body["details"]["windowDurationMinutes"] == 15
    assert isinstance(body["details"]["rateLimitReset"], int)
    assert resp.headers["RateLimit-Remaining"] == "0"
    assert "Retry-After" in resp.headers


def test_rate_limit_headers_on_validation_errors(limited_client):
    resp = limited_client.post("/api/calculations", json={})

    assert resp.status_code == 400
    assert resp.headers["RateLimit-Limit"] == "2"
    assert resp.headers["RateLimit-Remaining"] == "1"


def test_aliases_share_one_budget(limited_client):
    limited_client.post("/api/calculations", json=valid_payload())
    limited_client.post("/api/get-calculation", json=valid_payload())

    assert limited_client.post("/api/get-calculation", json=valid_payload()).status_code == 429


def test_clients_are_limited_by_address(limited_client):
    for _ in range(3):
        limited_client.post("/api/calculations", json=valid_payload())

    other = limited_client.post(
        "/api/calculations",
        json=valid_payload(),
        environ_base={"REMOTE_ADDR": "10.0.0.2"},
    )

    assert other.status_code == 200
