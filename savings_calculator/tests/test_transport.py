from __future__ import annotations

from unittest import mock

import pytest
import requests

from conftest import FakeResponse, FlaskSession, valid_payload
from savings_calculator.client.transport import CalculationClient, ConnectionFailure


def test_calculate_posts_json_to_the_api(client):
    session = FlaskSession(client)
    api = CalculationClient(base_url="http://testserver/", session=session)

    response = api.calculate(valid_payload())

    assert session.calls == [("POST", "/api/calculations", valid_payload())]
    assert response.ok
    assert response.body["summary"]["totalDeposited"] == 6000


def test_error_responses_are_returned_not_raised(client):
    api = CalculationClient(base_url="http://testserver", session=FlaskSession(client))

    response = api.calculate(valid_payload(years=0))

    assert not response.ok
    assert response.status == 400
    assert response.body["error"] == "INVALID_YEARS"


def test_alternate_path(client):
    session = FlaskSession(client)
    api = CalculationClient(base_url="http://testserver", path="/api/get-calculation", session=session)

    assert api.calculate(valid_payload()).ok
    assert session.calls[0][1] == "/api/get-calculation"


def test_health(client):
    api = CalculationClient(base_url="http://testserver", session=FlaskSession(client))

    response = api.health()

    assert response.ok
    assert response.body["status"] == "ok"


def test_request_exceptions_become_connection_failures():
    session = mock.Mock(spec=requests.Session)
    session.post.side_effect = requests.ConnectionError("refused")
    api = CalculationClient(session=session)

    with pytest.raises(ConnectionFailure):
        api.calculate(valid_payload())

    session.post.assert_called_once_with(
        "http://localhost:3001/api/calculations", json=valid_payload(), timeout=10.0
    )


def test_non_json_body_is_a_connection_failure():
    session = mock.Mock(spec=requests.Session)
    session.post.return_value = FakeResponse(502, b"<html>Bad Gateway</html>")
    api = CalculationClient(session=session)

    with pytest.raises(ConnectionFailure):
        api.calculate(valid_payload())
