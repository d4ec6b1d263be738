import json

import pytest
import requests

from promanager.biwenger_api import client as client_module
from promanager.biwenger_api.client import BiwengerClient, context_headers
from promanager.errors import RemoteFailure


class FakeHTTPResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def captured(monkeypatch):
    calls = []
    holder = {"response": FakeHTTPResponse(200, '{"status": 200, "data": {"ok": true}}')}

    def fake_request(method, url, **kwargs):
        calls.append((method, url, kwargs))
        if isinstance(holder["response"], Exception):
            raise holder["response"]
        return holder["response"]

    monkeypatch.setattr(client_module.requests, "request", fake_request)
    return calls, holder


def test_get_json_joins_url_and_bounds_only_connect(captured):
    calls, _ = captured
    client = BiwengerClient(base_url="https://example.test/api/v2/", connect_timeout_seconds=4)

    response = client.get_json("/account", headers={"x-lang": "es"})

    method, url, kwargs = calls[0]
    assert method == "GET"
    assert url == "https://example.test/api/v2/account"
    assert kwargs["timeout"] == (4, None)
    assert kwargs["headers"]["x-lang"] == "es"
    assert response.status_code == 200
    assert response.data() == {"ok": True}


def test_post_json_sends_body(captured):
    calls, _ = captured
    BiwengerClient().post_json("offers", {"amount": 5})
    method, _, kwargs = calls[0]
    assert method == "POST"
    assert kwargs["json"] == {"amount": 5}


def test_non_2xx_with_json_body_is_returned(captured):
    _, holder = captured
    holder["response"] = FakeHTTPResponse(409, '{"status": 409, "code": 0}')
    response = BiwengerClient().post_json("offers", {})
    assert response.status_code == 409
    assert response.payload["code"] == 0


def test_transport_error_becomes_remote_failure(captured):
    _, holder = captured
    holder["response"] = requests.ConnectionError("refused")
    with pytest.raises(RemoteFailure):
        BiwengerClient().get_json("account")


def test_empty_body_keeps_the_status(captured):
    _, holder = captured
    holder["response"] = FakeHTTPResponse(204, "")
    response = BiwengerClient().post_json("offers", {})
    assert response.status_code == 204
    assert response.payload is None
    assert response.data() is None


def test_invalid_json_keeps_the_status(captured):
    _, holder = captured
    holder["response"] = FakeHTTPResponse(502, "<html>bad gateway</html>")
    response = BiwengerClient().get_json("account")
    assert response.status_code == 502
    assert response.payload is None


def test_context_headers():
    headers = context_headers("tok", league_id=77)
    assert headers["Authorization"] == "Bearer tok"
    assert headers["x-league"] == "77"
    assert headers["x-user"] == ""
    assert "x-league" not in context_headers(None)
