import pytest

from promanager.biwenger_api.client import RemoteResponse
from promanager.normalize.offers import normalize_offer_result


@pytest.mark.parametrize(
    "payload, accepted",
    [
        ({"status": 200, "code": 0}, True),
        ({"status": 302, "code": 17}, True),
        ({"status": 409, "code": 0}, True),
        ({"status": 409, "code": 5}, False),
        ({"status": 400}, False),
        ({"status": 500, "code": "0"}, True),
    ],
)
def test_acceptance_checks_status_and_code_independently(payload, accepted):
    result = normalize_offer_result(RemoteResponse(200, payload))
    assert result.accepted is accepted


def test_missing_fields_get_defaults():
    result = normalize_offer_result(RemoteResponse(404, {}))
    assert result.status == 404
    assert result.message == "No message"
    assert result.user_message == "No user message"
    assert result.code is None
    assert result.to_dict()["userMessage"] == "No user message"


def test_body_status_wins_over_http_status():
    result = normalize_offer_result(
        RemoteResponse(200, {"status": 403, "userMessage": "Not enough money"})
    )
    assert result.status == 403
    assert result.user_message == "Not enough money"
    assert result.accepted is False
