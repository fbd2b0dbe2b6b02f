"""GoogleIdentityClient with a mocked requests session"""

from unittest.mock import MagicMock

import pytest
import requests

from taskboard.auth.google import GoogleIdentityClient
from taskboard.utils.exceptions import InternalError, UnauthorizedError

USERINFO_URL = "https://google.example.com/userinfo"


def _client(response=None, error=None):
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return GoogleIdentityClient(USERINFO_URL, timeout_seconds=3, session=session), session


def _response(status_code=200, payload=None):
    r = MagicMock()
    r.status_code = status_code
    r.ok = 200 <= status_code < 300
    if isinstance(payload, Exception):
        r.json.side_effect = payload
    else:
        r.json.return_value = payload
    return r


def test_fetch_profile_success_sends_bearer_and_timeout():
    payload = {
        "sub": "123",
        "email": "test@example.com",
        "email_verified": True,
        "given_name": "Test",
        "family_name": "User",
        "picture": "https://example.com/p.png",
    }
    client, session = _client(_response(200, payload))

    profile = client.fetch_profile("access-token")

    assert profile.sub == "123"
    assert profile.email_verified is True
    session.get.assert_called_once_with(
        USERINFO_URL,
        headers={"Authorization": "Bearer access-token"},
        timeout=3,
    )


def test_rejected_token_is_unauthorized():
    client, _ = _client(_response(401, {"error": "invalid_token"}))

    with pytest.raises(UnauthorizedError):
        client.fetch_profile("bad")


def test_empty_token_never_calls_google():
    client, session = _client(_response(200, {}))

    with pytest.raises(UnauthorizedError):
        client.fetch_profile("")
    session.get.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [requests.exceptions.Timeout("slow"), requests.exceptions.ConnectionError("down")],
)
def test_transport_failures_are_internal_errors(error):
    client, _ = _client(error=error)

    with pytest.raises(InternalError, match="Google login failed"):
        client.fetch_profile("token")


@pytest.mark.parametrize("payload", [ValueError("no json"), {"email": "test@example.com"}])
def test_bad_payload_is_internal_error(payload):
    client, _ = _client(_response(200, payload))

    with pytest.raises(InternalError):
        client.fetch_profile("token")


def test_unverified_email_flag_is_preserved():
    client, _ = _client(_response(200, {"sub": "1", "email": "test@example.com", "email_verified": False}))

    assert client.fetch_profile("token").email_verified is False
