"""Tests for access token resolution.

Properties covered:

* a token the homeserver accepts is returned unchanged with no login;
* an absent or rejected token with a password leads to exactly one login;
* no token and no password fails with ``MissingPassword`` and makes no
  request at all.
"""

from __future__ import annotations

import pytest
import requests

from fake_matrix import LOCAL_USERNAME, FakeMatrix, FakeSession, make_credentials
from matrix_notify.api.client import MatrixClient
from matrix_notify.api.token import login, resolve_token, verify_token
from matrix_notify.errors import LoginFailed, MissingPassword, ProtocolError, SerializationError


def test_valid_token_is_returned_unchanged(matrix: FakeMatrix, client: MatrixClient) -> None:
    creds = make_credentials(password="secret123", token="live-token")
    assert resolve_token(creds, client) == "live-token"
    assert matrix.calls_to("GET", matrix.profile_url) == 1
    assert matrix.calls_to("POST", matrix.login_url) == 0
    assert matrix.session.calls[0].headers["Authorization"] == "Bearer live-token"


def test_absent_token_logs_in_once(matrix: FakeMatrix, client: MatrixClient) -> None:
    matrix.login_returns("tok-A")
    creds = make_credentials(password="secret123")
    assert resolve_token(creds, client) == "tok-A"
    assert matrix.calls_to("GET", matrix.profile_url) == 0
    assert matrix.calls_to("POST", matrix.login_url) == 1
    login_call = matrix.session.calls[0]
    assert login_call.json == {
        "type": "m.login.password",
        "user": LOCAL_USERNAME,
        "password": "secret123",
    }


def test_rejected_token_falls_back_to_login(
    matrix: FakeMatrix, client: MatrixClient, capsys: pytest.CaptureFixture[str]
) -> None:
    matrix.session.add("GET", matrix.profile_url, 401, {"errcode": "M_UNKNOWN_TOKEN", "error": "Invalid token"})
    matrix.login_returns("fresh")
    creds = make_credentials(password="secret123", token="stale")
    assert resolve_token(creds, client) == "fresh"
    assert matrix.calls_to("POST", matrix.login_url) == 1
    assert "Failed to verify token" in capsys.readouterr().err


def test_unreachable_profile_falls_back_to_login(matrix: FakeMatrix, client: MatrixClient) -> None:
    matrix.session.add("GET", matrix.profile_url, exc=requests.ConnectionError("refused"))
    matrix.login_returns("fresh")
    creds = make_credentials(password="secret123", token="stale")
    assert resolve_token(creds, client) == "fresh"


def test_no_token_no_password_makes_no_calls(session: FakeSession, client: MatrixClient) -> None:
    with pytest.raises(MissingPassword):
        resolve_token(make_credentials(), client)
    assert session.calls == []


def test_stale_token_without_password_fails_before_login(matrix: FakeMatrix, client: MatrixClient) -> None:
    matrix.session.add("GET", matrix.profile_url, 401, {"errcode": "M_UNKNOWN_TOKEN", "error": "Invalid token"})
    with pytest.raises(MissingPassword):
        resolve_token(make_credentials(token="stale"), client)
    assert matrix.calls_to("POST", matrix.login_url) == 0


def test_login_rejected_carries_status(matrix: FakeMatrix, client: MatrixClient) -> None:
    matrix.session.add("POST", matrix.login_url, 403, {"errcode": "M_FORBIDDEN", "error": "Invalid password"})
    with pytest.raises(LoginFailed) as excinfo:
        login(make_credentials(password="wrong"), client)
    assert excinfo.value.status == 403
    assert str(excinfo.value) == "Login failed with status: 403"


def test_login_malformed_body_is_serialization_error(matrix: FakeMatrix, client: MatrixClient) -> None:
    matrix.session.add("POST", matrix.login_url, 200, {"user_id": "@testuser:matrix.test"})
    with pytest.raises(SerializationError):
        login(make_credentials(password="secret123"), client)


def test_verify_token_raises_on_rejection(matrix: FakeMatrix, client: MatrixClient) -> None:
    matrix.session.add("GET", matrix.profile_url, 401, text="unauthorised")
    with pytest.raises(ProtocolError) as excinfo:
        verify_token("stale", make_credentials(token="stale"), client)
    assert excinfo.value.status == 401
