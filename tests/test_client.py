"""Tests for the HTTP transport and endpoint builders."""

from __future__ import annotations

import pytest
import requests

from fake_matrix import BASE_URL, DummyResponse, FakeSession
from matrix_notify.api.client import MatrixClient, is_success
from matrix_notify.api.endpoints import (
    build_join_room_url,
    build_login_url,
    build_profile_url,
    build_send_message_url,
)
from matrix_notify.api.models import LoginRequest, LoginResponse
from matrix_notify.config import DEFAULT_TIMEOUT_SECONDS, request_timeout
from matrix_notify.errors import SerializationError, TransportError


def test_endpoint_urls_encode_identifiers() -> None:
    assert build_login_url(BASE_URL + "/") == "http://matrix.test/_matrix/client/r0/login"
    assert (
        build_profile_url(BASE_URL, "@user:matrix.test")
        == "http://matrix.test/_matrix/client/r0/profile/%40user%3Amatrix.test"
    )
    assert (
        build_join_room_url(BASE_URL, "#alias:matrix.test")
        == "http://matrix.test/_matrix/client/r0/rooms/%23alias%3Amatrix.test/join"
    )
    assert build_send_message_url(BASE_URL, "!r:m").endswith(
        "/rooms/%21r%3Am/send/m.room.message"
    )


def test_get_sends_bearer_token_and_timeout(session: FakeSession, client: MatrixClient) -> None:
    url = f"{BASE_URL}/ping"
    session.add("GET", url, 200, {})
    client.get(url, token="abc")
    call = session.calls[0]
    assert call.headers == {"Authorization": "Bearer abc"}
    assert call.timeout == 5.0
    assert call.json is None


def test_post_serializes_body_without_auth(session: FakeSession, client: MatrixClient) -> None:
    url = build_login_url(BASE_URL)
    session.add("POST", url, 200, {})
    client.post(url, body=LoginRequest(user="u", password="p"))
    call = session.calls[0]
    assert "Authorization" not in call.headers
    assert call.json == {"type": "m.login.password", "user": "u", "password": "p"}


def test_post_without_body_sends_empty_object(session: FakeSession, client: MatrixClient) -> None:
    url = f"{BASE_URL}/join"
    session.add("POST", url, 200, {})
    client.post(url, token="t")
    assert session.calls[0].json == {}


def test_transport_failure_is_tagged_with_url(session: FakeSession, client: MatrixClient) -> None:
    url = f"{BASE_URL}/down"
    session.add("GET", url, exc=requests.Timeout("timed out"))
    with pytest.raises(TransportError) as excinfo:
        client.get(url)
    assert excinfo.value.url == url
    assert isinstance(excinfo.value.cause, requests.Timeout)


def test_parse_rejects_non_json_and_wrong_shape() -> None:
    url = "http://matrix.test/x"
    with pytest.raises(SerializationError):
        MatrixClient.parse(DummyResponse(200, text="<html>"), LoginResponse, url)  # type: ignore[arg-type]
    with pytest.raises(SerializationError):
        MatrixClient.parse(DummyResponse(200, {"user_id": "u"}), LoginResponse, url)  # type: ignore[arg-type]


def test_protocol_error_carries_matrix_fields() -> None:
    response = DummyResponse(
        429, {"errcode": "M_LIMIT_EXCEEDED", "error": "too many requests", "retry_after_ms": 5000}
    )
    err = MatrixClient.protocol_error(response, "http://matrix.test/send")  # type: ignore[arg-type]
    assert err.status == 429
    assert err.errcode == "M_LIMIT_EXCEEDED"
    assert err.message == "too many requests"
    assert err.retry_after_ms == 5000
    assert "too many requests" in str(err)


def test_is_success_only_for_2xx() -> None:
    assert is_success(DummyResponse(204))  # type: ignore[arg-type]
    assert not is_success(DummyResponse(302))  # type: ignore[arg-type]
    assert not is_success(DummyResponse(401))  # type: ignore[arg-type]


def test_context_manager_closes_session() -> None:
    session = FakeSession()
    with MatrixClient(session=session, timeout=1.0):  # type: ignore[arg-type]
        pass
    assert session.closed


def test_request_timeout_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MATRIX_NOTIFY_TIMEOUT", raising=False)
    assert request_timeout() == DEFAULT_TIMEOUT_SECONDS
    monkeypatch.setenv("MATRIX_NOTIFY_TIMEOUT", "2.5")
    assert request_timeout() == 2.5
    monkeypatch.setenv("MATRIX_NOTIFY_TIMEOUT", "soon")
    assert request_timeout() == DEFAULT_TIMEOUT_SECONDS
    monkeypatch.setenv("MATRIX_NOTIFY_TIMEOUT", "-1")
    assert request_timeout() == DEFAULT_TIMEOUT_SECONDS


def test_protocol_error_requires_human_message() -> None:
    response = DummyResponse(403, {"errcode": "M_FORBIDDEN"})
    with pytest.raises(SerializationError):
        MatrixClient.protocol_error(response, "http://matrix.test/send")  # type: ignore[arg-type]
