"""Access token resolution.

:func:`resolve_token` decides whether the cached token in the session
credentials is still usable and, if not, logs in with the stored
password.  It has no side effects on the credential file; the caller
persists whatever token is returned.

Verification is the only recoverable failure in the whole pipeline: a
rejected or unreachable profile lookup is reported on standard error
and the resolver falls back to password login.
"""

from __future__ import annotations

import sys

from ..credentials import SessionCredentials
from ..errors import LoginFailed, MatrixNotifyError, MissingPassword, ProtocolError
from .client import MatrixClient, is_success
from .endpoints import build_login_url, build_profile_url
from .models import LoginRequest, LoginResponse


def verify_token(token: str, credentials: SessionCredentials, client: MatrixClient) -> str:
    """Prove ``token`` is live with a profile lookup and return it unchanged.

    Raises:
        TransportError: If the request could not be sent.
        ProtocolError: If the homeserver answered with a non-success status.
    """
    url = build_profile_url(credentials.base_url, credentials.full_username)
    response = client.get(url, token=token)
    if not is_success(response):
        raise ProtocolError(response.status_code, response.text)
    return token


def login(credentials: SessionCredentials, client: MatrixClient) -> str:
    """Log in with the stored password and return the new access token.

    Raises:
        MissingPassword: If the credentials carry no password.  No
            request is made in that case.
        TransportError: If the request could not be sent.
        LoginFailed: If the homeserver rejected the login.
        SerializationError: If the success body is malformed.
    """
    if credentials.password is None:
        raise MissingPassword()
    url = build_login_url(credentials.base_url)
    body = LoginRequest(user=credentials.local_username, password=credentials.password)
    response = client.post(url, body=body)
    if not is_success(response):
        raise LoginFailed(response.status_code)
    return client.parse(response, LoginResponse, url).access_token


def resolve_token(credentials: SessionCredentials, client: MatrixClient) -> str:
    """Return a usable access token for ``credentials``.

    A present token is verified first and returned as is when the
    homeserver accepts it.  Otherwise exactly one login is attempted.
    """
    if credentials.token is not None:
        try:
            return verify_token(credentials.token, credentials, client)
        except MatrixNotifyError as exc:
            print(f"[matrix-notify] Failed to verify token: {exc}", file=sys.stderr)
    return login(credentials, client)


__all__ = ["verify_token", "login", "resolve_token"]
