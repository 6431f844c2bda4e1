"""Room membership checks and joins.

Membership is never cached: group membership can change between runs
of a periodic notifier, so every invocation queries the joined-member
set before sending.
"""

from __future__ import annotations

from ..credentials import SessionCredentials
from ..errors import JoinRoomFailed, MissingToken
from .client import MatrixClient, is_success
from .endpoints import build_join_room_url, build_room_members_url
from .models import JoinedMembersResponse


def _require_token(credentials: SessionCredentials) -> str:
    if credentials.token is None:
        raise MissingToken()
    return credentials.token


def is_member(room: str, credentials: SessionCredentials, client: MatrixClient) -> bool:
    """Return True if ``credentials.full_username`` has joined ``room``.

    A transport failure propagates, as does a body that cannot be
    parsed.  A well-formed error response (homeservers answer
    ``M_FORBIDDEN`` to non-members) means "not a member".
    """
    token = _require_token(credentials)
    url = build_room_members_url(credentials.base_url, room)
    response = client.get(url, token=token)
    if not is_success(response):
        # Raises SerializationError when the body is not an error body.
        client.protocol_error(response, url)
        return False
    members = client.parse(response, JoinedMembersResponse, url)
    return members.has_member(credentials.full_username)


def join_room(room: str, credentials: SessionCredentials, client: MatrixClient) -> None:
    """Join ``room``.  A single attempt; any non-success status fails."""
    token = _require_token(credentials)
    url = build_join_room_url(credentials.base_url, room)
    response = client.post(url, token=token)
    if not is_success(response):
        raise JoinRoomFailed(response.status_code)


def ensure_member(room: str, credentials: SessionCredentials, client: MatrixClient) -> None:
    """Join ``room`` unless the identity is already a member."""
    if is_member(room, credentials, client):
        return
    join_room(room, credentials, client)


__all__ = ["is_member", "join_room", "ensure_member"]
