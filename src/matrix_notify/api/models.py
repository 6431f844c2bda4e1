"""Pydantic models for the Matrix client-server wire format.

Each request and response body used by the notifier has an explicit
schema.  Responses are validated into these models as soon as they are
received so that an unexpected shape surfaces as a
:class:`~matrix_notify.errors.SerializationError` instead of a
``KeyError`` deep inside the pipeline.  Unknown fields are ignored.
"""

from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    """Body of ``POST /login`` for password authentication."""

    type: Literal["m.login.password"] = "m.login.password"
    user: str
    password: str


class LoginResponse(BaseModel):
    """Successful login response.

    Only ``access_token`` is consumed.  ``home_server`` is deprecated by
    newer homeservers and ``device_id`` may be omitted, so both are
    optional.
    """

    access_token: str
    user_id: str
    home_server: Optional[str] = None
    device_id: Optional[str] = None


class RoomMember(BaseModel):
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class JoinedMembersResponse(BaseModel):
    """Response of ``GET /rooms/{room}/joined_members``.

    ``joined`` maps fully-qualified user ids to their member profile.  It is
    required: a body without it is not a member list at all.
    """

    joined: Dict[str, RoomMember]

    def has_member(self, user_id: str) -> bool:
        # Exact, case-sensitive match on the identity.
        return user_id in self.joined


class MatrixErrorResponse(BaseModel):
    """Standard error body returned with non-success statuses."""

    errcode: str
    error: str
    retry_after_ms: Optional[int] = None


class TextMessage(BaseModel):
    """A plain text ``m.room.message`` event body."""

    model_config = ConfigDict(frozen=True)

    msgtype: Literal["m.text"] = "m.text"
    body: str


__all__ = [
    "LoginRequest",
    "LoginResponse",
    "RoomMember",
    "JoinedMembersResponse",
    "MatrixErrorResponse",
    "TextMessage",
]
