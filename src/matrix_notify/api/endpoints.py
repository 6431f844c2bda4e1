"""URL builders for the client-server API endpoints used by the notifier.

User ids and room ids are percent-encoded as single path segments, so
ids such as ``!abc:example.org`` or ``#alias:example.org`` are safe to
embed.
"""

from __future__ import annotations

from urllib.parse import quote

from ..config import API_PREFIX


def _segment(value: str) -> str:
    return quote(value, safe="")


def _api_root(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{API_PREFIX}"


def build_profile_url(base_url: str, full_username: str) -> str:
    return f"{_api_root(base_url)}/profile/{_segment(full_username)}"


def build_login_url(base_url: str) -> str:
    return f"{_api_root(base_url)}/login"


def build_room_members_url(base_url: str, room: str) -> str:
    return f"{_api_root(base_url)}/rooms/{_segment(room)}/joined_members"


def build_join_room_url(base_url: str, room: str) -> str:
    return f"{_api_root(base_url)}/rooms/{_segment(room)}/join"


def build_send_message_url(base_url: str, room: str) -> str:
    return f"{_api_root(base_url)}/rooms/{_segment(room)}/send/m.room.message"


__all__ = [
    "build_profile_url",
    "build_login_url",
    "build_room_members_url",
    "build_join_room_url",
    "build_send_message_url",
]
