"""Matrix client-server API calls used by matrix-notify.

This package contains the transport (:mod:`.client`), wire schemas
(:mod:`.models`), endpoint builders (:mod:`.endpoints`) and the three
pipeline stages: token resolution, membership and delivery.
"""

from .client import MatrixClient  # noqa: F401
from .delivery import deliver  # noqa: F401
from .membership import ensure_member, is_member, join_room  # noqa: F401
from .token import login, resolve_token, verify_token  # noqa: F401

__all__ = [
    "MatrixClient",
    "deliver",
    "ensure_member",
    "is_member",
    "join_room",
    "login",
    "resolve_token",
    "verify_token",
]
