"""End-to-end notification pipeline for matrix-notify.

``run_notify`` sequences the three API stages into a single
"ensure authenticated, ensure member, deliver" run::

    START -> TOKEN_RESOLVED -> MEMBER_ENSURED -> DELIVERED
                   \\                 \\                \\
                    +-----------------+----------------+--> FAILED

The resolved token is written back to the credential file as soon as it
is known, before membership or delivery are attempted.  A login
performed in this run is therefore never wasted when the room turns
out to be unreachable: the next run starts from the fresh token.

Stages raise errors from :mod:`matrix_notify.errors`; this module
catches them and reports the outcome as a :class:`NotifyResult`.  It
never prints or exits, which is left to the CLI.  In tests a client
with a fake session can be injected to avoid network access.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..api.client import MatrixClient
from ..api.delivery import deliver
from ..api.membership import ensure_member
from ..api.token import resolve_token
from ..credentials import load_credentials, save_credentials
from ..errors import MatrixNotifyError


class RunState(str, Enum):
    START = "start"
    TOKEN_RESOLVED = "token_resolved"
    MEMBER_ENSURED = "member_ensured"
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass
class NotifyResult:
    """Outcome of a single run.

    Attributes:
        state: Terminal state, either ``DELIVERED`` or ``FAILED``.
        failed_at: The last state reached before failing, or None.
        error: The error that ended the run, or None on success.
        token_persisted: Whether the credential file was rewritten with
            the resolved token during this run.
    """

    state: RunState
    failed_at: Optional[RunState] = None
    error: Optional[MatrixNotifyError] = None
    token_persisted: bool = False

    @property
    def ok(self) -> bool:
        return self.state is RunState.DELIVERED


def _run(room: str, message: str, config_path: Path, client: MatrixClient) -> NotifyResult:
    state = RunState.START
    persisted = False
    try:
        credentials = load_credentials(config_path)
        token = resolve_token(credentials, client)
        credentials = credentials.model_copy(update={"token": token})
        save_credentials(credentials, config_path)
        persisted = True
        state = RunState.TOKEN_RESOLVED

        ensure_member(room, credentials, client)
        state = RunState.MEMBER_ENSURED

        deliver(room, message, credentials, client)
    except MatrixNotifyError as exc:
        return NotifyResult(
            state=RunState.FAILED,
            failed_at=state,
            error=exc,
            token_persisted=persisted,
        )
    return NotifyResult(state=RunState.DELIVERED, token_persisted=persisted)


def run_notify(
    room: str,
    message: str,
    config_path: Union[str, Path],
    *,
    client: Optional[MatrixClient] = None,
) -> NotifyResult:
    """Deliver ``message`` to ``room`` using the credentials at ``config_path``.

    Args:
        room: Target room identifier.  Must be non-empty.
        message: Text body to send.
        config_path: Location of the TOML credential file.  It is read
            once and rewritten at most once.
        client: Transport to use.  A new :class:`MatrixClient` is
            created (and closed afterwards) when omitted.

    Returns:
        A :class:`NotifyResult` describing the terminal state.

    Raises:
        ValueError: If ``room`` is empty.
    """
    if not room:
        raise ValueError("room must not be empty")
    owns_client = client is None
    if client is None:
        client = MatrixClient()
    try:
        return _run(room, message, Path(config_path), client)
    finally:
        if owns_client:
            client.close()


__all__ = ["RunState", "NotifyResult", "run_notify"]
