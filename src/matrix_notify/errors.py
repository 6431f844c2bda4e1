"""Error taxonomy for matrix-notify.

Every component raises one of the classes below instead of aborting the
process.  The orchestrator catches :class:`MatrixNotifyError` and the
CLI turns it into an ``[error]`` line and a non-zero exit status.

The hierarchy separates four kinds of failure:

* :class:`ConfigError` - the credential record is missing, malformed or
  lacks the field needed for the next step.
* :class:`TransportError` - the request never produced an HTTP response
  (connection refused, TLS, timeout).  Always tagged with the URL.
* :class:`ProtocolError` - the homeserver answered with a non-success
  status.  :class:`LoginFailed` and :class:`JoinRoomFailed` narrow it
  to the step that failed.
* :class:`SerializationError` - a body did not match the expected
  schema, so callers can tell "the server rejected us" apart from "we
  don't understand the server".
"""

from __future__ import annotations

from typing import Optional


class MatrixNotifyError(Exception):
    """Base class for all matrix-notify failures."""


class ConfigError(MatrixNotifyError):
    """The credential record cannot be used."""


class MissingPassword(ConfigError):
    """No usable token and no password to log in with."""

    def __init__(self) -> None:
        super().__init__("Missing password in configuration")


class MissingToken(ConfigError):
    """An authenticated call was attempted without an access token."""

    def __init__(self) -> None:
        super().__init__("Missing token in configuration")


class TransportError(MatrixNotifyError):
    """An HTTP request failed before a response was received."""

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"HTTP request to {url} failed: {cause}")


class ProtocolError(MatrixNotifyError):
    """The homeserver answered with a non-success status."""

    def __init__(
        self,
        status: int,
        message: str = "",
        *,
        errcode: Optional[str] = None,
        retry_after_ms: Optional[int] = None,
    ) -> None:
        self.status = status
        self.message = message
        self.errcode = errcode
        self.retry_after_ms = retry_after_ms
        super().__init__(self._describe())

    def _describe(self) -> str:
        text = f"Matrix API error (status {self.status})"
        if self.errcode:
            text += f" {self.errcode}"
        if self.message:
            text += f": {self.message}"
        if self.retry_after_ms is not None:
            text += f" (retry after {self.retry_after_ms} ms)"
        return text


class LoginFailed(ProtocolError):
    """Password login was rejected."""

    def _describe(self) -> str:
        return f"Login failed with status: {self.status}"


class JoinRoomFailed(ProtocolError):
    """The join request for the target room was rejected."""

    def _describe(self) -> str:
        return f"Join room failed with status: {self.status}"


class SerializationError(MatrixNotifyError):
    """A request or response body did not match the expected shape."""

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Unexpected response body from {url}: {cause}")


__all__ = [
    "MatrixNotifyError",
    "ConfigError",
    "MissingPassword",
    "MissingToken",
    "TransportError",
    "ProtocolError",
    "LoginFailed",
    "JoinRoomFailed",
    "SerializationError",
]
