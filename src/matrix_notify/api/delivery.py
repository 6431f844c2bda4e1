"""Message delivery."""

from __future__ import annotations

from ..credentials import SessionCredentials
from ..errors import MissingToken
from .client import MatrixClient, is_success
from .endpoints import build_send_message_url
from .models import TextMessage


def deliver(
    room: str,
    message: str,
    credentials: SessionCredentials,
    client: MatrixClient,
) -> None:
    """Send ``message`` as a plain text event to ``room``.

    The response body of a successful send is discarded.  A rejected
    send raises :class:`~matrix_notify.errors.ProtocolError` carrying the
    homeserver's ``error`` text and, for rate limits, ``retry_after_ms``.
    Nothing is retried.

    Raises:
        MissingToken: If no access token is set.
        TransportError: If the request could not be sent.
        ProtocolError: If the homeserver rejected the message.
        SerializationError: If the error body is not a standard error body.
    """
    if credentials.token is None:
        raise MissingToken()
    body = TextMessage(body=message)
    url = build_send_message_url(credentials.base_url, room)
    response = client.post(url, body=body, token=credentials.token)
    if not is_success(response):
        raise client.protocol_error(response, url)


__all__ = ["deliver"]
