"""HTTP transport for the Matrix client-server API.

:class:`MatrixClient` wraps a :class:`requests.Session` and exposes the
two verbs the notifier needs, GET and POST, optionally authenticated
with a bearer token.  It deliberately knows nothing about individual
endpoints; the token, membership and delivery modules build URLs with
:mod:`matrix_notify.api.endpoints` and interpret the responses.

Failures are translated into the taxonomy of :mod:`matrix_notify.errors`:

* any :class:`requests.RequestException` raised while sending becomes a
  :class:`~matrix_notify.errors.TransportError` tagged with the URL;
* :meth:`MatrixClient.parse` validates a body into a pydantic model and
  raises :class:`~matrix_notify.errors.SerializationError` otherwise;
* :meth:`MatrixClient.protocol_error` turns a non-success response into
  a :class:`~matrix_notify.errors.ProtocolError`.

Requests are never retried.  Every request carries a bounded timeout
(see :func:`matrix_notify.config.request_timeout`).
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..config import request_timeout
from ..errors import ProtocolError, SerializationError, TransportError
from .models import MatrixErrorResponse

T = TypeVar("T", bound=BaseModel)


def is_success(response: requests.Response) -> bool:
    """Return True for 2xx statuses only."""
    return 200 <= response.status_code < 300


class MatrixClient:
    """Synchronous transport bound to a single :class:`requests.Session`."""

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Per-request timeout in seconds.  Defaults to
                :func:`~matrix_notify.config.request_timeout`.
            session: Session used for all requests.  A new one is
                created when omitted; tests pass a stand-in.
        """
        self.timeout = timeout if timeout is not None else request_timeout()
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "MatrixClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _headers(token: Optional[str]) -> Dict[str, str]:
        if token is None:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _request(
        self,
        method: str,
        url: str,
        *,
        token: Optional[str] = None,
        body: Optional[BaseModel] = None,
    ) -> requests.Response:
        kwargs: Dict[str, Any] = {"headers": self._headers(token), "timeout": self.timeout}
        if method == "POST":
            # The homeserver expects a JSON object even for body-less POSTs
            # such as join.
            kwargs["json"] = body.model_dump() if body is not None else {}
        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(url, exc) from exc

    def get(self, url: str, *, token: Optional[str] = None) -> requests.Response:
        """Send a GET request, optionally with a bearer token."""
        return self._request("GET", url, token=token)

    def post(
        self,
        url: str,
        *,
        body: Optional[BaseModel] = None,
        token: Optional[str] = None,
    ) -> requests.Response:
        """Send a POST request with ``body`` serialized as JSON."""
        return self._request("POST", url, token=token, body=body)

    @staticmethod
    def parse(response: requests.Response, model: Type[T], url: str) -> T:
        """Decode the JSON body of ``response`` into ``model``.

        Raises:
            SerializationError: If the body is not JSON or does not match
                the schema.
        """
        try:
            data = response.json()
        except ValueError as exc:
            raise SerializationError(url, exc) from exc
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise SerializationError(url, exc) from exc

    @classmethod
    def protocol_error(cls, response: requests.Response, url: str) -> ProtocolError:
        """Build a :class:`ProtocolError` from a non-success response.

        Raises:
            SerializationError: If the body is not a standard error body.
        """
        body = cls.parse(response, MatrixErrorResponse, url)
        return ProtocolError(
            response.status_code,
            body.error,
            errcode=body.errcode,
            retry_after_ms=body.retry_after_ms,
        )


__all__ = ["MatrixClient", "is_success"]
