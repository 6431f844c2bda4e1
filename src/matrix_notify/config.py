"""
Configuration constants for matrix-notify.

This module centralises configuration values that are used across the
application.  New values should be added here deliberately.  Runtime
overrides are read from environment variables by the helpers below;
the credential record itself lives in a TOML file handled by
:mod:`matrix_notify.credentials`.
"""

import os
from typing import Final

# Name used in help output and as the prefix of diagnostic lines.
PROJECT_NAME: Final[str] = "matrix-notify"

# Credential file looked up in the working directory when neither
# ``--config`` nor ``MATRIX_NOTIFY_CONFIG`` is given.
DEFAULT_CONFIG_FILENAME: Final[str] = "matrix-notify.toml"

# Path prefix of the client-server API.  All endpoint builders in
# :mod:`matrix_notify.api.endpoints` append to ``base_url + API_PREFIX``.
API_PREFIX: Final[str] = "/_matrix/client/r0"

# Per-request timeout in seconds.  A hung homeserver must not block a
# periodic notifier forever.
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

# Environment variables.
ENV_CONFIG_PATH: Final[str] = "MATRIX_NOTIFY_CONFIG"
ENV_TIMEOUT: Final[str] = "MATRIX_NOTIFY_TIMEOUT"


def request_timeout() -> float:
    """Return the per-request timeout, honouring ``MATRIX_NOTIFY_TIMEOUT``.

    Unparseable or non-positive values fall back to
    :data:`DEFAULT_TIMEOUT_SECONDS`.
    """
    raw = os.getenv(ENV_TIMEOUT)
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    if value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return value


__all__ = [
    "PROJECT_NAME",
    "DEFAULT_CONFIG_FILENAME",
    "API_PREFIX",
    "DEFAULT_TIMEOUT_SECONDS",
    "ENV_CONFIG_PATH",
    "ENV_TIMEOUT",
    "request_timeout",
]
