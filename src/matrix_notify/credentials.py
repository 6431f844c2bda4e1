"""Credential store for matrix-notify.

The session credentials are kept in a small TOML file (by default
``matrix-notify.toml`` in the working directory) with the keys::

    base_url = "https://matrix.example.org"
    local_username = "notifier"
    full_username = "@notifier:example.org"
    password = "..."      # optional
    token = "..."         # optional

At least one of ``password`` or ``token`` must be present for a send to
succeed.  The file path is always passed in explicitly so callers and
tests can point at any location.  Saving rewrites the whole file from the
record; keys this tool does not know about are carried through.  Load
failures are reported as :class:`~matrix_notify.errors.ConfigError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import toml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError

PathLike = Union[str, Path]


class SessionCredentials(BaseModel):
    """Persisted session record.

    Attributes:
        base_url: Homeserver base address, stored without trailing slash.
        local_username: Local part of the identity used for password login.
        full_username: Fully-qualified identity (``@user:server``) used for
            profile lookups and membership checks.
        password: Optional plaintext password.
        token: Optional cached access token.
    """

    # Keys the user added to the file are kept and written back unchanged.
    model_config = ConfigDict(extra="allow")

    base_url: str
    local_username: str
    full_username: str
    password: Optional[str] = None
    token: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_credentials(path: PathLike) -> SessionCredentials:
    """Read and validate the credential record stored at ``path``.

    Raises:
        ConfigError: If the file is missing, is not valid TOML or does
            not contain the required fields.
    """
    p = Path(path)
    if not p.is_file():
        raise ConfigError(
            f"Configuration file not found: {p} (run 'matrix-notify generate' to create one)"
        )
    try:
        with p.open("r", encoding="utf-8") as f:
            data = toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        raise ConfigError(f"Could not read configuration file {p}: {exc}") from exc
    try:
        return SessionCredentials.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {p}: {exc}") from exc


def save_credentials(credentials: SessionCredentials, path: PathLike) -> None:
    """Write ``credentials`` to ``path``, omitting unset optional fields."""
    p = Path(path)
    try:
        with p.open("w", encoding="utf-8") as f:
            toml.dump(credentials.model_dump(exclude_none=True), f)
    except OSError as exc:
        raise ConfigError(f"Could not write configuration file {p}: {exc}") from exc


def example_credentials() -> SessionCredentials:
    """Return a placeholder record suitable for a freshly generated file."""
    return SessionCredentials(
        base_url="https://matrix.example.org",
        local_username="notifier",
        full_username="@notifier:example.org",
        password="change-me",
    )


def write_example(path: PathLike, *, force: bool = False) -> Path:
    """Write :func:`example_credentials` to ``path`` and return the path.

    An existing file is only replaced when ``force`` is true.

    Raises:
        ConfigError: If the file exists and ``force`` is false, or the
            file cannot be written.
    """
    p = Path(path)
    if p.exists() and not force:
        raise ConfigError(f"Refusing to overwrite existing configuration file: {p}")
    save_credentials(example_credentials(), p)
    return p


__all__ = [
    "SessionCredentials",
    "load_credentials",
    "save_credentials",
    "example_credentials",
    "write_example",
]
