"""Top-level package for matrix-notify.

This package provides a command-line interface via :mod:`matrix_notify.cli`,
the Matrix API calls in :mod:`matrix_notify.api`, the credential store in
:mod:`matrix_notify.credentials` and the send pipeline in
:mod:`matrix_notify.orchestration`.
"""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "api",
    "credentials",
    "orchestration",
]
