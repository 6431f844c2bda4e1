"""Entry point for running matrix-notify as a module.

This allows the CLI to be invoked with ``python -m matrix_notify``.
"""

from .cli import cli

if __name__ == "__main__":  # pragma: no cover
    cli()
