"""Command-line interface for matrix-notify.

This module uses the :mod:`click` library to expose two entry points:

* ``matrix-notify --room ROOM --message TEXT`` sends a single text
  message, logging in or joining the room first when needed;
* ``matrix-notify generate`` writes an example credential file.

The credential file defaults to ``matrix-notify.toml`` in the working
directory and can be moved with ``--config`` or the
``MATRIX_NOTIFY_CONFIG`` environment variable.  Exit status is 0 when
the message was delivered, 1 on any failure and 2 on usage errors.
"""

from __future__ import annotations

from typing import Optional

import click

from . import __version__
from .api.client import MatrixClient
from .config import DEFAULT_CONFIG_FILENAME, ENV_CONFIG_PATH, PROJECT_NAME
from .credentials import write_example
from .errors import ConfigError
from .orchestration.notify import NotifyResult, RunState, run_notify


def _build_client() -> MatrixClient:
    """Construct the transport used by the send path.

    Factored out so tests can monkeypatch it with a client backed by a
    fake session.
    """
    return MatrixClient()


# Prefix for the error line, keyed by the last state reached before the
# run failed.
_FAILURE_CONTEXT = {
    RunState.START: "Could not obtain an access token",
    RunState.TOKEN_RESOLVED: "Could not join room",
    RunState.MEMBER_ENSURED: "Failed to send message",
}


def _report_failure(result: NotifyResult, room: str) -> None:
    error = result.error
    if isinstance(error, ConfigError) and result.failed_at is RunState.START:
        click.echo(f"[error] {error}", err=True)
    else:
        context = _FAILURE_CONTEXT.get(result.failed_at, "Run failed")
        if result.failed_at is RunState.TOKEN_RESOLVED:
            context = f"{context} {room}"
        click.echo(f"[error] {context}: {error}", err=True)
    if result.token_persisted:
        click.echo("[warn] The access token was saved; the next run will reuse it.", err=True)


@click.group(
    invoke_without_command=True,
    help="Send a text message to a Matrix room.",
)
@click.version_option(__version__, prog_name=PROJECT_NAME)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    envvar=ENV_CONFIG_PATH,
    help="Path to the TOML credential file.",
)
@click.option("-r", "--room", type=str, default=None, help="ID of the room receiving the message.")
@click.option("-m", "--message", type=str, default=None, help="Message to send.")
@click.pass_context
def cli(ctx: click.Context, config_path: str, room: Optional[str], message: Optional[str]) -> None:
    """Send ``--message`` to ``--room`` unless a subcommand is given."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is not None:
        return
    if not room or not message:
        raise click.UsageError("Both --room and --message are required.", ctx=ctx)
    with _build_client() as client:
        result = run_notify(room, message, config_path, client=client)
    if result.ok:
        click.echo(f"Message sent to {room}")
        return
    _report_failure(result, room)
    ctx.exit(1)


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite the credential file if it already exists.",
)
@click.pass_context
def generate(ctx: click.Context, force: bool) -> None:
    """Write an example credential file to the --config path.

    Fill in the homeserver address, both forms of the username and
    either a password or an access token before sending.
    """
    config_path = ctx.obj["config_path"]
    try:
        written = write_example(config_path, force=force)
    except ConfigError as exc:
        click.echo(f"[error] {exc}", err=True)
        ctx.exit(1)
    click.echo(f"Wrote example configuration to {written}")
