"""Typer application and CLI entry point for nationauth.

Commands:

- ``nationauth ping NATION [--retry-pin]`` -- ping a nation, rotating its
  stored credentials.
- ``nationauth add NAME PASSWORD`` -- not yet supported.
- ``nationauth new-password NATION PASSWORD`` -- not yet supported.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.  Errors from the
:class:`~nationauth.exceptions.NationAuthError` hierarchy exit with their
``exit_code``; anything else writes a crash log under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from nationauth import __version__
from nationauth.client import SyncClient
from nationauth.config import resolve_client_config
from nationauth.exceptions import NationAuthError
from nationauth.exit_codes import EXIT_GENERIC_FAILURE
from nationauth.operations import add_account, change_password, ping
from nationauth.output import error, get_output, success
from nationauth.store import ProfileStore

app = typer.Typer(
    name="nationauth",
    help="Manage and use NationStates nation credentials.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"nationauth {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Path to the profile document."
    ),
    user_agent: Optional[str] = typer.Option(
        None, "--user-agent", help="User-Agent to identify this client to the API."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~nationauth.output.OutputManager`, routes
    library logging to stderr, and stores the shared options in ``ctx.obj``.
    """
    from nationauth.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    output.install_logging()
    set_output(output)

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["user_agent"] = user_agent


def _fail(exc: NationAuthError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


@app.command("ping")
def ping_command(
    ctx: typer.Context,
    nation: str = typer.Argument(help="Name of the nation to ping."),
    retry_pin: bool = typer.Option(
        False,
        "--retry-pin",
        "-r",
        help="Retry with autologin or password if pin authentication fails.",
    ),
) -> None:
    """Ping a nation, refreshing its stored credentials."""
    store = ProfileStore.default(ctx.obj["profile"])
    config = resolve_client_config(cli_user_agent=ctx.obj["user_agent"])

    try:
        with SyncClient(config) as client:
            data = ping(store, client, nation, retry_pin=retry_pin)
    except NationAuthError as exc:
        raise _fail(exc) from None

    get_output().format_response(
        {shard.value: value for shard, value in data.shards.items()},
        title=data.nation,
    )
    success(f"Pinged {data.nation or nation}")


@app.command("add")
def add_command(
    ctx: typer.Context,
    name: str = typer.Argument(help="Name of the nation to add."),
    password: str = typer.Argument(help="The nation's password."),
) -> None:
    """Add a nation to the profile."""
    try:
        add_account(ProfileStore.default(ctx.obj["profile"]), name, password)
    except NationAuthError as exc:
        raise _fail(exc) from None


@app.command("new-password")
def new_password_command(
    ctx: typer.Context,
    nation: str = typer.Argument(help="Name of the nation whose password has changed."),
    password: str = typer.Argument(help="New password for this nation."),
) -> None:
    """Save a new password for a nation."""
    try:
        change_password(ProfileStore.default(ctx.obj["profile"]), nation, password)
    except NationAuthError as exc:
        raise _fail(exc) from None


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to disk and return the log file path."""
    from nationauth.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``nationauth`` console script."""
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except NationAuthError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
