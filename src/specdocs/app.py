"""Typer application and CLI entry point for specdocs.

This module wires together the top-level Typer application and registers
the built-in sub-command groups (``print``, ``inspect``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~specdocs.exceptions.SpecdocsError` instances that escape a command
become an ``Error:`` line and the error's exit code; any other exception is
written to a crash log under the data directory.

See Also:
    :mod:`specdocs.config`: Configuration resolution.
    :mod:`specdocs.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from specdocs import __version__
from specdocs.commands.config import config_app
from specdocs.commands.inspect import inspect_app
from specdocs.commands.print import print_app
from specdocs.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="specdocs",
    help="Render documentation pages from an OpenAPI 3.0 spec.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(print_app, name="print", help="Render documentation fragments.")
app.add_typer(inspect_app, name="inspect", help="Inspect spec contents.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specdocs {__version__}")
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
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format for tables."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Host prefix for cURL snippets."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~specdocs.output.OutputManager` from CLI
    flags and stores shared options in the Typer context so that
    sub-commands can read them via ``ctx.obj``.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output, including library
            log records.
        base_url: Snippet base URL override (highest precedence).
    """
    from specdocs.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[debug] %(name)s: %(message)s",
            stream=sys.stderr,
        )

    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from specdocs.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``specdocs`` console script.

    Unhandled :class:`~specdocs.exceptions.SpecdocsError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specdocs.exceptions import SpecdocsError
        from specdocs.output import error

        if isinstance(exc, SpecdocsError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
