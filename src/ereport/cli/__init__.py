"""ereport-errors CLI.

Operator tooling around the error-handling core: classify a captured
failure payload, list the localized messages, probe a backend path through
the resilient executor and inspect the resolved configuration.

Package structure:
    cli/
    ├── __init__.py           # App assembly and global options
    ├── helpers.py            # Logging options and config loading
    ├── output.py             # Rich formatting
    └── commands/
        ├── diagnose.py       # classify, messages, probe
        └── config_cmd.py     # config show, config check
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ereport import __version__

from . import helpers as helpers
from .commands import classify, config_app, messages, probe
from .helpers import configure_global_logging, set_log_file, set_log_format, set_log_level
from .output import console

app = typer.Typer(
    name="ereport-errors",
    help="Error classification and resilient execution tooling for e-Report",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"e-Report error tooling v{__version__}")
        raise typer.Exit()


def log_level_callback(value: str | None) -> str | None:
    if value:
        set_log_level(value)
    return value


def log_file_callback(value: Path | None) -> Path | None:
    if value:
        set_log_file(value)
    return value


def log_format_callback(value: str | None) -> str | None:
    if value:
        set_log_format(value)
    return value


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="EREPORT_LOG_LEVEL",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            callback=log_file_callback,
            help="Write structured logs to this file",
            envvar="EREPORT_LOG_FILE",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            help="Log format: json or console",
            envvar="EREPORT_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """Error classification and resilient execution tooling for e-Report."""
    configure_global_logging(console)


app.command()(classify)
app.command()(messages)
app.command()(probe)
app.add_typer(config_app, name="config")


__all__ = ["app", "main"]
