"""Shared utilities for ereport-errors CLI commands.

- Global logging options collected by the app callback
- Config loading with user-facing error output
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import typer
from pydantic import ValidationError
from rich.console import Console

from ereport.core.config import EReportConfig, load_config
from ereport.core.logging import configure_logging

from .output import console as default_console

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("json", "console")


@dataclass
class CliLoggingConfig:
    """Logging options collected from the global CLI flags."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: Path | None = None
    format: Literal["json", "console"] = "console"
    configured: bool = False


_log_config = CliLoggingConfig()


def get_log_config() -> CliLoggingConfig:
    return _log_config


def set_log_level(level: str) -> None:
    _log_config.level = level.upper()  # type: ignore[assignment]


def set_log_file(path: Path | None) -> None:
    _log_config.file = path


def set_log_format(fmt: str) -> None:
    _log_config.format = fmt  # type: ignore[assignment]


def configure_global_logging(console: Console) -> None:
    """Configure logging from the global options, once per process.

    Raises:
        typer.Exit: If the level or format is not recognised.
    """
    if _log_config.configured:
        return
    if _log_config.level not in LOG_LEVELS:
        console.print(f"[red]Logging configuration error:[/red] unknown level {_log_config.level}")
        raise typer.Exit(1)
    if _log_config.format not in LOG_FORMATS:
        console.print(
            f"[red]Logging configuration error:[/red] unknown format {_log_config.format}"
        )
        raise typer.Exit(1)
    configure_logging(
        level=_log_config.level,
        format=_log_config.format,
        file_path=_log_config.file,
    )
    _log_config.configured = True


def reset_logging_state() -> None:
    """Forget the collected options so tests can reconfigure."""
    global _log_config
    _log_config = CliLoggingConfig()


def load_cli_config(path: Path | None) -> EReportConfig:
    """Load settings for a command, exiting with a readable error on failure."""
    if path is not None and not path.exists():
        default_console.print(f"[red]Config file not found:[/red] {path}")
        raise typer.Exit(1)
    try:
        return load_config(path)
    except ValidationError as e:
        default_console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1) from None
