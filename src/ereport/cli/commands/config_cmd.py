"""Configuration commands for the ereport-errors CLI.

Subcommands:
- `ereport-errors config show`: display resolved settings as a table
- `ereport-errors config check`: validate a YAML settings file
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError
from rich.table import Table

from ereport.core.config import EReportConfig

from ..helpers import load_cli_config
from ..output import console

config_app = typer.Typer(
    name="config",
    help="Inspect error-handling configuration.",
    invoke_without_command=True,
)


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    """Inspect error-handling configuration."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


def _flatten_model(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten a nested dict into dot-notation keys."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            result.update(_flatten_model(value, full_key))
        else:
            result[full_key] = value
    return result


@config_app.command()
def show(
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="YAML settings file (defaults when omitted)"
    ),
) -> None:
    """Display the resolved configuration, environment overrides included.

    Examples:
        ereport-errors config show
        EREPORT_ENV=production ereport-errors config show --config ereport.yaml
    """
    config = load_cli_config(config_file)
    source = f"[dim]{config_file}[/dim]" if config_file else "[dim](defaults)[/dim]"
    console.print(f"\nConfiguration: {source}\n")

    table = Table(show_header=True, header_style="bold cyan", padding=(0, 1))
    table.add_column("Key", style="white", min_width=30)
    table.add_column("Value", style="green")
    defaults = _flatten_model(EReportConfig().model_dump(mode="json"))
    for key, value in _flatten_model(config.model_dump(mode="json")).items():
        marker = "" if defaults.get(key) == value else " [yellow]*[/yellow]"
        table.add_row(key, f"{value}{marker}")
    console.print(table)


@config_app.command("check")
def check(
    config_file: Path = typer.Argument(..., help="YAML settings file to validate"),
) -> None:
    """Validate a YAML settings file without environment overrides."""
    if not config_file.exists():
        console.print(f"[red]Config file not found:[/red] {config_file}")
        raise typer.Exit(1)
    try:
        EReportConfig.from_yaml(config_file)
    except (ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1) from None
    console.print(f"[green]Valid:[/green] {config_file}")


__all__ = ["config_app"]
