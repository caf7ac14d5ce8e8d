"""Rich output formatting for the ereport-errors CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ereport.core.errors import (
    MESSAGE_TEMPLATES,
    ClassifiedError,
    ErrorKind,
    ErrorLogEntry,
    RecoveryDecision,
)
from ereport.notifications import KIND_STYLES

console = Console()


def kind_label(kind: ErrorKind) -> str:
    style = KIND_STYLES.get(kind, "red")
    return f"[{style}]{kind.value}[/{style}]"


def create_classification_table(
    error: ClassifiedError,
    decision: RecoveryDecision,
    message: str,
) -> Table:
    """Two-column summary of one classified failure."""
    table = Table(title="Classification", show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Kind", kind_label(error.kind))
    table.add_row("HTTP status", str(error.http_status))
    table.add_row("Message", message)
    table.add_row("Retriable", "yes" if error.is_retriable else "no")
    table.add_row("Recovery", decision.action.value)
    table.add_row("Manual retry", "offered" if decision.recoverable else "not offered")
    if error.context:
        table.add_row("Context", error.context)
    return table


def create_messages_table(locale: str) -> Table:
    table = Table(title=f"Error messages ({locale})")
    table.add_column("Kind")
    table.add_column("Recovery")
    table.add_column("Message")
    for kind, template in MESSAGE_TEMPLATES[locale].items():
        table.add_row(kind_label(kind), kind.default_recovery.value, template)
    return table


def create_error_log_table(entries: list[ErrorLogEntry]) -> Table:
    table = Table(title=f"Error log ({len(entries)})")
    table.add_column("Time", style="dim")
    table.add_column("Kind")
    table.add_column("Status", justify="right")
    table.add_column("Context")
    table.add_column("Message")
    for entry in entries:
        table.add_row(
            entry.timestamp.strftime("%H:%M:%S"),
            kind_label(entry.error.kind),
            str(entry.error.http_status),
            entry.context or "-",
            entry.error.message,
        )
    return table
