"""Diagnostic commands for the ereport-errors CLI.

- `classify`: classify a failure payload and show message and recovery
- `messages`: list the localized message of every error kind
- `probe`: call a backend path through the resilient executor
"""

from __future__ import annotations

import asyncio
import json as json_module
from pathlib import Path
from typing import Any

import typer

from ereport.core.errors import ErrorClassifier, get_error_message
from ereport.notifications import RichConsoleNotifier
from ereport.recovery import InMemorySessionStore, RecordingNavigator, RecoveryDispatcher
from ereport.service import create_error_service
from ereport.transport import ApiClient

from ..helpers import load_cli_config
from ..output import (
    console,
    create_classification_table,
    create_error_log_table,
    create_messages_table,
)


def _parse_payload(payload: str) -> Any:
    """Decode a JSON payload; non-JSON text is classified as a bare message."""
    try:
        return json_module.loads(payload)
    except json_module.JSONDecodeError:
        return payload


def classify(
    payload: str = typer.Argument(
        ...,
        help='Failure payload as JSON, e.g. \'{"response": {"status": 401}}\', or plain text',
    ),
    context: str | None = typer.Option(
        None, "--context", "-c", help="Call-site label to attach"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output machine-readable JSON"
    ),
) -> None:
    """Classify a failure payload.

    Examples:
        ereport-errors classify '{"code": "ERR_NETWORK"}'
        ereport-errors classify '{"response": {"status": 422, "data": {"message": "Nama wajib diisi"}}}'
        ereport-errors classify "Blocked by CORS policy"
    """
    config = load_cli_config(config_path)
    classifier = ErrorClassifier(locale=config.locale)
    error = classifier.classify(_parse_payload(payload), context)
    dispatcher = RecoveryDispatcher(InMemorySessionStore(config.session), RecordingNavigator())
    decision = dispatcher.decide(error)
    message = get_error_message(error, config.locale)

    if json_output:
        result = error.to_dict()
        result["display_message"] = message
        result["recovery"] = decision.to_dict()
        console.print_json(json_module.dumps(result, default=str))
        return
    console.print(create_classification_table(error, decision, message))


def messages(
    locale: str = typer.Option("id", "--locale", "-l", help="Locale: id or en"),
) -> None:
    """List the display message and recovery action of every error kind."""
    if locale not in ("id", "en"):
        console.print(f"[red]Unknown locale:[/red] {locale}")
        raise typer.Exit(1)
    console.print(create_messages_table(locale))


def probe(
    path: str = typer.Argument(..., help="Backend path, e.g. /reports"),
    retries: int | None = typer.Option(
        None, "--retries", "-r", min=0, help="Retries after the first attempt"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
) -> None:
    """GET a backend path through the resilient executor.

    Failures are classified, logged, notified and recovered exactly as in
    the web client; the resulting error log is printed at the end.
    """
    config = load_cli_config(config_path)

    async def _probe() -> Any:
        service = create_error_service(config, notifiers=[RichConsoleNotifier(console)])
        try:
            async with ApiClient(config.api, service.classifier) as client:
                result = await service.execute_with_retry(
                    lambda: client.request("GET", path), f"probe {path}", retries
                )
            return result, service.get_error_log()
        finally:
            await service.close()

    result, entries = asyncio.run(_probe())
    if entries:
        console.print(create_error_log_table(entries))
        raise typer.Exit(1)
    console.print_json(json_module.dumps(result, default=str))
