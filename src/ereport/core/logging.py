"""Structured logging infrastructure for e-Report.

Provides structured logging using structlog with e-Report specific context
such as the call site that produced an error and a per-request correlation
id. Supports console and JSON output, optionally to a rotating file.

Example usage:
    from ereport.core.logging import get_logger, configure_logging, with_context

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("executor")

    # Log with key-value fields
    logger.info("attempt_failed", attempt=2, kind="network_error")

    # Correlate every log line of one logical operation
    with with_context(CallContext(call_site="reports.list")):
        logger.debug("request_started")  # includes call_site, request_id
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Field names whose values must never reach a log sink
SENSITIVE_PATTERNS = frozenset({
    "token",
    "refresh_token",
    "secret",
    "password",
    "credential",
    "cookie",
    "bearer",
    "authorization",
    "api_key",
})

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class CallContext:
    """Immutable correlation data for one logical backend operation.

    Attributes:
        call_site: Free-text label of the operation (e.g. "reports.create").
        request_id: Unique id for this invocation, generated when omitted.
        user_id: Optional id of the signed-in user, for support diagnostics.
    """

    call_site: str
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    user_id: str | None = None

    def with_call_site(self, call_site: str) -> CallContext:
        """Return a copy labelled with a different call site."""
        return CallContext(call_site=call_site, request_id=self.request_id, user_id=self.user_id)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "call_site": self.call_site,
            "request_id": self.request_id,
        }
        if self.user_id is not None:
            result["user_id"] = self.user_id
        return result


# ContextVar keeps concurrent asyncio tasks isolated from each other
_current_context: ContextVar[CallContext | None] = ContextVar(
    "ereport_call_context", default=None
)


def get_current_context() -> CallContext | None:
    """Get the active CallContext, or None outside a with_context() block."""
    return _current_context.get()


@contextmanager
def with_context(ctx: CallContext) -> Iterator[CallContext]:
    """Activate a CallContext for the duration of a block.

    Args:
        ctx: The context to stamp on every log entry emitted in the block.

    Yields:
        The active context.
    """
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def _sanitize_value(key: str, value: Any) -> Any:
    """Redact a value when its key looks sensitive."""
    key_lower = key.lower()
    if any(pattern in key_lower for pattern in SENSITIVE_PATTERNS):
        return REDACTED
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that redacts sensitive fields, one level deep."""
    sanitized: EventDict = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            sanitized[key] = {k: _sanitize_value(k, v) for k, v in value.items()}
        else:
            sanitized[key] = _sanitize_value(key, value)
    return sanitized


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _add_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that merges the active CallContext.

    Explicitly logged keys take precedence over context fields.
    """
    ctx = get_current_context()
    if ctx is not None:
        for key, value in ctx.to_dict().items():
            event_dict.setdefault(key, value)
    return event_dict


class EReportLogger:
    """Component logger wrapping structlog.

    The structlog logger is fetched on every call so loggers created at
    import time still honour a later configure_logging().
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    @property
    def component(self) -> str:
        return self._component

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def bind(self, **context: Any) -> EReportLogger:
        """Create a new logger with additional bound context."""
        merged = {k: v for k, v in {**self._context, **context}.items() if k != "component"}
        return EReportLogger(self._component, **merged)

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log an error with traceback; call from inside an except block."""
        self._get_logger().exception(event, **kw)


def _build_processors(
    renderer: Processor,
    include_timestamps: bool,
    include_context: bool,
) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]
    if include_context:
        processors.append(_add_context)
    if include_timestamps:
        processors.append(_add_timestamp)
    processors.extend([
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ])
    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    format: Literal["json", "console"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 10,
    backup_count: int = 3,
    include_timestamps: bool = True,
    include_context: bool = True,
) -> None:
    """Configure structured logging; call once at application startup.

    Args:
        level: Minimum log level to capture.
        format: "json" for machine-readable lines, "console" for humans.
        file_path: Write to this rotating file instead of stderr.
        max_file_size_mb: Rotation threshold for file output.
        backup_count: Rotated files to keep.
        include_timestamps: Add ISO8601 UTC timestamps.
        include_context: Merge the active CallContext into each entry.
    """
    log_level = getattr(logging, level)

    handler: logging.Handler
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            file_path,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    renderer: Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=file_path is None)

    # cache_logger_on_first_use=False so module-level loggers pick up reconfiguration
    structlog.configure(
        processors=_build_processors(renderer, include_timestamps, include_context),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> EReportLogger:
    """Get a logger bound to a component name (e.g. "classifier")."""
    return EReportLogger(component, **initial_context)


__all__ = [
    "CallContext",
    "EReportLogger",
    "REDACTED",
    "SENSITIVE_PATTERNS",
    "configure_logging",
    "get_current_context",
    "get_logger",
    "with_context",
]
