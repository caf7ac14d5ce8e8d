"""Data models for error classification.

This module provides:
- ClassifiedError: the uniform, immutable error value produced by the classifier
- ErrorLogEntry: one record of the diagnostic error log
- RetryState: per-invocation bookkeeping of the resilient executor
- RecoveryDecision: the remedial action chosen for an error
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from ereport.core.constants import TRUNCATE_CAUSE_REPR_CHARS

from .codes import ErrorKind, RecoveryAction


def _serialize_cause(value: Any) -> str | None:
    if value is None:
        return None
    text = repr(value)
    if len(text) > TRUNCATE_CAUSE_REPR_CHARS:
        text = text[:TRUNCATE_CAUSE_REPR_CHARS] + "..."
    return text


class ClassifiedError(Exception):
    """A failure with its kind, safe message and diagnostic details.

    ClassifiedError is an exception so operations may raise an already
    classified error; the classifier passes such errors through unchanged.
    All attributes are read-only after construction. The original cause is
    kept under ``details["original_error"]`` for diagnostics and is never
    used as a display message.

    Example:
    ```python
    error = ClassifiedError(
        ErrorKind.VALIDATION_ERROR,
        "Nama wajib diisi",
        http_status=422,
        details={"context": "reports.create"},
    )
    ```
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        http_status: int = 0,
        details: Mapping[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        super().__init__(message)
        self._kind = ErrorKind(kind)
        self._message = message
        self._http_status = int(http_status)
        self._details: Mapping[str, Any] = MappingProxyType(dict(details or {}))
        self._timestamp = timestamp or datetime.now(UTC)

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def message(self) -> str:
        return self._message

    @property
    def http_status(self) -> int:
        """HTTP status of the failed response, 0 for non-HTTP faults."""
        return self._http_status

    @property
    def details(self) -> Mapping[str, Any]:
        return self._details

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def context(self) -> str | None:
        """Call-site label recorded when the error was classified."""
        return self._details.get("context")

    @property
    def original_error(self) -> Any:
        return self._details.get("original_error")

    @property
    def recovery_action(self) -> RecoveryAction:
        return self._kind.default_recovery

    @property
    def is_retriable(self) -> bool:
        return self._kind.is_retriable

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs; the original cause is rendered with repr()."""
        return {
            "kind": self._kind.value,
            "message": self._message,
            "http_status": self._http_status,
            "context": self.context,
            "timestamp": self._timestamp.isoformat(),
            "cause": _serialize_cause(self.original_error),
        }

    def __repr__(self) -> str:
        return (
            f"ClassifiedError(kind={self._kind.value!r}, message={self._message!r}, "
            f"http_status={self._http_status})"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            self.__class__,
            (self._kind, self._message, self._http_status, dict(self._details), self._timestamp),
        )


@dataclass(frozen=True)
class ErrorLogEntry:
    """One record of the diagnostic error log."""

    timestamp: datetime
    error: ClassifiedError
    context: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "error": self.error.to_dict(),
        }


@dataclass
class RetryState:
    """Bookkeeping for one resilient executor invocation.

    Attributes:
        max_attempts: Retries allowed after the initial call.
        attempt: Index of the current attempt; 0 is the initial call.
        last_error: Classified failure of the most recent attempt.
    """

    max_attempts: int
    attempt: int = 0
    last_error: ClassifiedError | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")

    @property
    def has_attempts_left(self) -> bool:
        return self.attempt < self.max_attempts

    def advance(self) -> int:
        """Move to the next retry and return its number."""
        if not self.has_attempts_left:
            raise ValueError(f"retry budget of {self.max_attempts} exhausted")
        self.attempt += 1
        return self.attempt


@dataclass(frozen=True)
class RecoveryDecision:
    """Remedial action chosen for a classified error.

    ``recoverable`` is True only when a user-initiated retry makes sense.
    """

    recoverable: bool
    action: RecoveryAction = field(default=RecoveryAction.NONE)

    def to_dict(self) -> dict[str, Any]:
        return {"recoverable": self.recoverable, "action": self.action.value}
