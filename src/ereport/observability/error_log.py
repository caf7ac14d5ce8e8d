"""Bounded in-memory error log.

The log keeps the most recent entries only: once ``capacity`` is reached,
each new entry evicts the oldest one. It is cleared only by an explicit
``clear()``.
"""

from __future__ import annotations

from collections import deque

from ereport.core.constants import DEFAULT_ERROR_LOG_CAPACITY, DEFAULT_RECENT_ERRORS
from ereport.core.errors import ClassifiedError, ErrorLogEntry


class ErrorLog:
    """Append-only ring buffer of ErrorLogEntry records."""

    def __init__(self, capacity: int = DEFAULT_ERROR_LOG_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._entries: deque[ErrorLogEntry] = deque(maxlen=capacity)
        self._total = 0

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    @property
    def total_recorded(self) -> int:
        """Entries ever appended, including evicted ones, since the last clear()."""
        return self._total

    def append(self, error: ClassifiedError, context: str | None = None) -> ErrorLogEntry:
        entry = ErrorLogEntry(
            timestamp=error.timestamp,
            error=error,
            context=context if context is not None else error.context,
        )
        self._entries.append(entry)
        self._total += 1
        return entry

    def entries(self) -> list[ErrorLogEntry]:
        """Snapshot of the log, oldest first."""
        return list(self._entries)

    def recent(self, count: int = DEFAULT_RECENT_ERRORS) -> list[ErrorLogEntry]:
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def clear(self) -> None:
        self._entries.clear()
        self._total = 0

    def __len__(self) -> int:
        return len(self._entries)
