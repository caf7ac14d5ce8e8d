"""Shared test doubles for executor and service tests."""

from __future__ import annotations

from typing import Any


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class PayloadError(Exception):
    """Exception carrying transport-style fields (message, code, response)."""

    def __init__(self, payload: dict[str, Any]) -> None:
        super().__init__(payload.get("message") or "")
        self.message = payload.get("message")
        self.code = payload.get("code")
        self.response = payload.get("response")


class FlakyOperation:
    """Async operation that raises queued failures, then returns a value.

    Dict failures are raised as PayloadError, exceptions as-is.
    """

    def __init__(self, failures: list[Any], value: Any = "ok") -> None:
        self._failures = list(failures)
        self.value = value
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self._failures:
            failure = self._failures.pop(0)
            if isinstance(failure, BaseException):
                raise failure
            raise PayloadError(failure)
        return self.value


def always_failing(payload: dict[str, Any], count: int = 50) -> FlakyOperation:
    """Operation that fails with the same payload on every call."""
    return FlakyOperation([payload] * count)


class UnmountedNavigator:
    """Navigator whose router is not available; every call raises."""

    def goto_login(self) -> None:
        raise RuntimeError("router not mounted")

    def reload(self) -> None:
        raise RuntimeError("router not mounted")


class LockedSessionStore:
    """Session store whose storage rejects writes."""

    def clear(self) -> None:
        raise PermissionError("storage is read-only")
