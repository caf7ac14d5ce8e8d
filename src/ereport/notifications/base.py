"""Transient error notifications.

Provides the notification infrastructure for surfaced errors:
- Notification dataclass for one on-screen message
- Notifier protocol for rendering backends
- NotificationManager tracking visible notifications and their dismissal

Notifications remove themselves after a fixed delay. They are not
deduplicated unless ``suppress_duplicates`` is enabled: two identical
errors produce two notifications.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from ereport.core.config import NotificationConfig
from ereport.core.errors import ErrorKind
from ereport.core.logging import get_logger

_logger = get_logger("notifications")


@dataclass
class Notification:
    """A transient, auto-dismissing error message."""

    message: str
    kind: ErrorKind
    dismiss_after: float
    created_monotonic: float
    id: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    dismissed: bool = False

    @property
    def expires_monotonic(self) -> float:
        return self.created_monotonic + self.dismiss_after

    def is_expired(self, now: float) -> bool:
        return self.dismissed or now >= self.expires_monotonic


@runtime_checkable
class Notifier(Protocol):
    """Protocol for notification renderers (console, browser bridge, ...)."""

    async def send(self, notification: Notification) -> bool:
        """Render a notification.

        Returns:
            True if delivered. Failures should be reported, not raised.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the notifier."""
        ...


class NotificationManager:
    """Tracks visible notifications and fans them out to notifiers.

    Example usage:
        manager = NotificationManager(NotificationConfig(), [RichConsoleNotifier()])
        await manager.notify("Permintaan timeout.", ErrorKind.TIMEOUT_ERROR)
    """

    def __init__(
        self,
        config: NotificationConfig | None = None,
        notifiers: list[Notifier] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or NotificationConfig()
        self._notifiers: list[Notifier] = list(notifiers or [])
        self._clock = clock
        self._visible: list[Notification] = []
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._ids = itertools.count(1)

    def add_notifier(self, notifier: Notifier) -> None:
        self._notifiers.append(notifier)

    @property
    def notifier_count(self) -> int:
        return len(self._notifiers)

    @property
    def active(self) -> list[Notification]:
        """Notifications still on screen."""
        self._prune()
        return list(self._visible)

    def _prune(self) -> None:
        now = self._clock()
        self._visible = [n for n in self._visible if not n.is_expired(now)]

    def _is_duplicate(self, message: str) -> bool:
        return any(n.message == message for n in self.active)

    async def notify(self, message: str, kind: ErrorKind) -> Notification | None:
        """Show a notification and deliver it to every notifier.

        Returns:
            The notification, or None when notifications are disabled or the
            message was suppressed as a duplicate.
        """
        if not self._config.enabled:
            return None
        if self._config.suppress_duplicates and self._is_duplicate(message):
            _logger.debug("notification_suppressed", kind=kind.value)
            return None

        notification = Notification(
            message=message,
            kind=kind,
            dismiss_after=self._config.dismiss_after_seconds,
            created_monotonic=self._clock(),
            id=next(self._ids),
        )
        self._visible.append(notification)
        self._schedule_dismissal(notification)

        for notifier in self._notifiers:
            name = type(notifier).__name__
            try:
                delivered = await notifier.send(notification)
            except Exception as e:
                _logger.warning("notifier_failed", notifier=name, error=str(e))
                continue
            if not delivered:
                _logger.debug("notifier_declined", notifier=name)
        return notification

    def _schedule_dismissal(self, notification: Notification) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: expiry is enforced lazily by the clock in `active`.
            return
        self._timers[notification.id] = loop.call_later(
            notification.dismiss_after, self.dismiss, notification.id
        )

    def dismiss(self, notification_id: int) -> bool:
        """Remove a notification before (or when) its timer fires."""
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        for notification in self._visible:
            if notification.id == notification_id:
                notification.dismissed = True
                self._visible.remove(notification)
                return True
        return False

    def clear(self) -> None:
        for notification_id in list(self._timers):
            self.dismiss(notification_id)
        self._visible.clear()

    async def close(self) -> None:
        """Cancel timers and close every notifier; notifier errors are logged."""
        self.clear()
        for notifier in self._notifiers:
            try:
                await notifier.close()
            except Exception as e:
                _logger.warning(
                    "notifier_close_failed", notifier=type(notifier).__name__, error=str(e)
                )
