"""Console and in-memory notifiers."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from ereport.core.errors import ErrorKind

from .base import Notification

KIND_STYLES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK_ERROR: "yellow",
    ErrorKind.TIMEOUT_ERROR: "yellow",
    ErrorKind.CORS_ERROR: "magenta",
    ErrorKind.VALIDATION_ERROR: "cyan",
    ErrorKind.AUTHENTICATION_ERROR: "red",
    ErrorKind.AUTHORIZATION_ERROR: "red",
    ErrorKind.NOT_FOUND_ERROR: "blue",
    ErrorKind.SERVER_ERROR: "red",
    ErrorKind.API_ERROR: "red",
    ErrorKind.UNKNOWN_ERROR: "dim",
}


class RichConsoleNotifier:
    """Renders notifications as a colored panel on a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    async def send(self, notification: Notification) -> bool:
        style = KIND_STYLES.get(notification.kind, "red")
        self._console.print(
            Panel(
                notification.message,
                title=notification.kind.value,
                border_style=style,
                expand=False,
            )
        )
        return True

    async def close(self) -> None:
        return None


class MockNotifier:
    """Records notifications without displaying them.

    Useful for testing notification integration.
    """

    def __init__(self) -> None:
        self.sent_notifications: list[Notification] = []
        self._fail_next = False
        self.closed = False

    def set_fail_next(self, should_fail: bool = True) -> None:
        """Make the next send() return False."""
        self._fail_next = should_fail

    async def send(self, notification: Notification) -> bool:
        if self._fail_next:
            self._fail_next = False
            return False
        self.sent_notifications.append(notification)
        return True

    async def close(self) -> None:
        self.closed = True
