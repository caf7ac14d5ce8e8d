"""Transient error notifications.

Usage:
    from ereport.notifications import NotificationManager, RichConsoleNotifier

    manager = NotificationManager(notifiers=[RichConsoleNotifier()])
    await manager.notify("Permintaan timeout. Silakan coba lagi.", ErrorKind.TIMEOUT_ERROR)
"""

from ereport.notifications.base import Notification, NotificationManager, Notifier
from ereport.notifications.console import KIND_STYLES, MockNotifier, RichConsoleNotifier

__all__ = [
    "KIND_STYLES",
    "MockNotifier",
    "Notification",
    "NotificationManager",
    "Notifier",
    "RichConsoleNotifier",
]
