"""Observability sink: error log, developer log channel and notifications."""

from __future__ import annotations

from ereport.core.errors import ClassifiedError, ErrorLogEntry, get_error_message
from ereport.core.errors.messages import DEFAULT_LOCALE
from ereport.core.logging import get_logger
from ereport.notifications import Notification, NotificationManager

from .error_log import ErrorLog

_logger = get_logger("observability")


class ErrorSink:
    """Records surfaced errors and raises user notifications.

    Every recorded error lands in the error log. Outside production the
    entry is mirrored to the structured developer log as an
    ``error_classified`` event.
    """

    def __init__(
        self,
        error_log: ErrorLog,
        notifications: NotificationManager | None = None,
        production: bool = False,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self.error_log = error_log
        self.notifications = notifications
        self.production = production
        self.locale = locale

    def record(self, error: ClassifiedError, context: str | None = None) -> ErrorLogEntry:
        entry = self.error_log.append(error, context)
        if not self.production:
            payload = error.to_dict()
            payload["context"] = entry.context
            payload.pop("timestamp")
            _logger.error("error_classified", **payload)
        return entry

    async def notify(self, error: ClassifiedError) -> Notification | None:
        if self.notifications is None:
            return None
        return await self.notifications.notify(get_error_message(error, self.locale), error.kind)
