"""ErrorService: the application-lifetime composition root.

One ErrorService is built at startup and passed to the UI layer. Each
instance owns its error log and notification manager.

Example usage:
    service = create_error_service(load_config())
    report = await service.execute_with_retry(lambda: api.request("GET", "/reports/1"))
    if report is None:
        banner(service.get_error_message(service.last_error))
"""

from __future__ import annotations

from typing import Any, TypeVar

from ereport.core.config import EReportConfig
from ereport.core.constants import DEFAULT_RECENT_ERRORS
from ereport.core.errors import (
    ClassifiedError,
    ErrorClassifier,
    ErrorLogEntry,
    RecoveryDecision,
    get_error_message,
)
from ereport.core.logging import get_logger
from ereport.execution import ExecutionOutcome, ExecutionPolicies, ResilientExecutor, RetryPolicy
from ereport.execution.executor import Operation, SleepFn
from ereport.notifications import NotificationManager, Notifier
from ereport.observability import ErrorLog, ErrorSink
from ereport.recovery import (
    InMemorySessionStore,
    Navigator,
    RecordingNavigator,
    RecoveryDispatcher,
    SessionStore,
)

_logger = get_logger("service")

T = TypeVar("T")


class ErrorService:
    """Stable, component-independent error handling contract for the UI."""

    def __init__(
        self,
        config: EReportConfig,
        classifier: ErrorClassifier,
        executor: ResilientExecutor,
        sink: ErrorSink,
        dispatcher: RecoveryDispatcher,
    ) -> None:
        self.config = config
        self.classifier = classifier
        self.executor = executor
        self.sink = sink
        self.dispatcher = dispatcher
        self._last_error: ClassifiedError | None = None

    @property
    def last_error(self) -> ClassifiedError | None:
        """Error surfaced by the most recent execute call, None after a success."""
        return self._last_error

    @property
    def notifications(self) -> NotificationManager | None:
        return self.sink.notifications

    def classify(self, raw: Any, context: str | None = None) -> ClassifiedError:
        return self.classifier.classify(raw, context)

    async def run(
        self,
        operation: Operation[T],
        context: str | None = None,
        max_attempts: int = 0,
        policies: ExecutionPolicies | None = None,
    ) -> ExecutionOutcome[T]:
        """Run through the executor and remember the surfaced error."""
        executor = self.executor if policies is None else self.executor.with_policies(policies)
        outcome = await executor.run(operation, context, max_attempts)
        self._last_error = outcome.error
        return outcome

    async def execute(self, operation: Operation[T], context: str | None = None) -> T | None:
        outcome = await self.run(operation, context)
        return outcome.value

    async def execute_with_retry(
        self,
        operation: Operation[T],
        context: str | None = None,
        max_attempts: int | None = None,
    ) -> T | None:
        if max_attempts is None:
            max_attempts = self.config.retry.max_attempts
        outcome = await self.run(operation, context, max_attempts)
        return outcome.value

    def report_error(self, raw: Any, context: str | None = None) -> ClassifiedError:
        """Classify and log a failure caught outside the executor."""
        error = self.classify(raw, context)
        self.sink.record(error, context)
        return error

    def recover(self, error: ClassifiedError) -> RecoveryDecision:
        """Decide, and for redirect/reload apply, the recovery for an error."""
        return self.dispatcher.handle(error)

    def get_error_message(self, error: ClassifiedError) -> str:
        return get_error_message(error, self.config.locale)

    def get_error_log(self) -> list[ErrorLogEntry]:
        return self.sink.error_log.entries()

    def get_recent_errors(self, count: int = DEFAULT_RECENT_ERRORS) -> list[ErrorLogEntry]:
        return self.sink.error_log.recent(count)

    def clear_error_log(self) -> None:
        self.sink.error_log.clear()
        _logger.info("error_log_cleared")

    def get_error_count(self) -> int:
        return len(self.sink.error_log)

    async def close(self) -> None:
        if self.sink.notifications is not None:
            await self.sink.notifications.close()


def create_error_service(
    config: EReportConfig | None = None,
    session: SessionStore | None = None,
    navigator: Navigator | None = None,
    notifiers: list[Notifier] | None = None,
    sleep: SleepFn | None = None,
) -> ErrorService:
    """Wire an ErrorService from configuration and collaborators.

    Args:
        config: Settings; defaults when None.
        session: Session collaborator; in-memory store when None.
        navigator: Navigation collaborator; recording navigator when None.
        notifiers: Notification renderers attached to the manager.
        sleep: Backoff sleep function; ``asyncio.sleep`` when None.
    """
    config = config or EReportConfig()
    classifier = ErrorClassifier(locale=config.locale)
    notifications = NotificationManager(config.notifications, notifiers)
    sink = ErrorSink(
        ErrorLog(config.error_log.capacity),
        notifications,
        production=config.is_production,
        locale=config.locale,
    )
    dispatcher = RecoveryDispatcher(
        session or InMemorySessionStore(config.session),
        navigator or RecordingNavigator(config.session.login_path),
    )
    executor_kwargs: dict[str, Any] = {}
    if sleep is not None:
        executor_kwargs["sleep"] = sleep
    executor = ResilientExecutor(
        classifier,
        RetryPolicy.from_config(config.retry),
        sink,
        dispatcher,
        default_max_attempts=config.retry.max_attempts,
        **executor_kwargs,
    )
    return ErrorService(config, classifier, executor, sink, dispatcher)
