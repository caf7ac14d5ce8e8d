"""UI-facing operation state.

Thin delegators over ErrorService for view code that needs loading flags,
the current error and a "try again" affordance for one screen or form.
"""

from __future__ import annotations

from typing import TypeVar

from ereport.core.errors import ClassifiedError
from ereport.execution import ExecutionOutcome, ExecutionPolicies
from ereport.execution.executor import Operation
from ereport.service import ErrorService

T = TypeVar("T")


class OperationState:
    """Tracks the state of one UI operation.

    Attributes:
        error: Error surfaced by the last run, None after a success.
        is_loading: True while an operation is in flight.
        retry_count: Attempts beyond the first made by the last run.
        can_recover: Whether a manual retry is offered for ``error``.
    """

    def __init__(
        self,
        service: ErrorService,
        context: str | None = None,
        policies: ExecutionPolicies | None = None,
    ) -> None:
        self._service = service
        self.context = context
        self.policies = policies
        self.error: ClassifiedError | None = None
        self.is_loading = False
        self.retry_count = 0
        self.can_recover = False

    @property
    def message(self) -> str | None:
        if self.error is None:
            return None
        return self._service.get_error_message(self.error)

    async def _run(self, operation: Operation[T], max_attempts: int) -> T | None:
        self.is_loading = True
        self.clear_error()
        try:
            outcome: ExecutionOutcome[T] = await self._service.run(
                operation, self.context, max_attempts, self.policies
            )
        finally:
            self.is_loading = False
        self.retry_count = max(outcome.attempts - 1, 0)
        self.error = outcome.error
        if outcome.recovery is not None:
            self.can_recover = outcome.recovery.recoverable
        elif outcome.error is not None:
            self.can_recover = self._service.dispatcher.decide(outcome.error).recoverable
        return outcome.value

    async def run(self, operation: Operation[T]) -> T | None:
        return await self._run(operation, 0)

    async def run_with_retry(
        self, operation: Operation[T], max_attempts: int | None = None
    ) -> T | None:
        if max_attempts is None:
            max_attempts = self._service.config.retry.max_attempts
        return await self._run(operation, max_attempts)

    async def retry(self, operation: Operation[T]) -> T | None:
        """Re-run after a recoverable failure; no-op otherwise."""
        if not self.can_recover:
            return None
        return await self._run(operation, 0)

    def clear_error(self) -> None:
        self.error = None
        self.can_recover = False
        self.retry_count = 0
