"""Resilient executor: one configurable wrapper around async backend calls.

Runs an operation, classifies failures, retries retriable kinds with linear
backoff, and hands the surfaced error to orthogonal policies:

- log: append to the error log and the developer log channel
- notify: show a transient notification
- recover: let the recovery dispatcher redirect to login or reload

Attempts of one invocation are strictly sequential; every invocation owns
its own RetryState. In-flight attempts cannot be cancelled by the executor.

Example usage:
    executor = ResilientExecutor(ErrorClassifier(), RetryPolicy(), sink, dispatcher)
    reports = await executor.execute_with_retry(client.list_reports, "reports.list")
    if reports is None:
        ...  # error already logged, notified and recovered
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ereport.core.constants import DEFAULT_MAX_ATTEMPTS
from ereport.core.errors import ClassifiedError, ErrorClassifier, RecoveryDecision, RetryState
from ereport.core.logging import CallContext, get_logger, with_context
from ereport.observability import ErrorSink
from ereport.recovery import RecoveryDispatcher

from .retry_strategy import RetryPolicy

_logger = get_logger("executor")

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class ExecutionPolicies:
    """Which side effects run when an error is surfaced."""

    log: bool = True
    notify: bool = True
    recover: bool = True


@dataclass
class ExecutionOutcome(Generic[T]):
    """Caller-visible result of one executor invocation.

    Attributes:
        value: Operation result, None on failure.
        error: The surfaced classified error, None on success.
        attempts: Number of times the operation was invoked.
        recovery: Decision taken for the surfaced error, if recovery ran.
    """

    value: T | None = None
    error: ClassifiedError | None = None
    attempts: int = 0
    recovery: RecoveryDecision | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class ResilientExecutor:
    """Executes async operations with kind-aware retry and recovery."""

    def __init__(
        self,
        classifier: ErrorClassifier,
        retry_policy: RetryPolicy | None = None,
        sink: ErrorSink | None = None,
        dispatcher: RecoveryDispatcher | None = None,
        policies: ExecutionPolicies | None = None,
        sleep: SleepFn = asyncio.sleep,
        default_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._classifier = classifier
        self._retry_policy = retry_policy or RetryPolicy()
        self._sink = sink
        self._dispatcher = dispatcher
        self.policies = policies or ExecutionPolicies()
        self._sleep = sleep
        self.default_max_attempts = default_max_attempts

    def with_policies(self, policies: ExecutionPolicies) -> ResilientExecutor:
        """Return an executor sharing collaborators but with other policies."""
        return ResilientExecutor(
            self._classifier,
            self._retry_policy,
            self._sink,
            self._dispatcher,
            policies,
            self._sleep,
            self.default_max_attempts,
        )

    async def run(
        self,
        operation: Operation[T],
        context: str | None = None,
        max_attempts: int = 0,
    ) -> ExecutionOutcome[T]:
        """Run ``operation`` with up to ``max_attempts`` retries.

        Args:
            operation: Zero-argument coroutine function performing the call.
            context: Call-site label for diagnostics.
            max_attempts: Retries allowed after the initial call.

        Returns:
            ExecutionOutcome holding either the value or the surfaced error.
        """
        state = RetryState(max_attempts=max_attempts)
        scope = (
            with_context(CallContext(call_site=context))
            if context
            else contextlib.nullcontext()
        )
        with scope:
            while True:
                try:
                    value = await operation()
                except Exception as exc:
                    state.last_error = self._classifier.classify(exc, context)
                    recommendation = self._retry_policy.recommend(state)
                    _logger.debug(
                        "attempt_failed",
                        attempt=state.attempt,
                        kind=state.last_error.kind.value,
                        **recommendation.to_dict(),
                    )
                    if not recommendation.should_retry:
                        break
                    state.advance()
                    await self._sleep(recommendation.delay_seconds)
                    continue
                if state.attempt:
                    _logger.info("operation_recovered", attempts=state.attempt + 1)
                return ExecutionOutcome(value=value, attempts=state.attempt + 1)

            assert state.last_error is not None
            return await self._surface(state.last_error, context, state.attempt + 1)

    async def _surface(
        self,
        error: ClassifiedError,
        context: str | None,
        attempts: int,
    ) -> ExecutionOutcome[T]:
        if self._sink is not None:
            if self.policies.log:
                self._sink.record(error, context)
            if self.policies.notify:
                await self._sink.notify(error)
        decision = None
        if self.policies.recover and self._dispatcher is not None:
            decision = self._dispatcher.handle(error)
        return ExecutionOutcome(error=error, attempts=attempts, recovery=decision)

    async def execute(self, operation: Operation[T], context: str | None = None) -> T | None:
        """Run once; on failure surface the error and return None."""
        outcome = await self.run(operation, context, max_attempts=0)
        return outcome.value

    async def execute_with_retry(
        self,
        operation: Operation[T],
        context: str | None = None,
        max_attempts: int | None = None,
    ) -> T | None:
        """Run with retries; return None once the error has been surfaced."""
        if max_attempts is None:
            max_attempts = self.default_max_attempts
        outcome = await self.run(operation, context, max_attempts=max_attempts)
        return outcome.value
