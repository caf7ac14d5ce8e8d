"""Kind-aware retry policy with linear backoff.

The policy answers one question after each failed attempt: should the
executor try again, and after how long? Kinds that can never succeed on a
second try (authentication, authorization, not found, validation) stop the
loop immediately; everything else is retried until the budget runs out.

Example usage:
    policy = RetryPolicy(base_delay=1.0)
    state = RetryState(max_attempts=3)

    recommendation = policy.recommend(state)
    if recommendation.should_retry:
        await asyncio.sleep(recommendation.delay_seconds)
"""

from __future__ import annotations

from dataclasses import dataclass

from ereport.core.config import RetryConfig
from ereport.core.constants import DEFAULT_BASE_DELAY_SECONDS
from ereport.core.errors import ErrorKind, RetryState


@dataclass(frozen=True)
class RetryRecommendation:
    """Outcome of consulting the retry policy after a failed attempt.

    Attributes:
        should_retry: Whether another attempt should be made.
        delay_seconds: Wait before the next attempt.
        reason: Short explanation, logged by the executor.
    """

    should_retry: bool
    delay_seconds: float
    reason: str

    def __post_init__(self) -> None:
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

    def to_dict(self) -> dict[str, object]:
        return {
            "should_retry": self.should_retry,
            "delay_seconds": round(self.delay_seconds, 3),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class RetryPolicy:
    """Linear backoff: retry N waits ``base_delay * N`` seconds.

    Successive delays never decrease.
    """

    base_delay: float = DEFAULT_BASE_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {self.base_delay}")

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        return cls(base_delay=config.base_delay_seconds)

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-indexed)."""
        if attempt < 1:
            return 0.0
        return self.base_delay * attempt

    def is_retriable(self, kind: ErrorKind) -> bool:
        return kind.is_retriable

    def recommend(self, state: RetryState) -> RetryRecommendation:
        """Decide whether the failure recorded in ``state`` deserves a retry."""
        error = state.last_error
        if error is None:
            return RetryRecommendation(False, 0.0, "no failure recorded")
        if not self.is_retriable(error.kind):
            return RetryRecommendation(False, 0.0, f"{error.kind.value} is not retriable")
        if not state.has_attempts_left:
            return RetryRecommendation(
                False, 0.0, f"retry budget of {state.max_attempts} exhausted"
            )
        next_attempt = state.attempt + 1
        return RetryRecommendation(
            True,
            self.delay_for(next_attempt),
            f"retry {next_attempt}/{state.max_attempts} after {error.kind.value}",
        )
