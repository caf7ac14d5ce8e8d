"""Execution layer: retry policy and the resilient executor."""

from ereport.execution.executor import (
    ExecutionOutcome,
    ExecutionPolicies,
    ResilientExecutor,
)
from ereport.execution.retry_strategy import RetryPolicy, RetryRecommendation

__all__ = [
    "ExecutionOutcome",
    "ExecutionPolicies",
    "ResilientExecutor",
    "RetryPolicy",
    "RetryRecommendation",
]
