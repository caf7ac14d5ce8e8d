"""Core domain models, configuration and logging."""

from ereport.core.config import EReportConfig, LogConfig, RetryConfig
from ereport.core.errors import ClassifiedError, ErrorClassifier, ErrorKind, RecoveryAction

__all__ = [
    "ClassifiedError",
    "EReportConfig",
    "ErrorClassifier",
    "ErrorKind",
    "LogConfig",
    "RecoveryAction",
    "RetryConfig",
]
