"""Error model and classification.

Re-exports the public symbols of the error package.
"""

from ereport.core.errors.codes import (
    NON_RETRIABLE_KINDS,
    ErrorKind,
    RecoveryAction,
    kind_for_status,
)
from ereport.core.errors.models import (
    ClassifiedError,
    ErrorLogEntry,
    RecoveryDecision,
    RetryState,
)
from ereport.core.errors.messages import (
    MESSAGE_TEMPLATES,
    get_error_message,
    template_for,
)
from ereport.core.errors.predicates import (
    is_auth_error,
    is_cors_error,
    is_network_error,
    is_validation_error,
    looks_like_cors_failure,
)
from ereport.core.errors.classifier import ErrorClassifier, FailureView, inspect_failure

__all__ = [
    "NON_RETRIABLE_KINDS",
    "ErrorKind",
    "RecoveryAction",
    "kind_for_status",
    "ClassifiedError",
    "ErrorLogEntry",
    "RecoveryDecision",
    "RetryState",
    "MESSAGE_TEMPLATES",
    "get_error_message",
    "template_for",
    "is_auth_error",
    "is_cors_error",
    "is_network_error",
    "is_validation_error",
    "looks_like_cors_failure",
    "ErrorClassifier",
    "FailureView",
    "inspect_failure",
]
