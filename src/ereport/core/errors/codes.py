"""Error kinds, recovery actions and HTTP status mapping.

Error Kind Taxonomy
===================

Every classified failure carries exactly one kind. The kind fixes the
default recovery action, whether the resilient executor may retry it, and
the localized message shown to users.

    | Kind                 | Trigger                         | Recovery          | Auto-retry |
    |----------------------|---------------------------------|-------------------|------------|
    | network_error        | no response received            | RETRY             | Yes        |
    | timeout_error        | deadline elapsed                | RETRY             | Yes        |
    | cors_error           | cross-origin request blocked    | RELOAD_PAGE       | Yes        |
    | validation_error     | HTTP 400/422, client shape      | NONE              | No         |
    | authentication_error | HTTP 401                        | REDIRECT_TO_LOGIN | No         |
    | authorization_error  | HTTP 403                        | NONE              | No         |
    | not_found_error      | HTTP 404                        | NONE              | No         |
    | server_error         | HTTP 5xx                        | RETRY             | Yes        |
    | api_error            | any other status                | NONE              | Yes        |
    | unknown_error        | nothing matched                 | NONE              | Yes        |

Authentication errors are never retried: the login redirect fires at most
once per invocation.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error categories."""

    NETWORK_ERROR = "network_error"
    """Transport failure: the request never produced a response."""

    TIMEOUT_ERROR = "timeout_error"
    """The transport gave up waiting for a response."""

    CORS_ERROR = "cors_error"
    """Browser or proxy blocked a cross-origin request."""

    VALIDATION_ERROR = "validation_error"
    """Request payload rejected (HTTP 400/422) or failed client-side checks."""

    AUTHENTICATION_ERROR = "authentication_error"
    """Session missing or expired (HTTP 401)."""

    AUTHORIZATION_ERROR = "authorization_error"
    """Signed in but not allowed (HTTP 403)."""

    NOT_FOUND_ERROR = "not_found_error"
    """Requested resource does not exist (HTTP 404)."""

    SERVER_ERROR = "server_error"
    """Backend failure (HTTP 5xx)."""

    API_ERROR = "api_error"
    """Any other non-success HTTP status."""

    UNKNOWN_ERROR = "unknown_error"
    """Nothing else matched."""

    @property
    def default_recovery(self) -> RecoveryAction:
        return _DEFAULT_RECOVERY[self]

    @property
    def is_retriable(self) -> bool:
        """Whether the executor may repeat an operation that failed this way."""
        return self not in NON_RETRIABLE_KINDS

    @property
    def uses_server_message(self) -> bool:
        """Whether a server or client supplied message may be shown verbatim."""
        return self in SERVER_MESSAGE_KINDS


class RecoveryAction(str, Enum):
    """Remedial action attached to an error kind."""

    NONE = "none"
    """No automatic action; the caller presents the error."""

    RETRY = "retry"
    """Offer a user-initiated retry."""

    REDIRECT_TO_LOGIN = "redirect_to_login"
    """Clear the session and navigate to the login page."""

    RELOAD_PAGE = "reload_page"
    """Reload the page to refresh stale cross-origin state."""


_DEFAULT_RECOVERY: dict[ErrorKind, RecoveryAction] = {
    ErrorKind.NETWORK_ERROR: RecoveryAction.RETRY,
    ErrorKind.TIMEOUT_ERROR: RecoveryAction.RETRY,
    ErrorKind.CORS_ERROR: RecoveryAction.RELOAD_PAGE,
    ErrorKind.VALIDATION_ERROR: RecoveryAction.NONE,
    ErrorKind.AUTHENTICATION_ERROR: RecoveryAction.REDIRECT_TO_LOGIN,
    ErrorKind.AUTHORIZATION_ERROR: RecoveryAction.NONE,
    ErrorKind.NOT_FOUND_ERROR: RecoveryAction.NONE,
    ErrorKind.SERVER_ERROR: RecoveryAction.RETRY,
    ErrorKind.API_ERROR: RecoveryAction.NONE,
    ErrorKind.UNKNOWN_ERROR: RecoveryAction.NONE,
}

NON_RETRIABLE_KINDS: frozenset[ErrorKind] = frozenset({
    ErrorKind.AUTHENTICATION_ERROR,
    ErrorKind.AUTHORIZATION_ERROR,
    ErrorKind.NOT_FOUND_ERROR,
    ErrorKind.VALIDATION_ERROR,
})

SERVER_MESSAGE_KINDS: frozenset[ErrorKind] = frozenset({
    ErrorKind.VALIDATION_ERROR,
    ErrorKind.API_ERROR,
})

# =============================================================================
# HTTP status mapping
# =============================================================================

STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION_ERROR,
    401: ErrorKind.AUTHENTICATION_ERROR,
    403: ErrorKind.AUTHORIZATION_ERROR,
    404: ErrorKind.NOT_FOUND_ERROR,
    422: ErrorKind.VALIDATION_ERROR,
}


def kind_for_status(status: int) -> ErrorKind:
    """Map an HTTP status code received in a failed response to an error kind.

    Statuses without a dedicated kind (including 2xx/3xx responses that the
    transport still rejected) map to API_ERROR.
    """
    if status in STATUS_KINDS:
        return STATUS_KINDS[status]
    if 500 <= status <= 599:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.API_ERROR
