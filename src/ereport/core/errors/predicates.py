"""Best-effort failure predicates.

Transport failures rarely carry structured type information: browsers and
HTTP clients report CORS blocks, dropped connections and timeouts as error
codes or free-text messages. The heuristics live here, each behind a named
predicate, so they can be tested and tuned without touching the classifier's
ordering.

Also provides the kind helpers used by UI code (``is_network_error`` and
friends) that operate on already classified errors.
"""

from __future__ import annotations

import re
import socket

import httpx
import pydantic

from .codes import ErrorKind
from .models import ClassifiedError

NETWORK_CODES: frozenset[str] = frozenset({
    "ERR_NETWORK",
    "NETWORK_ERROR",
    "ECONNREFUSED",
    "ECONNRESET",
    "ENOTFOUND",
    "EAI_AGAIN",
    "EHOSTUNREACH",
    "ENETUNREACH",
    "EPIPE",
})

TIMEOUT_CODES: frozenset[str] = frozenset({
    "ECONNABORTED",
    "ETIMEDOUT",
    "ESOCKETTIMEDOUT",
    "ERR_TIMEOUT",
    "TIMEOUT_ERROR",
})

_CORS_PATTERN = re.compile(r"cors|cross-origin", re.IGNORECASE)
_NETWORK_MESSAGE_PATTERN = re.compile(r"network error|failed to fetch", re.IGNORECASE)
_TIMEOUT_MESSAGE_PATTERN = re.compile(r"timeout|timed out", re.IGNORECASE)
_VALIDATION_MESSAGE_PATTERN = re.compile(r"validation", re.IGNORECASE)


def _normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def looks_like_cors_failure(message: str | None) -> bool:
    """Whether a free-text failure message describes a blocked cross-origin call.

    Substring matching on "cors" / "cross-origin"; it can misfire on
    unrelated text that happens to contain those letters.
    """
    if not message:
        return False
    return _CORS_PATTERN.search(message) is not None


def signals_timeout(
    code: str | None = None,
    message: str | None = None,
    exc: BaseException | None = None,
) -> bool:
    """Whether a failure reports an elapsed deadline."""
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return True
    if _normalize_code(code) in TIMEOUT_CODES:
        return True
    return bool(message) and _TIMEOUT_MESSAGE_PATTERN.search(message) is not None


def signals_connection_failure(
    code: str | None = None,
    message: str | None = None,
    exc: BaseException | None = None,
) -> bool:
    """Whether a failure reports that no response could be obtained.

    Timeouts count as connection failures: a request that timed out never
    received a response either.
    """
    if isinstance(exc, (httpx.TransportError, ConnectionError, socket.gaierror)):
        return True
    if _normalize_code(code) in NETWORK_CODES:
        return True
    if message and _NETWORK_MESSAGE_PATTERN.search(message):
        return True
    return signals_timeout(code, message, exc)


def looks_like_client_validation(
    name: str | None = None,
    message: str | None = None,
    exc: BaseException | None = None,
) -> bool:
    """Whether a failure is a client-side shape violation rather than a fault."""
    if isinstance(exc, pydantic.ValidationError):
        return True
    if name == "ValidationError":
        return True
    return bool(message) and _VALIDATION_MESSAGE_PATTERN.search(message) is not None


# =============================================================================
# Helpers over classified errors
# =============================================================================


def is_network_error(error: object) -> bool:
    """True for classified network and timeout errors."""
    return isinstance(error, ClassifiedError) and error.kind in (
        ErrorKind.NETWORK_ERROR,
        ErrorKind.TIMEOUT_ERROR,
    )


def is_cors_error(error: object) -> bool:
    return isinstance(error, ClassifiedError) and error.kind == ErrorKind.CORS_ERROR


def is_auth_error(error: object) -> bool:
    """True for classified authentication and authorization errors."""
    return isinstance(error, ClassifiedError) and error.kind in (
        ErrorKind.AUTHENTICATION_ERROR,
        ErrorKind.AUTHORIZATION_ERROR,
    )


def is_validation_error(error: object) -> bool:
    return isinstance(error, ClassifiedError) and error.kind == ErrorKind.VALIDATION_ERROR
