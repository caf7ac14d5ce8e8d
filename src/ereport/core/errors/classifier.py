"""ErrorClassifier: maps any caught failure to a ClassifiedError.

Inputs arrive in many shapes: transport payloads such as
``{"response": {"status": 422, "data": {"message": "..."}}}`` or
``{"code": "ERR_NETWORK"}``, httpx exceptions, builtin ``ConnectionError`` /
``TimeoutError``, pydantic validation errors, bare strings and ``None``.
The classifier reads a uniform view of the input and applies ordered rules;
the first matching rule wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import pydantic

from ereport.core.logging import get_logger

from .codes import ErrorKind, kind_for_status
from .messages import DEFAULT_LOCALE, resolve_message
from .models import ClassifiedError
from .predicates import (
    looks_like_client_validation,
    looks_like_cors_failure,
    signals_connection_failure,
    signals_timeout,
)

_logger = get_logger("classifier")

_SERVER_MESSAGE_KEYS = ("message", "detail", "error")


@dataclass
class FailureView:
    """Normalized facts read from a raw failure.

    Attributes:
        message: Free-text message of the failure, if any.
        code: Transport error code (e.g. "ERR_NETWORK", "ECONNABORTED").
        name: Error name reported by the producer (JS-style ``name`` or class name).
        exception: The raw failure when it is a Python exception.
        has_response: Whether an HTTP response was received.
        status: HTTP status of that response (0 when unknown).
        data: Decoded response body.
    """

    message: str | None = None
    code: str | None = None
    name: str | None = None
    exception: BaseException | None = None
    has_response: bool = False
    status: int = 0
    data: Any = None

    @property
    def server_message(self) -> str | None:
        """Message supplied by the backend in the response body."""
        if isinstance(self.data, Mapping):
            for key in _SERVER_MESSAGE_KEYS:
                value = self.data.get(key)
                if isinstance(value, str) and value.strip():
                    return value
        return None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_status(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _read_response(response: Any) -> tuple[int, Any]:
    """Extract (status, body) from a mapping, httpx.Response or duck-typed object."""
    if isinstance(response, httpx.Response):
        try:
            data: Any = response.json()
        except (ValueError, httpx.ResponseNotRead):
            data = None
        return response.status_code, data
    if isinstance(response, Mapping):
        status = response.get("status", response.get("status_code"))
        return _as_status(status), response.get("data")
    status = getattr(response, "status", None)
    if status is None:
        status = getattr(response, "status_code", None)
    return _as_status(status), getattr(response, "data", None)


def inspect_failure(raw: Any) -> FailureView:
    """Build a FailureView from an arbitrary failure value."""
    view = FailureView()
    response: Any = None

    if raw is None:
        return view
    if isinstance(raw, str):
        view.message = raw
        return view

    if isinstance(raw, Mapping):
        view.message = _as_str(raw.get("message"))
        view.code = _as_str(raw.get("code"))
        view.name = _as_str(raw.get("name"))
        response = raw.get("response")
    elif isinstance(raw, BaseException):
        view.exception = raw
        view.name = type(raw).__name__
        view.message = _as_str(getattr(raw, "message", None)) or str(raw)
        view.code = _as_str(getattr(raw, "code", None))
        if isinstance(raw, httpx.HTTPStatusError):
            # The text embeds the request URL; only the response is evidence.
            view.message = None
            response = raw.response
        elif not isinstance(raw, httpx.HTTPError):
            response = getattr(raw, "response", None)
    else:
        view.message = _as_str(getattr(raw, "message", None))
        view.code = _as_str(getattr(raw, "code", None))
        view.name = _as_str(getattr(raw, "name", None))
        response = getattr(raw, "response", None)

    if response is not None:
        view.has_response = True
        view.status, view.data = _read_response(response)
    return view


def _client_validation_message(view: FailureView) -> str | None:
    exc = view.exception
    if isinstance(exc, pydantic.ValidationError):
        problems = exc.errors()
        if problems:
            first = problems[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            return f"{location}: {first['msg']}" if location else first["msg"]
    return view.message


class ErrorClassifier:
    """Classifies failures into the closed ErrorKind taxonomy.

    Rule order (first match wins):
    1. Already classified: returned unchanged.
    2. No response and a connection-failure signal: NETWORK_ERROR, or
       TIMEOUT_ERROR when the failure also reports an elapsed deadline.
    3. Cross-origin marker in the message: CORS_ERROR.
    4. HTTP response present: status mapping (see ``kind_for_status``).
    5. Client-side shape violation: VALIDATION_ERROR.
    6. Anything else: UNKNOWN_ERROR.

    ``classify`` never raises.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = locale

    def classify(self, raw: Any, context: str | None = None) -> ClassifiedError:
        """Classify a raw failure.

        Args:
            raw: Anything raised or rejected by the transport layer.
            context: Call-site label stored in ``details["context"]``.

        Returns:
            A ClassifiedError; ``raw`` itself if it is already classified.
        """
        if isinstance(raw, ClassifiedError):
            return raw
        try:
            error = self._classify(raw, context)
        except Exception as exc:
            _logger.warning(
                "classification_failed",
                context=context,
                raw_type=type(raw).__name__,
                error=str(exc),
            )
            error = self._build(ErrorKind.UNKNOWN_ERROR, raw, context)
        _logger.debug(
            "error_classified",
            kind=error.kind.value,
            http_status=error.http_status,
            context=context,
        )
        return error

    def _classify(self, raw: Any, context: str | None) -> ClassifiedError:
        view = inspect_failure(raw)

        if not view.has_response and signals_connection_failure(
            view.code, view.message, view.exception
        ):
            if signals_timeout(view.code, view.message, view.exception):
                return self._build(ErrorKind.TIMEOUT_ERROR, raw, context, code=view.code)
            return self._build(ErrorKind.NETWORK_ERROR, raw, context, code=view.code)

        if looks_like_cors_failure(view.message):
            return self._build(
                ErrorKind.CORS_ERROR, raw, context, status=view.status, code=view.code
            )

        if view.has_response:
            return self._build(
                kind_for_status(view.status),
                raw,
                context,
                status=view.status,
                supplied=view.server_message,
                response=view.data,
            )

        if looks_like_client_validation(view.name, view.message, view.exception):
            return self._build(
                ErrorKind.VALIDATION_ERROR,
                raw,
                context,
                supplied=_client_validation_message(view),
            )

        return self._build(ErrorKind.UNKNOWN_ERROR, raw, context, code=view.code)

    def _build(
        self,
        kind: ErrorKind,
        raw: Any,
        context: str | None,
        *,
        status: int = 0,
        supplied: str | None = None,
        code: str | None = None,
        response: Any = None,
    ) -> ClassifiedError:
        details: dict[str, Any] = {"original_error": raw, "context": context}
        if code is not None:
            details["code"] = code
        if response is not None:
            details["response"] = response
        return ClassifiedError(
            kind,
            resolve_message(kind, supplied, self.locale),
            http_status=status,
            details=details,
        )
