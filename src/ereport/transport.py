"""httpx-based API client for the e-Report backend.

``ApiClient.request`` raises raw transport failures (``httpx`` exceptions)
so callers can hand it to the resilient executor. The verb helpers
(``get``, ``post``, ...) instead return an ``ApiResponse`` envelope with the
classified error and its display message filled in.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from ereport.core.config import ApiConfig
from ereport.core.errors import ClassifiedError, ErrorClassifier, get_error_message
from ereport.core.logging import get_logger

_logger = get_logger("transport")

T = TypeVar("T")

TokenProvider = Callable[[], str | None]


class TransportFailure(Exception):
    """Raw transport failure shaped like the browser HTTP client's errors.

    Carries a transport ``code`` (``ERR_NETWORK``, ``ECONNABORTED``, ...)
    and/or a ``response`` mapping ``{"status": int, "data": {...}}``.
    """

    def __init__(
        self,
        message: str = "",
        code: str | None = None,
        response: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TransportFailure:
        return cls(
            message=str(payload.get("message") or ""),
            code=payload.get("code"),
            response=payload.get("response"),
        )


@dataclass
class ApiResponse(Generic[T]):
    """Envelope returned by the ApiClient verb helpers."""

    data: T | None
    success: bool
    message: str
    error: ClassifiedError | None = None


class ApiClient:
    """Async JSON client with bearer-token auth."""

    def __init__(
        self,
        config: ApiConfig | None = None,
        classifier: ErrorClassifier | None = None,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ApiConfig()
        self._classifier = classifier or ErrorClassifier()
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: For non-2xx responses.
            httpx.TransportError: When no response was received.
        """
        response = await self._client.request(
            method, path, json=json, params=params, headers=self._auth_headers()
        )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def _envelope(self, method: str, path: str, **kwargs: Any) -> ApiResponse[Any]:
        try:
            data = await self.request(method, path, **kwargs)
        except Exception as exc:
            error = self._classifier.classify(exc, f"{method} {path}")
            _logger.debug("api_request_failed", method=method, path=path, kind=error.kind.value)
            return ApiResponse(
                data=None,
                success=False,
                message=get_error_message(error, self._classifier.locale),
                error=error,
            )
        return ApiResponse(data=data, success=True, message="Request successful")

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> ApiResponse[Any]:
        return await self._envelope("GET", path, params=params)

    async def post(self, path: str, data: Any = None) -> ApiResponse[Any]:
        return await self._envelope("POST", path, json=data)

    async def put(self, path: str, data: Any = None) -> ApiResponse[Any]:
        return await self._envelope("PUT", path, json=data)

    async def patch(self, path: str, data: Any = None) -> ApiResponse[Any]:
        return await self._envelope("PATCH", path, json=data)

    async def delete(self, path: str) -> ApiResponse[Any]:
        return await self._envelope("DELETE", path)
