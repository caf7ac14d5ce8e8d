"""Tests for the httpx-based ApiClient.

Requests are served by httpx.MockTransport; no network access is needed.
"""

import json
from collections.abc import Callable

import httpx
import pytest

from ereport.core.config import ApiConfig
from ereport.core.errors import ErrorKind
from ereport.service import ErrorService
from ereport.transport import ApiClient, TransportFailure

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler, token: str | None = None) -> ApiClient:
    return ApiClient(
        ApiConfig(base_url="http://ereport.test/api"),
        token_provider=lambda: token,
        transport=httpx.MockTransport(handler),
    )


class TestRequest:
    """Tests for ApiClient.request()."""

    @pytest.mark.asyncio
    async def test_returns_decoded_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": 7})

        async with _client(handler, token="abc") as client:
            data = await client.request("GET", "/reports/7", params={"full": "1"})

        assert data == {"id": 7}
        assert seen[0].url.path == "/api/reports/7"
        assert seen[0].url.params["full"] == "1"
        assert seen[0].headers["Authorization"] == "Bearer abc"
        assert seen[0].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_no_auth_header_without_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        async with _client(handler) as client:
            assert await client.request("DELETE", "/reports/7") is None

        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_posts_json_body(self) -> None:
        bodies: list[object] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={"id": 1})

        async with _client(handler) as client:
            await client.request("POST", "/reports", json={"title": "Banjir"})

        assert bodies == [{"title": "Banjir"}]

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "boom"})

        async with _client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.request("GET", "/reports")


class TestEnvelope:
    """Tests for the verb helpers returning ApiResponse."""

    @pytest.mark.asyncio
    async def test_success_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": 1}])

        async with _client(handler) as client:
            response = await client.get("/reports")

        assert response.success
        assert response.data == [{"id": 1}]
        assert response.message == "Request successful"
        assert response.error is None

    @pytest.mark.asyncio
    async def test_validation_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={"message": "Judul wajib diisi"})

        async with _client(handler) as client:
            response = await client.post("/reports", {"title": ""})

        assert not response.success
        assert response.data is None
        assert response.message == "Judul wajib diisi"
        assert response.error is not None
        assert response.error.kind is ErrorKind.VALIDATION_ERROR
        assert response.error.context == "POST /reports"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/settings/cross-origin", "/admin/cors-origins"])
    async def test_cors_like_path_keeps_status_kind(self, path: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401)

        async with _client(handler) as client:
            response = await client.get(path)

        assert response.error is not None
        assert response.error.kind is ErrorKind.AUTHENTICATION_ERROR
        assert response.error.http_status == 401

    @pytest.mark.asyncio
    async def test_connection_failure_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            response = await client.put("/reports/1", {"title": "x"})

        assert response.error is not None
        assert response.error.kind is ErrorKind.NETWORK_ERROR
        assert response.message == (
            "Tidak dapat terhubung ke server. Periksa koneksi internet Anda."
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "status", "kind"),
        [
            ("patch", 403, ErrorKind.AUTHORIZATION_ERROR),
            ("delete", 404, ErrorKind.NOT_FOUND_ERROR),
        ],
    )
    async def test_other_verbs(self, method: str, status: int, kind: ErrorKind) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == method.upper()
            return httpx.Response(status)

        async with _client(handler) as client:
            verb = getattr(client, method)
            response = await (verb("/reports/1") if method == "delete" else verb("/reports/1", {}))

        assert response.error is not None
        assert response.error.kind is kind
        assert response.error.http_status == status


class TestWithExecutor:
    """ApiClient.request() driven through the resilient executor."""

    @pytest.mark.asyncio
    async def test_retries_until_backend_recovers(self, service: ErrorService) -> None:
        statuses = [503, 503, 200]

        def handler(request: httpx.Request) -> httpx.Response:
            status = statuses.pop(0)
            return httpx.Response(status, json={"ok": status == 200})

        async with _client(handler) as client:
            data = await service.execute_with_retry(
                lambda: client.request("GET", "/health"), "health"
            )

        assert data == {"ok": True}
        assert service.get_error_count() == 0


class TestTransportFailure:
    """Tests for TransportFailure payload errors."""

    def test_from_payload(self, service: ErrorService) -> None:
        failure = TransportFailure.from_payload(
            {"message": "timeout of 10000ms exceeded", "code": "ECONNABORTED"}
        )

        assert failure.code == "ECONNABORTED"
        assert service.classify(failure).kind is ErrorKind.TIMEOUT_ERROR

    def test_response_payload(self, service: ErrorService) -> None:
        failure = TransportFailure("Request failed", response={"status": 401})
        assert service.classify(failure).kind is ErrorKind.AUTHENTICATION_ERROR
