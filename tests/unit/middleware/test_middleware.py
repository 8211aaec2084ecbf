"""Unit tests for middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Response

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import MAX_REQUEST_ID_LENGTH, RequestIDMiddleware
from api.middleware.security import SECURITY_HEADERS, SecurityHeadersMiddleware


def _create_app_with_middleware() -> FastAPI:
    """Minimal app wired in the same order as the real one."""
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    @app.get("/boom")
    async def _boom():
        raise RuntimeError("boom")

    return app


async def _get(path: str = "/test", **headers: str) -> Response:
    transport = ASGITransport(app=_create_app_with_middleware())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path, headers=headers)


class TestSecurityHeadersMiddleware:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", sorted(SECURITY_HEADERS))
    async def test_adds_header(self, name: str):
        response = await _get()

        assert response.headers[name] == SECURITY_HEADERS[name]

    @pytest.mark.asyncio
    async def test_frame_options_deny(self):
        response = await _get()

        assert response.headers["x-frame-options"] == "DENY"
        assert response.headers["x-content-type-options"] == "nosniff"


class TestRequestIDMiddleware:
    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        response = await _get()

        assert len(response.headers["x-request-id"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        response = await _get(**{"X-Request-ID": "custom-req-123"})

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_replaces_overlong_request_id(self):
        oversized = "x" * (MAX_REQUEST_ID_LENGTH + 1)

        response = await _get(**{"X-Request-ID": oversized})

        assert response.headers["x-request-id"] != oversized
        assert len(response.headers["x-request-id"]) == 36

    @pytest.mark.asyncio
    async def test_generated_ids_differ(self):
        first = await _get()
        second = await _get()

        assert first.headers["x-request-id"] != second.headers["x-request-id"]


class TestRequestLoggingMiddleware:
    @pytest.mark.asyncio
    async def test_passes_response_through(self):
        response = await _get()

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_reraises_handler_errors(self):
        with pytest.raises(RuntimeError, match="boom"):
            await _get("/boom")
