"""Exception handlers for the FastAPI application.

Every error leaves the API in the same envelope::

    {"error_code": "...", "message": "...", "details": ...}
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def _error_response(status_code: int, error_code: str, message: Any, details: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details},
    )


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Render domain and persistence errors with their own status code."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
            request_id=_request_id(request),
        )
        return _error_response(exc.status_code, exc.error_code.value, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing errors (unknown path, wrong method) in the common envelope."""
        return _error_response(exc.status_code, "HTTP_ERROR", exc.detail, None)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Request body, path or query failed schema validation."""
        errors = exc.errors()
        logger.info("validation_error", errors=errors)
        return _error_response(
            422,
            ErrorCode.VALIDATION_ERROR.value,
            "Request validation failed",
            [
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in errors
            ],
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort: hide internals outside development."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        message = "Server Error" if settings.is_production else str(exc)
        return _error_response(
            500,
            ErrorCode.INTERNAL_ERROR.value,
            message,
            {"request_id": request_id},
        )
