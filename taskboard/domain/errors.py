"""Domain-specific exception hierarchy and FastAPI handlers."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from taskboard.instrumentation.trace import trace_exception


class AppError(Exception):
    """Base class for domain errors with structured metadata."""

    status_code: int = 400
    code: str = "app_error"
    message: str = "Application error"

    def __init__(self, message: str | None = None, *, code: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code


class UnauthorizedError(AppError):
    """Raised when the caller may not act on a resource."""

    status_code = 401
    code = "unauthorized"
    message = "Unauthorized"


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    status_code = 404
    code = "not_found"
    message = "Resource not found"


class ConflictError(AppError):
    """Raised when a write collides with existing state."""

    status_code = 409
    code = "conflict"
    message = "Resource already exists"


class ValidationError(AppError):
    """Raised when input payloads fail validation."""

    status_code = 422
    code = "validation_error"
    message = "Invalid input"


def add_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers for :class:`AppError` and :class:`HTTPException`."""

    @app.exception_handler(AppError)
    async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
        trace_exception("app_error", exc, code=exc.code, status=exc.status_code)
        payload = {
            "detail": exc.message,
            "error": {"code": exc.code, "message": exc.message},
        }
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(HTTPException)
    async def http_exc_handler(_: Request, exc: HTTPException) -> JSONResponse:
        trace_exception("http_exception", exc, status=exc.status_code, detail=exc.detail)
        payload = {
            "detail": exc.detail,
            "error": {"code": "http_error", "message": exc.detail},
        }
        return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)
