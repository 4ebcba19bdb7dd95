# -*- coding: utf-8 -*-
"""API error types and their JSON rendering.

Every error response has the shape ``{"error": str, "code": str}``, plus
any extra keys an error carries (e.g. ``validTypes``).
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nestfest.core.logging import get_logger
from nestfest.core.sentry import capture_exception

logger = get_logger(__name__)


class ApiError(Exception):
    """Base class for errors rendered as ``{error, code}`` responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "SERVER_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, code: str | None = None, **extra: Any):
        self.message = message or self.message
        self.code = code or self.code
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, **self.extra}

    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(ApiError):
    """Missing or malformed request fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class UnauthenticatedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    message = "Authentication required"


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "Admin access required"


class RateLimitedError(ApiError):
    """Client exceeded an action limit. Carries the seconds until reset."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMITED"
    message = "Too many requests. Please try again later."

    def __init__(self, message: str | None = None, retry_after: int = 60, **extra: Any):
        super().__init__(message, **extra)
        self.retry_after = max(int(retry_after), 1)

    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}


class UpstreamUnavailableError(ApiError):
    """A collaborator (spreadsheet, AI, email) failed."""

    code = "UPSTREAM_UNAVAILABLE"
    message = "An upstream service is unavailable"


class ConfigurationError(ApiError):
    code = "CONFIG_ERROR"
    message = "Server configuration error"


_HTTP_CODES = {
    status.HTTP_404_NOT_FOUND: ("Not found", "NOT_FOUND"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("Method not allowed", "METHOD_NOT_ALLOWED"),
}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("API error", code=exc.code, error=exc.message)
    else:
        logger.info("Request rejected", code=exc.code, status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message, code = _HTTP_CODES.get(exc.status_code, (str(exc.detail), "HTTP_ERROR"))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message, "code": code},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = [".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request body",
            "code": "VALIDATION_ERROR",
            "fields": [f for f in fields if f],
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    capture_exception(exc, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "code": "SERVER_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the ``{error, code}`` renderers on an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
