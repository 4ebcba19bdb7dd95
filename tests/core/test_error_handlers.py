# -*- coding: utf-8 -*-
"""Tests for the async exception handlers."""

import json
from unittest.mock import MagicMock, patch

import pytest
from fastapi import Request
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from nestfest.core.errors import (
    RateLimitedError,
    UnauthenticatedError,
    api_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from nestfest.main import rate_limit_exceeded_handler


@pytest.fixture
def mock_request():
    request = MagicMock(spec=Request)
    request.state = MagicMock()
    request.url.path = "/api/v1/submit"
    return request


def _body(response):
    return json.loads(response.body)


class TestApiErrorHandler:
    """Tests for rendering ApiError subclasses."""

    @pytest.mark.asyncio
    async def test_renders_error_and_code(self, mock_request):
        """Test the body carries the message, code and extra keys."""
        exc = UnauthenticatedError("Session expired", code="SESSION_EXPIRED", hint="log in")

        response = await api_error_handler(mock_request, exc)

        assert response.status_code == 401
        assert _body(response) == {"error": "Session expired", "code": "SESSION_EXPIRED", "hint": "log in"}

    @pytest.mark.asyncio
    async def test_rate_limited_sets_retry_after(self, mock_request):
        response = await api_error_handler(mock_request, RateLimitedError(retry_after=120))

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "120"


class TestHttpExceptionHandler:
    """Tests for Starlette HTTP errors."""

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, mock_request):
        """Test 405s use the common error shape."""
        response = await http_exception_handler(mock_request, StarletteHTTPException(status_code=405))

        assert response.status_code == 405
        assert _body(response) == {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}

    @pytest.mark.asyncio
    async def test_other_status_keeps_detail(self, mock_request):
        exc = StarletteHTTPException(status_code=409, detail="Conflict")

        response = await http_exception_handler(mock_request, exc)

        assert _body(response) == {"error": "Conflict", "code": "HTTP_ERROR"}


class TestUnhandledExceptionHandler:
    """Tests for unexpected errors."""

    @pytest.mark.asyncio
    async def test_reports_and_hides_details(self, mock_request):
        """Test the error goes to Sentry and the client sees a generic 500."""
        exc = RuntimeError("database password is hunter2")

        with patch("nestfest.core.errors.capture_exception") as mock_capture:
            response = await unhandled_exception_handler(mock_request, exc)

        assert response.status_code == 500
        assert _body(response) == {"error": "Internal server error", "code": "SERVER_ERROR"}
        mock_capture.assert_called_once_with(exc, path="/api/v1/submit")


class TestRateLimitExceededHandler:
    """Tests for the coarse per-route limit response."""

    @pytest.mark.asyncio
    async def test_429_response_has_retry_after_header(self, mock_request):
        """Test the limit and Retry-After headers are set."""
        mock_request.state.view_rate_limit = (MagicMock(amount=30), ["127.0.0.1"])
        mock_exc = MagicMock(spec=RateLimitExceeded)
        mock_exc.detail = "30 per 1 minute"
        mock_exc.retry_after = 45

        response = await rate_limit_exceeded_handler(mock_request, mock_exc)

        assert response.status_code == 429
        assert _body(response) == {"error": "Too many requests. Please try again later.", "code": "RATE_LIMITED"}
        assert response.headers["X-RateLimit-Limit"] == "30"
        assert response.headers["Retry-After"] == "45"

    @pytest.mark.asyncio
    async def test_default_retry_after(self, mock_request):
        mock_exc = MagicMock(spec=RateLimitExceeded)

        response = await rate_limit_exceeded_handler(mock_request, mock_exc)

        assert response.headers["Retry-After"] == "60"
        assert "X-RateLimit-Limit" not in response.headers
