# -*- coding: utf-8 -*-
"""Tests for error types and JSON rendering."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from nestfest.core.errors import (
    ApiError,
    ConfigurationError,
    RateLimitedError,
    ValidationError,
    register_exception_handlers,
)


class Payload(BaseModel):
    count: int


@pytest.fixture
def error_client():
    """A bare app with the error renderers installed."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/invalid")
    def invalid():
        raise ValidationError("Invalid content type", code="INVALID_TYPE", validTypes=["a", "b"])

    @app.get("/limited")
    def limited():
        raise RateLimitedError(retry_after=42)

    @app.get("/config")
    def config():
        raise ConfigurationError()

    @app.get("/boom")
    def boom():
        raise RuntimeError("unexpected")

    @app.post("/payload")
    def payload(body: Payload):
        return body

    return TestClient(app, raise_server_exceptions=False)


class TestApiError:
    """Tests for error objects."""

    def test_defaults(self):
        """Test class defaults apply when no message or code is given."""
        error = ConfigurationError()

        assert error.to_dict() == {"error": "Server configuration error", "code": "CONFIG_ERROR"}
        assert error.status_code == 500

    def test_extra_fields(self):
        """Test extra keyword fields are rendered."""
        error = ValidationError("Missing", code="MISSING_FIELDS", fields=["email"])

        assert error.to_dict() == {"error": "Missing", "code": "MISSING_FIELDS", "fields": ["email"]}

    def test_retry_after_minimum(self):
        """Test Retry-After is at least one second."""
        assert RateLimitedError(retry_after=0).headers() == {"Retry-After": "1"}

    def test_base_error_is_server_error(self):
        assert ApiError().to_dict()["code"] == "SERVER_ERROR"


class TestHandlers:
    """Tests for rendered responses."""

    def test_validation_error(self, error_client):
        """Test API errors render status, code and extras."""
        response = error_client.get("/invalid")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid content type",
            "code": "INVALID_TYPE",
            "validTypes": ["a", "b"],
        }

    def test_rate_limited_header(self, error_client):
        """Test 429 responses carry Retry-After."""
        response = error_client.get("/limited")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "42"
        assert response.json()["code"] == "RATE_LIMITED"

    def test_configuration_error(self, error_client):
        response = error_client.get("/config")

        assert response.status_code == 500
        assert response.json()["code"] == "CONFIG_ERROR"

    def test_unhandled_error(self, error_client):
        """Test unexpected exceptions become a generic 500."""
        response = error_client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "code": "SERVER_ERROR"}

    def test_not_found(self, error_client):
        response = error_client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_method_not_allowed(self, error_client):
        """Test wrong methods get a 405 with a machine-readable code."""
        response = error_client.delete("/invalid")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}

    def test_body_validation(self, error_client):
        """Test malformed bodies are 400 with the offending fields."""
        response = error_client.post("/payload", json={"count": "many"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["fields"] == ["count"]
