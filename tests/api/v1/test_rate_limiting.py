# -*- coding: utf-8 -*-
"""Rate limiting tests."""

from nestfest.core.rate_limiter import RateLimits, get_client_key
from nestfest.services.action_limiter import get_action_limiters

SUBMISSION = {
    "fullName": "Ada Lovelace",
    "email": "ada@example.com",
    "major": "Mathematics",
    "businessName": "Engine Works",
    "businessDescription": "Programmable engines",
}


class _Request:
    def __init__(self, headers, host="127.0.0.1"):
        self.headers = headers
        self.client = type("Client", (), {"host": host})()


class TestRateLimitingConfig:
    """Test rate limiting configuration."""

    def test_admin_read_rate_limit_value(self):
        """Verify admin read limit is configured correctly."""
        assert RateLimits.ADMIN_READ == "30/minute"

    def test_default_rate_limit_value(self):
        """Verify default rate limit is configured correctly."""
        assert RateLimits.DEFAULT == "100/minute"

    def test_action_limits_from_settings(self):
        """Verify each action class has its own limit and window."""
        limiters = get_action_limiters()

        assert (limiters.submission.max_count, limiters.submission.window_seconds) == (3, 3600)
        assert (limiters.login.max_count, limiters.login.window_seconds) == (5, 900)
        assert (limiters.generation.max_count, limiters.generation.window_seconds) == (10, 3600)


class TestClientKey:
    """Tests for client identification."""

    def test_forwarded_for_first_entry(self):
        request = _Request({"x-forwarded-for": "203.0.113.9, 10.0.0.1"})

        assert get_client_key(request) == "203.0.113.9"

    def test_real_ip(self):
        request = _Request({"x-real-ip": " 198.51.100.4 "})

        assert get_client_key(request) == "198.51.100.4"

    def test_connection_address(self):
        request = _Request({}, host="192.0.2.1")

        assert get_client_key(request) == "192.0.2.1"


class TestRateLimiting429Response:
    """Test 429 Too Many Requests response."""

    def test_limited_response_shape(self, client):
        """Test the 429 body and Retry-After header."""
        for _ in range(3):
            client.post("/api/v1/submit", json=SUBMISSION)

        response = client.post("/api/v1/submit", json=SUBMISSION)

        assert response.status_code == 429
        assert set(response.json()) == {"error", "code"}
        assert 3590 <= int(response.headers["Retry-After"]) <= 3600

    def test_limiters_do_not_share_counts(self, client):
        """Test exhausting submissions leaves generation available."""
        for _ in range(3):
            client.post("/api/v1/submit", json=SUBMISSION)

        response = client.post(
            "/api/v1/generate",
            json={"type": "business_description", "inputs": {"concept": "an app"}},
        )

        assert response.status_code == 200
