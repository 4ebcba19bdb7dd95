# -*- coding: utf-8 -*-
"""Wrong-method and unknown-route responses."""

import pytest


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/v1/submit"),
        ("get", "/api/v1/participate"),
        ("get", "/api/v1/generate"),
        ("put", "/api/v1/coaching"),
        ("get", "/api/v1/login"),
        ("post", "/api/v1/session"),
        ("post", "/api/v1/submissions"),
        ("delete", "/api/v1/session-lookup"),
    ],
)
def test_method_not_allowed(client, method, path):
    """Test wrong methods return 405 in the common error shape."""
    response = client.request(method.upper(), path)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}


def test_unknown_route(client):
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
