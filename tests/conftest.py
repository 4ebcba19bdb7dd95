# -*- coding: utf-8 -*-
import os

# Configure before the application module reads settings
os.environ["APP_ENV"] = "test"
os.environ["SESSION_SECRET"] = "test-session-secret-0123456789abcdef0123456789"
os.environ["LOG_FORMAT"] = "console"
for _name in ("GOOGLE_SHEET_ID", "SENDGRID_API_KEY", "ANTHROPIC_API_KEY", "SENTRY_DSN"):
    os.environ[_name] = ""

from unittest.mock import MagicMock

import bcrypt
import pytest
from fastapi.testclient import TestClient

from nestfest.core.rate_limiter import limiter
from nestfest.main import app
from nestfest.services.action_limiter import get_action_limiters
from nestfest.services.ai_generation import ClaudeService, ContentGenerationService, get_content_service
from nestfest.services.email import EmailService, get_email_service
from nestfest.services.sheets import AdminUser, SheetsService, get_sheets_service

ADMIN_EMAIL = "admin@nestfest.org"
ADMIN_PASSWORD = "correct horse battery"


@pytest.fixture(autouse=True)
def reset_limits():
    """Start every test with empty limiter tables."""
    get_action_limiters().reset()
    limiter.reset()
    yield
    get_action_limiters().reset()
    limiter.reset()


@pytest.fixture
def sheets():
    """A configured spreadsheet service that records calls."""
    service = MagicMock(spec=SheetsService)
    service.configured = True
    service.read_range.return_value = []
    service.find_user_by_email.return_value = None
    return service


@pytest.fixture
def mailer():
    """An email service that accepts everything."""
    service = MagicMock(spec=EmailService)
    service.send.return_value = True
    return service


@pytest.fixture
def claude():
    """An AI client that is never reachable unless a test says otherwise."""
    service = MagicMock(spec=ClaudeService)
    service.generate.side_effect = RuntimeError("offline")
    return service


@pytest.fixture
def client(sheets, mailer, claude):
    """Create a test client with external services replaced."""
    app.dependency_overrides[get_sheets_service] = lambda: sheets
    app.dependency_overrides[get_email_service] = lambda: mailer
    app.dependency_overrides[get_content_service] = lambda: ContentGenerationService(claude=claude)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def make_admin(role: str = "admin", status: str = "active", password: str = ADMIN_PASSWORD) -> AdminUser:
    password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")
    return AdminUser(
        email=ADMIN_EMAIL,
        password_hash=password_hash,
        role=role,
        status=status,
        name="Event Admin",
    )


@pytest.fixture
def admin_factory():
    """Build Users-tab records with a real bcrypt hash."""
    return make_admin


@pytest.fixture
def admin_user():
    return make_admin()


@pytest.fixture
def admin_client(client, sheets, admin_user):
    """A client holding an admin session cookie."""
    sheets.find_user_by_email.return_value = admin_user
    response = client.post(
        "/api/v1/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client
