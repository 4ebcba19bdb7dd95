# -*- coding: utf-8 -*-
"""Admin submissions and session lookup API tests."""

from datetime import datetime, timedelta, UTC

import pytest

from nestfest.services.coaching_sessions import SESSION_TYPE
from nestfest.services.sheets import COACHING_RANGE, SUBMISSIONS_READ_RANGE, SheetsError


def _submission_rows(count):
    now = datetime.now(UTC)
    return [
        [f"Student {i}", f"s{i}@example.com", "CS" if i % 2 else "Math", f"Biz {i}", "Desc",
         (now - timedelta(days=i)).isoformat()]
        for i in range(count)
    ]


COACHING_ROWS = [
    ["Timestamp", "Student Name", "Student Email", "Major", "Idea", "Problem", "Solution",
     "Funding", "AI Generated", "Content", "Session Type", "Session ID"],
    ["2026-03-01T10:00:00+00:00", "Maya Chen", "maya@example.com", "CS", "Idea", "P", "S", "$1k",
     "Yes", '{"elevator": "Hi"}', SESSION_TYPE, "coach_1_aaa"],
    ["2026-03-02T10:00:00+00:00", "Leo Park", "leo@example.com", "Art", "Idea", "P", "S", "$2k",
     "No", "{}", SESSION_TYPE, "coach_2_bbb"],
]


class TestAdminAccess:
    """Tests for admin guards."""

    @pytest.mark.parametrize("path", ["/api/v1/submissions", "/api/v1/session-lookup", "/api/v1/scheduler/status"])
    def test_requires_session(self, client, path):
        """Test anonymous requests are rejected."""
        response = client.get(path)

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_plain_user_forbidden(self, client, sheets, admin_factory):
        """Test users without an admin role are forbidden."""
        sheets.find_user_by_email.return_value = admin_factory(role="user")
        client.post("/api/v1/login", json={"email": "admin@nestfest.org", "password": "correct horse battery"})

        response = client.get("/api/v1/submissions")

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_other_browser_rejected(self, admin_client):
        """Test a session cookie used from another user agent is invalid."""
        response = admin_client.get("/api/v1/submissions", headers={"User-Agent": "curl/8.0"})

        assert response.status_code == 401
        assert response.json()["code"] == "SESSION_INVALID"


class TestSubmissions:
    """Tests for GET /submissions."""

    def test_lists_with_stats(self, admin_client, sheets):
        """Test submissions, pagination and stats are returned."""
        sheets.read_range.return_value = _submission_rows(3)

        response = admin_client.get("/api/v1/submissions")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [s["fullName"] for s in data["submissions"]] == ["Student 0", "Student 1", "Student 2"]
        assert data["submissions"][0]["status"] == "new"
        assert data["pagination"] == {"page": 1, "limit": 50, "total": 3, "pages": 1}
        assert data["stats"]["total"] == 3
        assert data["stats"]["majorDistribution"] == {"Math": 2, "CS": 1}
        sheets.read_range.assert_called_with(SUBMISSIONS_READ_RANGE)

    def test_pagination(self, admin_client, sheets):
        """Test page and limit slice the newest-first list."""
        sheets.read_range.return_value = _submission_rows(5)

        response = admin_client.get("/api/v1/submissions?page=2&limit=2")

        data = response.json()["data"]
        assert [s["fullName"] for s in data["submissions"]] == ["Student 2", "Student 3"]
        assert data["pagination"]["pages"] == 3
        assert data["stats"]["total"] == 5

    def test_invalid_page(self, admin_client):
        response = admin_client.get("/api/v1/submissions?page=0")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_not_configured(self, admin_client, sheets):
        sheets.configured = False

        response = admin_client.get("/api/v1/submissions")

        assert response.status_code == 500
        assert response.json()["code"] == "SHEETS_NOT_CONFIGURED"

    def test_fetch_error(self, admin_client, sheets):
        """Test spreadsheet failures are reported as fetch errors."""
        sheets.read_range.side_effect = SheetsError("down")

        response = admin_client.get("/api/v1/submissions")

        assert response.status_code == 500
        assert response.json()["code"] == "FETCH_ERROR"

    def test_read_rate_limit(self, admin_client):
        """Test admin reads are capped per minute."""
        for _ in range(30):
            assert admin_client.get("/api/v1/submissions").status_code == 200

        response = admin_client.get("/api/v1/submissions")

        assert response.status_code == 429
        assert response.json()["code"] == "RATE_LIMITED"
        assert "Retry-After" in response.headers


class TestSessionLookup:
    """Tests for GET /session-lookup."""

    def test_search_by_name(self, admin_client, sheets):
        """Test sessions are filtered and parsed."""
        sheets.read_range.return_value = COACHING_ROWS

        response = admin_client.get("/api/v1/session-lookup?name=maya")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        session = data["sessions"][0]
        assert session["sessionId"] == "coach_1_aaa"
        assert session["generatedContent"] == {"elevator": "Hi"}
        assert session["formattedTimestamp"] == "March 1, 2026 at 10:00 AM"
        assert data["searchCriteria"] == {"sessionId": None, "email": None, "name": "maya"}
        sheets.read_range.assert_called_with(COACHING_RANGE)

    def test_search_by_session_id(self, admin_client, sheets):
        sheets.read_range.return_value = COACHING_ROWS

        response = admin_client.get("/api/v1/session-lookup?sessionId=coach_2")

        assert [s["studentName"] for s in response.json()["sessions"]] == ["Leo Park"]

    def test_no_criteria_returns_all(self, admin_client, sheets):
        """Test every session is returned newest first without criteria."""
        sheets.read_range.return_value = COACHING_ROWS

        response = admin_client.get("/api/v1/session-lookup")

        assert [s["sessionId"] for s in response.json()["sessions"]] == ["coach_2_bbb", "coach_1_aaa"]

    def test_lookup_error(self, admin_client, sheets):
        sheets.read_range.side_effect = SheetsError("down")

        response = admin_client.get("/api/v1/session-lookup?email=maya")

        assert response.status_code == 500
        assert response.json()["code"] == "SESSION_LOOKUP_ERROR"
