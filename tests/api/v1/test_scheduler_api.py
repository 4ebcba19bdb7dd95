# -*- coding: utf-8 -*-
"""Scheduler monitoring API tests."""

from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def mock_scheduler():
    with patch("nestfest.api.v1.scheduler.get_scheduler") as mock:
        scheduler = MagicMock()
        scheduler.is_running.return_value = True
        scheduler.has_job.return_value = True
        scheduler.get_jobs.return_value = [
            {
                "id": "sweep_submission_limiter",
                "name": "sweep_submission_limiter",
                "next_run": "2026-03-01T10:01:00+00:00",
                "trigger": "interval[0:01:00]",
            }
        ]
        scheduler.get_job_history.return_value = [
            {
                "job_id": "sweep_submission_limiter",
                "run_time": "2026-03-01T10:00:00+00:00",
                "status": "success",
                "error": None,
            }
        ]
        mock.return_value = scheduler
        yield scheduler


class TestSchedulerApi:
    """Tests for the admin scheduler endpoints."""

    def test_status(self, admin_client, mock_scheduler):
        """Test running state and jobs are reported."""
        response = admin_client.get("/api/v1/scheduler/status")

        assert response.status_code == 200
        data = response.json()
        assert data["running"] is True
        assert data["job_count"] == 1
        assert data["jobs"][0]["id"] == "sweep_submission_limiter"

    def test_history(self, admin_client, mock_scheduler):
        """Test job history is returned with the requested limit."""
        response = admin_client.get("/api/v1/scheduler/history?limit=5")

        assert response.status_code == 200
        assert response.json()["total"] == 1
        mock_scheduler.get_job_history.assert_called_once_with(5)

    def test_run_job(self, admin_client, mock_scheduler):
        """Test a job can be triggered manually."""
        response = admin_client.post("/api/v1/scheduler/jobs/sweep_login_limiter/run")

        assert response.status_code == 202
        mock_scheduler.run_job_now.assert_called_once_with("sweep_login_limiter")

    def test_run_unknown_job(self, admin_client, mock_scheduler):
        """Test an unknown job id is a 404."""
        mock_scheduler.has_job.return_value = False

        response = admin_client.post("/api/v1/scheduler/jobs/nope/run")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
        mock_scheduler.run_job_now.assert_not_called()

    def test_job_value_error_is_job_error(self, admin_client, mock_scheduler):
        """Test a ValueError raised by the job itself is not reported as a missing job."""
        mock_scheduler.has_job.return_value = True
        mock_scheduler.run_job_now.side_effect = ValueError("bad interval")

        response = admin_client.post("/api/v1/scheduler/jobs/sweep_login_limiter/run")

        assert response.status_code == 500
        assert response.json()["code"] == "JOB_ERROR"

    def test_run_failing_job(self, admin_client, mock_scheduler):
        mock_scheduler.run_job_now.side_effect = RuntimeError("boom")

        response = admin_client.post("/api/v1/scheduler/jobs/sweep_login_limiter/run")

        assert response.status_code == 500
        assert response.json()["code"] == "JOB_ERROR"

    def test_requires_admin(self, client, mock_scheduler):
        assert client.post("/api/v1/scheduler/jobs/x/run").status_code == 401
