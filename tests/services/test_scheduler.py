# -*- coding: utf-8 -*-
"""Tests for the background scheduler wrapper."""

import pytest

from nestfest.services.action_limiter import ActionLimiter
from nestfest.services.scheduler import SchedulerService


def noop():
    pass


def failing_job():
    raise RuntimeError("boom")


class Counter:
    def __init__(self):
        self.calls = 0

    def run(self):
        self.calls += 1


@pytest.fixture
def scheduler():
    """A scheduler that is never started, so jobs stay pending."""
    return SchedulerService()


class TestJobs:
    """Tests for registering and removing jobs."""

    def test_interval_job_registered(self, scheduler):
        """Test an interval job is listed."""
        scheduler.add_interval_job("sweep", noop, seconds=60)

        jobs = scheduler.get_jobs()
        assert [j["id"] for j in jobs] == ["sweep"]
        assert "interval" in jobs[0]["trigger"]
        assert scheduler.has_job("sweep") is True

    def test_cron_job_registered(self, scheduler):
        """Test a daily job is listed with a cron trigger."""
        scheduler.add_cron_job("nightly", noop, hour=3)

        assert "cron" in scheduler.get_jobs()[0]["trigger"]

    def test_remove_job(self, scheduler):
        """Test removal reports whether the job existed."""
        scheduler.add_interval_job("sweep", noop, seconds=60)

        assert scheduler.remove_job("sweep") is True
        assert scheduler.remove_job("sweep") is False
        assert scheduler.has_job("sweep") is False

    def test_not_running_until_started(self, scheduler):
        assert scheduler.is_running() is False


class TestRunJobNow:
    """Tests for manual execution and history."""

    def test_runs_and_records(self, scheduler):
        """Test a manual run calls the job and records success."""
        counter = Counter()
        scheduler.add_interval_job("sweep", counter.run, seconds=60)

        scheduler.run_job_now("sweep")

        assert counter.calls == 1
        history = scheduler.get_job_history()
        assert history[0]["job_id"] == "sweep"
        assert history[0]["status"] == "success"

    def test_failure_recorded_and_raised(self, scheduler):
        """Test a failing job is recorded as an error and re-raised."""
        scheduler.add_interval_job("sweep", failing_job, seconds=60)

        with pytest.raises(RuntimeError):
            scheduler.run_job_now("sweep")

        assert scheduler.get_job_history()[0]["error"] == "boom"

    def test_unknown_job(self, scheduler):
        """Test running an unknown job raises ValueError."""
        with pytest.raises(ValueError):
            scheduler.run_job_now("missing")

    def test_history_newest_first_and_limited(self, scheduler):
        """Test history order and limit."""
        scheduler.add_interval_job("a", noop, seconds=60)
        scheduler.add_interval_job("b", noop, seconds=60)
        scheduler.run_job_now("a")
        scheduler.run_job_now("b")

        history = scheduler.get_job_history(limit=1)
        assert [h["job_id"] for h in history] == ["b"]


class TestLimiterSweepJob:
    """Tests for limiter sweeps on a real scheduler."""

    def test_sweep_runs_through_scheduler(self, scheduler):
        """Test a limiter's sweep job evicts expired records when run."""
        now = [0.0]
        limiter = ActionLimiter("login", 5, 900, clock=lambda: now[0])
        limiter.record_action("203.0.113.9")
        limiter.start(scheduler, interval_seconds=60)

        now[0] = 1000.0
        scheduler.run_job_now(limiter.job_id)

        assert limiter.store.get("203.0.113.9") is None

        limiter.stop()
        assert scheduler.has_job(limiter.job_id) is False
