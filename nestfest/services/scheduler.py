# -*- coding: utf-8 -*-
"""Background job scheduler.

Thin wrapper around APScheduler's BackgroundScheduler that keeps a short
in-memory history of job executions for the admin status endpoint.
"""

from collections import deque
from datetime import datetime, UTC
from typing import Any, Callable

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, JobExecutionEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from nestfest.core.logging import get_logger

logger = get_logger(__name__)

MAX_HISTORY = 100


class SchedulerService:
    """Owns the process-wide background scheduler."""

    def __init__(self, scheduler: BackgroundScheduler | None = None):
        self._scheduler = scheduler or BackgroundScheduler(timezone="UTC")
        self._history: deque[dict[str, Any]] = deque(maxlen=MAX_HISTORY)
        self._scheduler.add_listener(self._on_job_event, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    def add_interval_job(
        self,
        job_id: str,
        func: Callable,
        seconds: int = 0,
        minutes: int = 0,
        hours: int = 0,
    ) -> None:
        """Schedule ``func`` to run every fixed interval. Replaces an existing job."""
        self._scheduler.add_job(
            func,
            trigger=IntervalTrigger(seconds=seconds, minutes=minutes, hours=hours),
            id=job_id,
            name=job_id,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        logger.info("Interval job scheduled", job_id=job_id, seconds=seconds, minutes=minutes, hours=hours)

    def add_cron_job(self, job_id: str, func: Callable, hour: int, minute: int = 0) -> None:
        """Schedule ``func`` daily at hour:minute UTC."""
        self._scheduler.add_job(
            func,
            trigger=CronTrigger(hour=hour, minute=minute),
            id=job_id,
            name=job_id,
            replace_existing=True,
        )
        logger.info("Cron job scheduled", job_id=job_id, hour=hour, minute=minute)

    def remove_job(self, job_id: str) -> bool:
        """Remove a job. Returns False if it was not scheduled."""
        if self._scheduler.get_job(job_id) is None:
            return False
        self._scheduler.remove_job(job_id)
        logger.info("Job removed", job_id=job_id)
        return True

    def has_job(self, job_id: str) -> bool:
        return self._scheduler.get_job(job_id) is not None

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("Scheduler started")

    def shutdown(self, wait: bool = False) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Scheduler stopped")

    def is_running(self) -> bool:
        return self._scheduler.running

    def get_jobs(self) -> list[dict[str, Any]]:
        """Describe scheduled jobs for status reporting."""
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": next_run.isoformat() if next_run else None,
                "trigger": str(job.trigger),
            })
        return jobs

    def run_job_now(self, job_id: str) -> None:
        """Run a scheduled job immediately in the calling thread.

        Raises:
            ValueError: If no job has that id.
        """
        job = self._scheduler.get_job(job_id)
        if job is None:
            raise ValueError(f"Job not found: {job_id}")

        try:
            job.func(*job.args, **job.kwargs)
            self._record(job_id, "success")
        except Exception as e:
            self._record(job_id, "error", str(e))
            raise

    def get_job_history(self, limit: int = 20) -> list[dict[str, Any]]:
        """Most recent executions first."""
        return list(self._history)[::-1][:limit]

    def _on_job_event(self, event: JobExecutionEvent) -> None:
        if event.exception:
            logger.error("Scheduled job failed", job_id=event.job_id, error=str(event.exception))
            self._record(event.job_id, "error", str(event.exception))
        else:
            self._record(event.job_id, "success")

    def _record(self, job_id: str, status: str, error: str | None = None) -> None:
        self._history.append({
            "job_id": job_id,
            "run_time": datetime.now(UTC).isoformat(),
            "status": status,
            "error": error,
        })


_scheduler: SchedulerService | None = None


def get_scheduler() -> SchedulerService:
    """Get the process-wide scheduler, creating it on first use."""
    global _scheduler
    if _scheduler is None:
        _scheduler = SchedulerService()
    return _scheduler
