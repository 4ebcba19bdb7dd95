# -*- coding: utf-8 -*-
"""Scheduler monitoring API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel

from nestfest.core.errors import ApiError
from nestfest.core.logging import get_logger
from nestfest.core.rate_limiter import limiter, RateLimits
from nestfest.services.auth import SessionUser, require_admin
from nestfest.services.scheduler import get_scheduler

logger = get_logger(__name__)

router = APIRouter(prefix="/scheduler", tags=["scheduler"])


class JobNotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Job not found"


class JobInfo(BaseModel):
    """Information about a scheduled job."""

    id: str
    name: str | None
    next_run: str | None
    trigger: str


class JobHistoryEntry(BaseModel):
    """Record of a job execution."""

    job_id: str
    run_time: str
    status: str
    error: str | None


class SchedulerStatus(BaseModel):
    running: bool
    job_count: int
    jobs: list[JobInfo]


class SchedulerHistoryResponse(BaseModel):
    entries: list[JobHistoryEntry]
    total: int


@router.get(
    "/status",
    response_model=SchedulerStatus,
    summary="Get scheduler status",
)
@limiter.limit(RateLimits.ADMIN_READ)
def get_scheduler_status(
    request: Request,
    admin: Annotated[SessionUser, Depends(require_admin)],
) -> SchedulerStatus:
    """Running state and scheduled jobs, including the limiter sweeps."""
    scheduler = get_scheduler()
    jobs = scheduler.get_jobs()

    return SchedulerStatus(
        running=scheduler.is_running(),
        job_count=len(jobs),
        jobs=[JobInfo(**j) for j in jobs],
    )


@router.get(
    "/history",
    response_model=SchedulerHistoryResponse,
    summary="Get job execution history",
)
@limiter.limit(RateLimits.ADMIN_READ)
def get_job_history(
    request: Request,
    admin: Annotated[SessionUser, Depends(require_admin)],
    limit: int = Query(20, ge=1, le=100),
) -> SchedulerHistoryResponse:
    """Recent job executions, newest first.

    Args:
        limit: Maximum number of entries to return (default 20)
    """
    history = get_scheduler().get_job_history(limit)

    return SchedulerHistoryResponse(
        entries=[JobHistoryEntry(**h) for h in history],
        total=len(history),
    )


@router.post(
    "/jobs/{job_id}/run",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Manually trigger a job",
)
@limiter.limit(RateLimits.DEFAULT)
def run_job_manually(
    request: Request,
    job_id: str,
    admin: Annotated[SessionUser, Depends(require_admin)],
) -> dict:
    """Run a scheduled job immediately, e.g. a limiter sweep."""
    scheduler = get_scheduler()
    if not scheduler.has_job(job_id):
        raise JobNotFoundError(f"Job not found: {job_id}")

    try:
        scheduler.run_job_now(job_id)
    except Exception as e:
        raise ApiError(f"Failed to run job: {e}", code="JOB_ERROR") from e

    logger.info("Job triggered manually", job_id=job_id, admin=admin.email)
    return {"success": True, "message": f"Job {job_id} triggered successfully"}
