# -*- coding: utf-8 -*-
"""Admin views over the event spreadsheet.

Both endpoints need an admin session and share the coarse per-client
read limit.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from nestfest.core.errors import ConfigurationError, UpstreamUnavailableError
from nestfest.core.logging import get_logger
from nestfest.core.rate_limiter import limiter, RateLimits
from nestfest.models.admin import (
    CoachingSession,
    Pagination,
    SearchCriteria,
    SessionLookupResponse,
    Submission,
    SubmissionsData,
    SubmissionsResponse,
    SubmissionStats,
)
from nestfest.services.auth import SessionUser, require_admin
from nestfest.services.coaching_sessions import rows_to_sessions, search_sessions
from nestfest.services.sheets import COACHING_RANGE, SUBMISSIONS_READ_RANGE, SheetsError, SheetsService, get_sheets_service
from nestfest.services.submissions import compute_stats, paginate, public, rows_to_submissions

logger = get_logger(__name__)

router = APIRouter(tags=["admin"])


def _require_sheet(sheets: SheetsService) -> None:
    if not sheets.configured:
        raise ConfigurationError("Google Sheets not configured", code="SHEETS_NOT_CONFIGURED")


@router.get(
    "/submissions",
    response_model=SubmissionsResponse,
    summary="List registrations",
)
@limiter.limit(RateLimits.ADMIN_READ)
def list_submissions(
    request: Request,
    admin: Annotated[SessionUser, Depends(require_admin)],
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
) -> SubmissionsResponse:
    """Paginated submissions, newest first, with summary statistics.

    Statistics cover every submission, not just the returned page.
    """
    _require_sheet(sheets)
    try:
        rows = sheets.read_range(SUBMISSIONS_READ_RANGE)
    except SheetsError as e:
        raise UpstreamUnavailableError("Failed to fetch submissions", code="FETCH_ERROR") from e

    submissions = rows_to_submissions(rows)
    page_items, pagination = paginate(submissions, page, limit)
    stats = compute_stats(submissions)

    logger.info("Submissions listed", admin=admin.email, total=len(submissions), page=page)

    return SubmissionsResponse(
        data=SubmissionsData(
            submissions=[Submission.model_validate(public(s)) for s in page_items],
            pagination=Pagination(**pagination),
            stats=SubmissionStats.model_validate(stats),
        ),
    )


@router.get(
    "/session-lookup",
    response_model=SessionLookupResponse,
    summary="Search coaching sessions",
)
@limiter.limit(RateLimits.ADMIN_READ)
def lookup_sessions(
    request: Request,
    admin: Annotated[SessionUser, Depends(require_admin)],
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    session_id: Annotated[str | None, Query(alias="sessionId")] = None,
    email: str | None = None,
    name: str | None = None,
) -> SessionLookupResponse:
    """Find coaching sessions by id, student email or student name.

    Each criterion is a case-insensitive substring match; all given criteria
    must match. With no criteria every session is returned.
    """
    _require_sheet(sheets)
    try:
        rows = sheets.read_range(COACHING_RANGE)
    except SheetsError as e:
        raise UpstreamUnavailableError("Failed to look up sessions", code="SESSION_LOOKUP_ERROR") from e

    matches = search_sessions(rows_to_sessions(rows), session_id=session_id, email=email, name=name)

    return SessionLookupResponse(
        sessions=[CoachingSession.model_validate(s) for s in matches],
        total=len(matches),
        search_criteria=SearchCriteria(session_id=session_id, email=email, name=name),
    )
