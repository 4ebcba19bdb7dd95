# -*- coding: utf-8 -*-
"""Pydantic models for admin data views."""

from typing import Any

from pydantic import Field

from nestfest.models.common import CamelModel


class Submission(CamelModel):
    id: int = Field(..., description="1-based row position in the Submissions tab")
    full_name: str
    email: str
    major: str
    business_name: str
    business_description: str
    timestamp: str
    status: str = Field(..., description="new, reviewed, approved or rejected")


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class SubmissionStats(CamelModel):
    total: int
    status_counts: dict[str, int]
    time_periods: dict[str, int] = Field(..., description="Counts for today, thisWeek and thisMonth")
    major_distribution: dict[str, int]
    last_updated: str


class SubmissionsData(CamelModel):
    submissions: list[Submission]
    pagination: Pagination
    stats: SubmissionStats


class SubmissionsResponse(CamelModel):
    success: bool = True
    data: SubmissionsData


class CoachingSession(CamelModel):
    """One row of the AI_Coaching tab."""

    timestamp: str
    student_name: str
    student_email: str
    student_major: str
    business_idea: str
    problem_description: str
    solution_description: str
    funding_needs: str
    ai_generated: str
    generated_content: Any = None
    session_type: str
    session_id: str
    formatted_timestamp: str


class SearchCriteria(CamelModel):
    session_id: str | None = None
    email: str | None = None
    name: str | None = None


class SessionLookupResponse(CamelModel):
    sessions: list[CoachingSession]
    total: int
    search_criteria: SearchCriteria
