# -*- coding: utf-8 -*-
"""Pydantic models for AI content generation and presentation coaching."""

from datetime import datetime, UTC
from typing import Any, ClassVar

from pydantic import Field

from nestfest.models.common import CamelModel


def _utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


class GenerationRequest(CamelModel):
    """Request for one generated document."""

    type: str | None = Field(default=None, description="business_description, pitch_outline, executive_summary or presentation_slides")
    inputs: Any = Field(default=None, description="Free-text fields such as concept, problem and needs")


class GenerationMetadata(CamelModel):
    type: str
    generated_by: str = Field(..., description="'claude-api' or 'template'")
    timestamp: datetime = Field(default_factory=_utc_now)


class GenerationResponse(CamelModel):
    success: bool = True
    content: str
    metadata: GenerationMetadata


class CoachingDetails(CamelModel):
    """A student's pitch details as entered in the coaching tool."""

    student_name: str | None = None
    student_email: str | None = None
    student_major: str | None = None
    business_idea: str | None = None
    problem_description: str | None = None
    solution_description: str | None = None
    funding_needs: str | None = None


class CoachingSessionRequest(CoachingDetails):
    """A completed coaching session to store and confirm by email."""

    ai_generated: bool = Field(default=False, description="Whether the materials came from the AI service")
    generated_content: dict[str, Any] | None = Field(default=None, description="Materials shown to the student")

    REQUIRED: ClassVar[tuple[str, ...]] = ("student_name", "student_email", "business_idea")


class CoachingSessionResponse(CamelModel):
    success: bool = True
    message: str = "Coaching session saved successfully"
    session_id: str
    timestamp: str


class CoachingMaterials(CamelModel):
    elevator: str
    presentation: str
    notes: str
    qa: str


class CoachingMaterialsResponse(CamelModel):
    success: bool = True
    materials: CoachingMaterials
    generated_by: str = "template"
