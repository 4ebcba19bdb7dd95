# -*- coding: utf-8 -*-
"""Pydantic models for registration and participation forms."""

from typing import ClassVar

from pydantic import Field

from nestfest.models.common import CamelModel

# Fields are optional so handlers can report every missing field at once


class SubmissionRequest(CamelModel):
    """Business idea registration form."""

    full_name: str | None = Field(default=None, description="Student's full name")
    email: str | None = Field(default=None, description="Contact email")
    major: str | None = Field(default=None, description="Field of study")
    business_name: str | None = Field(default=None, description="Name of the venture")
    business_description: str | None = Field(default=None, description="What the venture does")
    timestamp: str | None = Field(default=None, description="Client-side submission time (ISO-8601)")

    REQUIRED: ClassVar[tuple[str, ...]] = ("full_name", "email", "major", "business_name", "business_description")


class SubmissionReceipt(CamelModel):
    submission_id: str
    email: str
    business_name: str


class SubmissionResponse(CamelModel):
    success: bool = True
    message: str = "Registration submitted successfully!"
    data: SubmissionReceipt


class ParticipationRequest(CamelModel):
    """Interest form for mentors, volunteers, judges, sponsors and guests."""

    full_name: str | None = Field(default=None, description="Full name")
    email: str | None = Field(default=None, description="Contact email")
    involvement_type: str | None = Field(default=None, description="How they want to take part")
    questions: str | None = Field(default=None, description="Optional questions or notes")

    REQUIRED: ClassVar[tuple[str, ...]] = ("full_name", "email", "involvement_type")


class ParticipationResponse(CamelModel):
    success: bool = True
    message: str
    involvement_type: str
