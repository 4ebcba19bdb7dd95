# -*- coding: utf-8 -*-
"""Public registration and participation forms."""

from datetime import datetime, UTC
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from nestfest.core.config import Settings, get_settings
from nestfest.core.errors import ConfigurationError, UpstreamUnavailableError, ValidationError
from nestfest.core.logging import get_logger
from nestfest.core.rate_limiter import get_client_key
from nestfest.models.common import is_valid_email
from nestfest.models.registration import (
    ParticipationRequest,
    ParticipationResponse,
    SubmissionReceipt,
    SubmissionRequest,
    SubmissionResponse,
)
from nestfest.services import email_templates
from nestfest.services.action_limiter import ActionLimiters, get_action_limiters, raise_if_limited
from nestfest.services.email import EmailService, get_email_service
from nestfest.services.participation import INVOLVEMENT_TYPES, central_timestamp
from nestfest.services.sheets import (
    PARTICIPANTS_HEADER,
    PARTICIPANTS_HEADER_RANGE,
    PARTICIPANTS_RANGE,
    SUBMISSIONS_RANGE,
    SheetsError,
    SheetsService,
    get_sheets_service,
)

logger = get_logger(__name__)

router = APIRouter(tags=["registration"])


def _require_fields(body, fields) -> None:
    missing = body.missing(*fields)
    if missing:
        raise ValidationError("Missing required fields", code="MISSING_FIELDS", fields=missing)


@router.post(
    "/submit",
    response_model=SubmissionResponse,
    summary="Register a business idea",
)
def submit_registration(
    request: Request,
    body: SubmissionRequest,
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    mailer: Annotated[EmailService, Depends(get_email_service)],
    limiters: Annotated[ActionLimiters, Depends(get_action_limiters)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SubmissionResponse:
    """Store a registration in the Submissions tab and email a confirmation.

    Each client may submit a limited number of registrations per hour.
    """
    _require_fields(body, SubmissionRequest.REQUIRED)
    if not is_valid_email(body.email):
        raise ValidationError("Invalid email format", code="INVALID_EMAIL")

    client = get_client_key(request)
    raise_if_limited(limiters.submission, client, "Too many submissions. Please try again later.")

    if not sheets.configured:
        logger.error("Submission rejected: spreadsheet not configured")
        raise ConfigurationError("Server configuration error")

    email = body.email.strip().lower()
    timestamp = (body.timestamp or "").strip() or datetime.now(UTC).isoformat()
    row = [
        body.full_name.strip(),
        email,
        body.major.strip(),
        body.business_name.strip(),
        body.business_description.strip(),
        timestamp,
    ]

    try:
        sheets.append_row(SUBMISSIONS_RANGE, row)
    except SheetsError as e:
        raise UpstreamUnavailableError(
            "Failed to submit registration. Please try again later.",
            code="SUBMISSION_ERROR",
        ) from e

    logger.info("Registration stored", email=email, business_name=row[3])

    mailer.send(
        email,
        email_templates.REGISTRATION_SUBJECT,
        email_templates.registration_email(row[0], row[3], settings.site_url),
    )

    limiters.submission.record_action(client)

    return SubmissionResponse(
        data=SubmissionReceipt(submission_id=timestamp, email=email, business_name=row[3]),
    )


@router.post(
    "/participate",
    response_model=ParticipationResponse,
    summary="Register interest in taking part",
)
def register_participation(
    body: ParticipationRequest,
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    mailer: Annotated[EmailService, Depends(get_email_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ParticipationResponse:
    """Record a mentor, volunteer, judge, sponsor, entrepreneur or guest."""
    _require_fields(body, ParticipationRequest.REQUIRED)
    if not is_valid_email(body.email):
        raise ValidationError("Invalid email format", code="INVALID_EMAIL")

    involvement_type = body.involvement_type.strip()
    if involvement_type not in INVOLVEMENT_TYPES:
        raise ValidationError(
            "Invalid involvement type",
            code="INVALID_INVOLVEMENT_TYPE",
            validTypes=list(INVOLVEMENT_TYPES),
        )

    if not sheets.configured:
        logger.error("Participation rejected: spreadsheet not configured")
        raise ConfigurationError("Server configuration error")

    full_name = body.full_name.strip()
    email = body.email.strip().lower()
    questions = (body.questions or "").strip()

    try:
        sheets.ensure_header(PARTICIPANTS_HEADER_RANGE, PARTICIPANTS_HEADER)
        sheets.append_row(
            PARTICIPANTS_RANGE,
            [central_timestamp(), full_name, email, involvement_type, questions],
            value_input_option="RAW",
        )
    except SheetsError as e:
        raise UpstreamUnavailableError(
            "Failed to save your information. Please try again later.",
            code="PARTICIPATION_ERROR",
        ) from e

    logger.info("Participation stored", email=email, involvement_type=involvement_type)

    mailer.send(
        email,
        email_templates.participation_subject(involvement_type),
        email_templates.participation_email(full_name, involvement_type, questions, settings.site_url),
    )

    return ParticipationResponse(
        message=f"Thank you for your interest in participating as {involvement_type}!",
        involvement_type=involvement_type,
    )
