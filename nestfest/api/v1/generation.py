# -*- coding: utf-8 -*-
"""AI content generation and presentation coaching endpoints."""

import json
from datetime import datetime, UTC
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from nestfest.core.config import Settings, get_settings
from nestfest.core.errors import ValidationError
from nestfest.core.logging import get_logger
from nestfest.core.rate_limiter import get_client_key
from nestfest.models.common import is_valid_email
from nestfest.models.generation import (
    CoachingDetails,
    CoachingMaterials,
    CoachingMaterialsResponse,
    CoachingSessionRequest,
    CoachingSessionResponse,
    GenerationMetadata,
    GenerationRequest,
    GenerationResponse,
)
from nestfest.services import email_templates
from nestfest.services.action_limiter import ActionLimiters, get_action_limiters, raise_if_limited
from nestfest.services.ai_generation import ContentGenerationService, get_content_service
from nestfest.services.coaching_materials import generate_coaching_materials
from nestfest.services.coaching_sessions import build_row, new_session_id
from nestfest.services.email import EmailService, get_email_service
from nestfest.services.fallback_generator import CONTENT_TYPES
from nestfest.services.sheets import AI_USAGE_RANGE, COACHING_RANGE, SheetsService, get_sheets_service

logger = get_logger(__name__)

router = APIRouter(tags=["generation"])

LIMITED_MESSAGE = "Too many generation requests. Please try again later."


def _log_usage(
    sheets: SheetsService,
    content_type: str,
    generated_by: str,
    client: str,
    inputs: dict[str, Any],
) -> None:
    """Append a row to the AI_Usage tab. Failures are logged and ignored."""
    row = [
        datetime.now(UTC).isoformat(),
        content_type,
        generated_by,
        client,
        len(inputs),
        len(json.dumps(inputs, default=str)),
    ]
    try:
        sheets.append_row(AI_USAGE_RANGE, row)
    except Exception as e:
        logger.warning("AI usage logging failed", error=str(e))


@router.post(
    "/generate",
    response_model=GenerationResponse,
    summary="Generate pitch content",
)
def generate_content(
    request: Request,
    body: GenerationRequest,
    generator: Annotated[ContentGenerationService, Depends(get_content_service)],
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    limiters: Annotated[ActionLimiters, Depends(get_action_limiters)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> GenerationResponse:
    """Generate a business description, pitch outline, executive summary or slides.

    Uses Claude when it is configured and reachable, and the template
    generator otherwise.
    """
    if not body.type or body.inputs is None:
        raise ValidationError("Missing required fields: type and inputs", code="MISSING_FIELDS")

    if body.type not in CONTENT_TYPES:
        raise ValidationError(
            "Invalid content type",
            code="INVALID_TYPE",
            validTypes=list(CONTENT_TYPES),
        )

    client = get_client_key(request)
    raise_if_limited(limiters.generation, client, LIMITED_MESSAGE)

    inputs = body.inputs if isinstance(body.inputs, dict) else {}
    result = generator.generate(body.type, inputs)

    if settings.log_ai_usage and sheets.configured:
        _log_usage(sheets, body.type, result.generated_by, client, inputs)

    limiters.generation.record_action(client)

    return GenerationResponse(
        content=result.content,
        metadata=GenerationMetadata(type=body.type, generated_by=result.generated_by),
    )


@router.post(
    "/coaching/materials",
    response_model=CoachingMaterialsResponse,
    summary="Generate presentation coaching materials",
)
def create_coaching_materials(
    request: Request,
    body: CoachingDetails,
    limiters: Annotated[ActionLimiters, Depends(get_action_limiters)],
) -> CoachingMaterialsResponse:
    """Elevator pitch, presentation outline, speaker notes and Q&A guide."""
    client = get_client_key(request)
    raise_if_limited(limiters.generation, client, LIMITED_MESSAGE)

    materials = generate_coaching_materials(body.model_dump(by_alias=True))
    limiters.generation.record_action(client)

    return CoachingMaterialsResponse(materials=CoachingMaterials(**materials))


@router.post(
    "/coaching",
    response_model=CoachingSessionResponse,
    summary="Save a coaching session",
)
def save_coaching_session(
    body: CoachingSessionRequest,
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    mailer: Annotated[EmailService, Depends(get_email_service)],
) -> CoachingSessionResponse:
    """Store a completed coaching session and email the student its id.

    Neither the spreadsheet write nor the email can fail the request.
    """
    missing = body.missing(*CoachingSessionRequest.REQUIRED)
    if missing:
        raise ValidationError(
            f"Missing required field: {missing[0]}",
            code="MISSING_FIELD",
            fields=missing,
        )
    if not is_valid_email(body.student_email):
        raise ValidationError("Invalid email format", code="INVALID_EMAIL")

    now = datetime.now(UTC)
    timestamp = now.isoformat()
    session_id = new_session_id(int(now.timestamp() * 1000))
    data = body.model_dump(by_alias=True)

    if sheets.configured:
        try:
            sheets.append_row(COACHING_RANGE, build_row(data, session_id, timestamp))
        except Exception as e:
            logger.warning("Coaching session save failed", session_id=session_id, error=str(e))
    else:
        logger.warning("Spreadsheet not configured, coaching session not stored", session_id=session_id)

    mailer.send(
        body.student_email.strip(),
        email_templates.COACHING_SUBJECT,
        email_templates.coaching_email(
            body.student_name.strip(),
            body.business_idea.strip(),
            session_id,
            f"{now:%B} {now.day}, {now.year}",
        ),
    )

    logger.info("Coaching session completed", session_id=session_id)
    return CoachingSessionResponse(session_id=session_id, timestamp=timestamp)
