# -*- coding: utf-8 -*-
"""AI content generation with template fallback."""

import json
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Any, Mapping

import requests

from nestfest.core.config import get_settings
from nestfest.core.errors import UpstreamUnavailableError
from nestfest.core.logging import get_logger
from nestfest.services.fallback_generator import (
    BUSINESS_DESCRIPTION,
    EXECUTIVE_SUMMARY,
    PITCH_OUTLINE,
    PRESENTATION_SLIDES,
    generate_fallback_content,
)

logger = get_logger(__name__)

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"

GENERATED_BY_AI = "claude-api"
GENERATED_BY_TEMPLATE = "template"

BASE_CONTEXT = (
    "You are helping a student create professional content for a NEST FEST "
    "entrepreneurship pitch presentation. Be encouraging, professional, and focus on "
    "practical business value. Create comprehensive, detailed content that students "
    "can actually use."
)

# (instruction, [(label, input key)], closing instruction)
PROMPTS: dict[str, tuple[str, list[tuple[str, str]], str]] = {
    BUSINESS_DESCRIPTION: (
        "Create a comprehensive business description (500-800 words) based on these details:",
        [("Business concept", "concept"), ("Problem being solved", "problem"),
         ("What they're seeking", "needs")],
        "Include sections for: business concept overview, problem description, solution "
        "approach, market opportunity, competitive advantage, revenue model, what they're "
        "seeking and next steps.\n\nFormat as a professional business description suitable "
        "for a pitch presentation.",
    ),
    PITCH_OUTLINE: (
        "Create a detailed 5-minute pitch outline based on these details:",
        [("Business concept", "concept"), ("Problem", "problem"),
         ("Target market", "market"), ("Competitive advantage", "advantage")],
        "Provide a structured outline with timing suggestions, speaking points, and delivery "
        "tips for each section.",
    ),
    EXECUTIVE_SUMMARY: (
        "Create a comprehensive executive summary (1-2 pages) based on these details:",
        [("Business concept", "concept"), ("Problem", "problem"), ("Solution", "solution"),
         ("Market opportunity", "market"), ("Financial projections", "financials")],
        "Format as a professional executive summary suitable for investors.",
    ),
    PRESENTATION_SLIDES: (
        "Create detailed slide content suggestions based on these details:",
        [("Business concept", "concept"), ("Problem", "problem"), ("Solution", "solution")],
        "Suggest 10-12 slide topics with detailed content descriptions, talking points, and "
        "visual suggestions for each slide.",
    ),
}


def build_prompt(content_type: str, inputs: Mapping[str, Any]) -> str:
    """Build the model prompt for a content type."""
    if content_type not in PROMPTS:
        return (
            f"{BASE_CONTEXT}\n\nCreate comprehensive professional business content based on "
            f"the provided information: {json.dumps(dict(inputs), default=str)}"
        )

    instruction, fields, closing = PROMPTS[content_type]
    details = "\n".join(
        f"- {label}: {inputs.get(key) or 'Not provided'}" for label, key in fields
    )
    return f"{BASE_CONTEXT}\n\n{instruction}\n{details}\n\n{closing}"


class ClaudeService:
    """Client for the Anthropic Messages API."""

    def __init__(self, session: requests.Session | None = None):
        settings = get_settings()
        self._api_key = settings.anthropic_api_key
        self._model = settings.anthropic_model
        self._max_tokens = settings.anthropic_max_tokens
        self._timeout = settings.anthropic_timeout_seconds
        self._session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def generate(self, prompt: str) -> str:
        """Send a single-turn prompt and return the reply text.

        Raises:
            UpstreamUnavailableError: If the API is not configured, unreachable,
                returns an error status or an unexpected body.
        """
        if not self.configured:
            raise UpstreamUnavailableError("Claude API key not configured")

        try:
            response = self._session.post(
                ANTHROPIC_MESSAGES_URL,
                headers={
                    "content-type": "application/json",
                    "x-api-key": self._api_key,
                    "anthropic-version": ANTHROPIC_VERSION,
                },
                json={
                    "model": self._model,
                    "max_tokens": self._max_tokens,
                    "messages": [{"role": "user", "content": prompt}],
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"Claude API request failed: {e}") from e

        if not response.ok:
            try:
                detail = response.json().get("error", {}).get("message", "Unknown error")
            except ValueError:
                detail = "Unknown error"
            raise UpstreamUnavailableError(f"Claude API error: {response.status_code} - {detail}")

        try:
            text = response.json()["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamUnavailableError("Malformed Claude API response") from e

        if not isinstance(text, str) or not text.strip():
            raise UpstreamUnavailableError("Empty Claude API response")
        return text


@dataclass
class GenerationResult:
    content: str
    generated_by: str


class ContentGenerationService:
    """Generates content with the AI service, falling back to templates."""

    def __init__(self, claude: ClaudeService | None = None):
        self._claude = claude or ClaudeService()

    def generate(
        self, content_type: str, inputs: Mapping[str, Any], today: date | None = None
    ) -> GenerationResult:
        """Generate a document. Any AI failure falls back to the templates."""
        try:
            text = self._claude.generate(build_prompt(content_type, inputs))
            logger.info("Content generated with Claude", content_type=content_type)
            return GenerationResult(content=text, generated_by=GENERATED_BY_AI)
        except Exception as e:
            logger.warning(
                "Claude unavailable, using template fallback",
                content_type=content_type,
                error=str(e),
            )

        return GenerationResult(
            content=generate_fallback_content(content_type, inputs, today=today),
            generated_by=GENERATED_BY_TEMPLATE,
        )


@lru_cache
def get_content_service() -> ContentGenerationService:
    """Get cached ContentGenerationService instance."""
    return ContentGenerationService()
