# -*- coding: utf-8 -*-
"""Shared model base and field checks."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and bool(EMAIL_PATTERN.match(value.strip()))


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python uses snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def missing(self, *fields: str) -> list[str]:
        """camelCase names of the given fields that are absent or blank."""
        return [to_camel(name) for name in fields if _blank(getattr(self, name))]


class ErrorResponse(BaseModel):
    """Body of every error response. Some errors add detail keys."""

    model_config = ConfigDict(extra="allow")

    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Machine-readable error code")


class SuccessResponse(BaseModel):
    success: bool = True
    message: str
