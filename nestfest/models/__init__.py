# -*- coding: utf-8 -*-
"""Pydantic models."""

from nestfest.models.common import ErrorResponse, SuccessResponse

__all__ = ["ErrorResponse", "SuccessResponse"]
