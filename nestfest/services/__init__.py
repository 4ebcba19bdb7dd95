# -*- coding: utf-8 -*-
"""Application services."""

from nestfest.services.ai_generation import ContentGenerationService, get_content_service
from nestfest.services.sheets import SheetsService, get_sheets_service

__all__ = ["ContentGenerationService", "get_content_service", "SheetsService", "get_sheets_service"]
