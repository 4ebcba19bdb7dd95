# -*- coding: utf-8 -*-
from datetime import datetime, UTC

from fastapi import APIRouter

from nestfest.core.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env.value,
        "timestamp": datetime.now(UTC).isoformat(),
    }
