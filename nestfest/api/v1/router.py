# -*- coding: utf-8 -*-
from fastapi import APIRouter, status

from nestfest.api.v1 import admin, auth, generation, health, registration, scheduler
from nestfest.models import ErrorResponse

PUBLIC_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_429_TOO_MANY_REQUESTS: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}

ADMIN_ERRORS = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_429_TOO_MANY_REQUESTS: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}

api_router = APIRouter()

# Health check
api_router.include_router(health.router, tags=["health"])

# Public forms
api_router.include_router(registration.router, responses=PUBLIC_ERRORS)

# AI content generation and coaching
api_router.include_router(generation.router, responses=PUBLIC_ERRORS)

# Admin login and session
api_router.include_router(auth.router, responses=PUBLIC_ERRORS)

# Admin data views
api_router.include_router(admin.router, responses=ADMIN_ERRORS)

# Scheduler API
api_router.include_router(scheduler.router, responses=ADMIN_ERRORS)
