# -*- coding: utf-8 -*-
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from nestfest.api.v1.router import api_router
from nestfest.core.config import get_settings
from nestfest.core.errors import register_exception_handlers
from nestfest.core.logging import get_logger, setup_logging
from nestfest.core.rate_limiter import limiter
from nestfest.core.sentry import setup_sentry
from nestfest.middleware.request_logging import RequestLoggingMiddleware
from nestfest.services.action_limiter import get_action_limiters
from nestfest.services.auth import resolve_session_secret
from nestfest.services.scheduler import get_scheduler

# Initialize structured logging first
setup_logging()

settings = get_settings()
logger = get_logger(__name__)


def setup_scheduler() -> bool:
    """Register the limiter sweeps and start the background scheduler.

    Returns:
        True if the scheduler was started.
    """
    if settings.is_test or not settings.scheduler_enabled:
        logger.info("Background scheduler disabled")
        return False

    scheduler = get_scheduler()
    get_action_limiters().start(scheduler, settings.limiter_sweep_seconds)
    scheduler.start()
    logger.info("Background scheduler configured and started")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Initialize Sentry error tracking
    setup_sentry()

    # Startup: Start limiter sweeps
    scheduled = setup_scheduler()

    logger.info(
        "Application started",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.app_env.value,
    )

    yield

    # Shutdown: Stop sweeps and scheduler
    if scheduled:
        get_action_limiters().stop()
        get_scheduler().shutdown(wait=False)
        logger.info("Scheduler shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="NEST FEST registration, AI pitch coaching and admin API",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Rate limiting setup
app.state.limiter = limiter

register_exception_handlers(app)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Render coarse route limits in the common error shape."""
    response = JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests. Please try again later.",
            "code": "RATE_LIMITED",
        },
    )

    if hasattr(request.state, "view_rate_limit"):
        rate_info = request.state.view_rate_limit
        if isinstance(rate_info, tuple) and len(rate_info) > 0:
            response.headers["X-RateLimit-Limit"] = str(rate_info[0].amount)

    response.headers["Retry-After"] = str(getattr(exc, "retry_after", 60))

    return response


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Signed cookie sessions for admins
app.add_middleware(
    SessionMiddleware,
    secret_key=resolve_session_secret(settings),
    session_cookie=settings.session_cookie_name,
    max_age=int(settings.session_duration.total_seconds()),
    same_site="strict" if settings.is_production else "lax",
    https_only=settings.is_production,
    domain=settings.cookie_domain or None,
)

# Request logging middleware (should be outermost for accurate timing)
app.add_middleware(RequestLoggingMiddleware)

# Include API router
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "docs": "/docs",
        "health": f"{settings.api_v1_prefix}/health",
    }
