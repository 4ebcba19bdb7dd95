# -*- coding: utf-8 -*-
"""Sentry error tracking configuration."""

from nestfest.core.config import get_settings
from nestfest.core.logging import get_logger

logger = get_logger(__name__)

# Exceptions that describe client mistakes rather than server faults
_EXPECTED_ERRORS = {
    "HTTPException",
    "RequestValidationError",
    "RateLimitExceeded",
    "ValidationError",
    "UnauthenticatedError",
    "ForbiddenError",
    "RateLimitedError",
}


def setup_sentry() -> bool:
    """Initialize Sentry SDK for error tracking.

    Returns:
        True if Sentry was initialized, False if DSN is not configured.
    """
    settings = get_settings()

    if not settings.sentry_dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration

        release = f"{settings.app_name}@{settings.app_version}"
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.app_env.value,
            release=release,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry_profiles_sample_rate,
            integrations=[
                StarletteIntegration(transaction_style="endpoint"),
                FastApiIntegration(transaction_style="endpoint"),
                # Structured logs stay in structlog, not Sentry events
                LoggingIntegration(level=None, event_level=None),
            ],
            send_default_pii=False,
            before_send=_before_send,
        )

        logger.info("Sentry initialized", environment=settings.app_env.value, release=release)
        return True

    except ImportError:
        logger.warning("sentry-sdk not installed, skipping Sentry initialization")
        return False
    except Exception as e:
        logger.error("Failed to initialize Sentry", error=str(e))
        return False


def _before_send(event: dict, hint: dict) -> dict | None:
    """Drop events for expected client-side errors.

    Args:
        event: The Sentry event dict
        hint: Additional context about the event

    Returns:
        The event, or None to drop it
    """
    if "exc_info" in hint:
        exc_type, _, _ = hint["exc_info"]
        if exc_type.__name__ in _EXPECTED_ERRORS:
            return None

    return event


def capture_exception(error: Exception, **extra_context) -> str | None:
    """Capture an exception to Sentry with additional context.

    Returns:
        The Sentry event ID if captured, None otherwise
    """
    try:
        import sentry_sdk

        with sentry_sdk.new_scope() as scope:
            for key, value in extra_context.items():
                scope.set_extra(key, value)
            return sentry_sdk.capture_exception(error)
    except ImportError:
        return None


def set_user_context(email: str | None = None, **extra) -> None:
    """Attach the signed-in admin to subsequent Sentry events."""
    try:
        import sentry_sdk

        user_data = {"email": email} if email else {}
        user_data.update(extra)
        sentry_sdk.set_user(user_data if user_data else None)
    except ImportError:
        pass
