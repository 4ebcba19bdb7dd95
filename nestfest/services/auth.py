# -*- coding: utf-8 -*-
"""Admin authentication: password hashing, cookie sessions and route guards.

Sessions live in a signed cookie managed by Starlette's SessionMiddleware.
The cookie stores the admin's email, role, name, login time and the user
agent that logged in, which is checked on every guarded request.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Annotated

import bcrypt
from fastapi import Depends, Request

from nestfest.core.config import Settings, get_settings
from nestfest.core.errors import ConfigurationError, ForbiddenError, UnauthenticatedError
from nestfest.core.logging import bind_context, get_logger
from nestfest.core.rate_limiter import get_client_key
from nestfest.core.sentry import set_user_context
from nestfest.services.sheets import AdminUser

logger = get_logger(__name__)

ALLOWED_ROLES = ("admin", "superadmin", "user")
ADMIN_ROLES = ("admin", "superadmin")

MIN_SECRET_LENGTH = 32


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash. Malformed hashes never match."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


@dataclass
class SessionUser:
    """The admin attached to the current session."""

    email: str
    role: str
    name: str
    login_time: str

    def to_public(self) -> dict[str, str]:
        return {"email": self.email, "role": self.role, "name": self.name}


def create_session(request: Request, user: AdminUser) -> SessionUser:
    """Start a session for ``user``, replacing any existing one."""
    if not user.email or user.role not in ALLOWED_ROLES:
        raise ValueError("A session needs an email and a valid role")

    login_time = datetime.now(UTC).isoformat()
    request.session.clear()
    request.session.update({
        "email": user.email.lower(),
        "role": user.role,
        "name": user.name or user.email,
        "loginTime": login_time,
        "userAgent": request.headers.get("user-agent", ""),
        "ipAddress": get_client_key(request),
    })
    logger.info("Session created", email=user.email.lower(), role=user.role)
    return SessionUser(user.email.lower(), user.role, user.name or user.email, login_time)


def destroy_session(request: Request) -> None:
    request.session.clear()


def current_user(request: Request) -> SessionUser | None:
    """The signed-in user, or None without a session."""
    data = request.session
    if not data.get("email"):
        return None
    return SessionUser(
        email=data["email"],
        role=data.get("role", ""),
        name=data.get("name", ""),
        login_time=data.get("loginTime", ""),
    )


def _session_expired(login_time: str, settings: Settings) -> bool:
    try:
        started = datetime.fromisoformat(login_time)
    except ValueError:
        return True
    if started.tzinfo is None:
        started = started.replace(tzinfo=UTC)
    return datetime.now(UTC) - started > settings.session_duration


def require_auth(request: Request) -> SessionUser:
    """Dependency: a valid, unexpired session from the same browser."""
    user = current_user(request)
    if user is None:
        raise UnauthenticatedError("Authentication required", code="UNAUTHORIZED")

    if _session_expired(user.login_time, get_settings()):
        destroy_session(request)
        raise UnauthenticatedError("Session expired", code="SESSION_EXPIRED")

    if request.session.get("userAgent", "") != request.headers.get("user-agent", ""):
        logger.warning("Session fingerprint mismatch", email=user.email)
        destroy_session(request)
        raise UnauthenticatedError("Session invalid", code="SESSION_INVALID")

    if user.role not in ALLOWED_ROLES:
        raise ForbiddenError("Invalid user role", code="INVALID_ROLE")

    bind_context(admin_email=user.email)
    set_user_context(email=user.email, role=user.role)
    return user


def require_admin(user: Annotated[SessionUser, Depends(require_auth)]) -> SessionUser:
    """Dependency: an authenticated admin or superadmin."""
    if user.role not in ADMIN_ROLES:
        raise ForbiddenError("Admin access required", code="FORBIDDEN")
    return user


def session_config_problems(settings: Settings) -> list[str]:
    """Describe weaknesses in the session secret."""
    problems = []
    if not settings.session_secret:
        problems.append("SESSION_SECRET is not set")
    elif len(settings.session_secret) < MIN_SECRET_LENGTH:
        problems.append(f"SESSION_SECRET must be at least {MIN_SECRET_LENGTH} characters")
    if "dev-secret" in settings.session_secret:
        problems.append("SESSION_SECRET still uses the development placeholder")
    return problems


def resolve_session_secret(settings: Settings) -> str:
    """Return the cookie signing secret.

    Production refuses to start with a weak secret. Elsewhere a missing secret
    is replaced with a random one, so sessions do not survive restarts.

    Raises:
        ConfigurationError: In production when the secret is weak or missing.
    """
    problems = session_config_problems(settings)
    if problems and settings.is_production:
        raise ConfigurationError("; ".join(problems))
    for problem in problems:
        logger.warning("Session configuration", problem=problem)

    return settings.session_secret or secrets.token_urlsafe(48)
