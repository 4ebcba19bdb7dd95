# -*- coding: utf-8 -*-
"""Admin login, session status and logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from nestfest.core.errors import ApiError, UnauthenticatedError, ValidationError
from nestfest.core.logging import get_logger
from nestfest.core.rate_limiter import get_client_key
from nestfest.models.auth import LoginRequest, LoginResponse, SessionResponse, SessionUserInfo, UserInfo
from nestfest.models.common import SuccessResponse, is_valid_email
from nestfest.services.action_limiter import ActionLimiters, get_action_limiters, raise_if_limited
from nestfest.services.auth import create_session, current_user, destroy_session, verify_password
from nestfest.services.sheets import SheetsError, SheetsService, get_sheets_service

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Admin login",
)
def login(
    request: Request,
    body: LoginRequest,
    sheets: Annotated[SheetsService, Depends(get_sheets_service)],
    limiters: Annotated[ActionLimiters, Depends(get_action_limiters)],
) -> LoginResponse:
    """Check credentials against the Users tab and start a cookie session.

    Failed attempts count against the client's login limit. A successful
    login clears it.
    """
    if not body.email or not body.password:
        raise ValidationError("Email and password are required", code="MISSING_CREDENTIALS")
    if not is_valid_email(body.email):
        raise ValidationError("Invalid email format", code="INVALID_EMAIL")

    client = get_client_key(request)
    raise_if_limited(
        limiters.login,
        client,
        "Too many login attempts. Please try again in 15 minutes.",
    )

    email = body.email.strip().lower()
    try:
        user = sheets.find_user_by_email(email)
    except SheetsError as e:
        raise ApiError("Login failed. Please try again later.") from e

    if user is None or not verify_password(body.password, user.password_hash):
        limiters.login.record_action(client)
        logger.warning("Login failed", email=email)
        raise UnauthenticatedError(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

    if not user.is_active:
        limiters.login.record_action(client)
        raise UnauthenticatedError("Account is not active", code="ACCOUNT_INACTIVE")

    session_user = create_session(request, user)
    try:
        sheets.update_user_last_login(email)
    except Exception as e:
        logger.warning("Last login update failed", email=email, error=str(e))
    limiters.login.clear(client)

    return LoginResponse(user=UserInfo(**session_user.to_public()))


@router.get(
    "/session",
    response_model=SessionResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": SessionResponse}},
    summary="Current session",
)
def get_session(request: Request):
    user = current_user(request)
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False, "message": "No active session"},
        )
    return SessionResponse(
        authenticated=True,
        user=SessionUserInfo(**user.to_public(), login_time=user.login_time),
    )


@router.delete(
    "/session",
    response_model=SuccessResponse,
    summary="Log out",
)
def logout(request: Request) -> SuccessResponse:
    user = current_user(request)
    destroy_session(request)
    if user is not None:
        logger.info("Logged out", email=user.email)
    return SuccessResponse(message="Logged out successfully")
