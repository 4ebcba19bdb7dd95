# -*- coding: utf-8 -*-
"""Pydantic models for admin login and sessions."""

from pydantic import Field

from nestfest.models.common import CamelModel


class LoginRequest(CamelModel):
    email: str | None = Field(default=None, description="Admin email")
    password: str | None = Field(default=None, description="Admin password")


class UserInfo(CamelModel):
    email: str
    role: str
    name: str


class SessionUserInfo(UserInfo):
    login_time: str


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    user: UserInfo


class SessionResponse(CamelModel):
    authenticated: bool
    user: SessionUserInfo | None = None
    message: str | None = None
