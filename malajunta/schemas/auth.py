"""Schemas for authentication endpoints."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from ..constants import MIN_PASSWORD_LENGTH
from .profiles import ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    full_name: str = Field(..., min_length=1, max_length=120)


class SessionUser(BaseModel):
    id: str
    email: str | None = None
    full_name: str | None = None


class SessionResponse(BaseModel):
    state: str
    user: SessionUser | None = None
    profile: ProfileResponse | None = None
    needs_confirmation: bool = False


__all__ = ["LoginRequest", "RegisterRequest", "SessionUser", "SessionResponse"]
