"""Schemas for profile endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("avatar_url", mode="before")
    def clean_avatar(cls, v):
        if v in (None, "", "None"):
            return None
        return v


class ProfileUpdateRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=120)


class AvatarResponse(BaseModel):
    avatar_url: str


class AccountDeletionRequest(BaseModel):
    confirmation: str


__all__ = ["ProfileResponse", "ProfileUpdateRequest", "AvatarResponse", "AccountDeletionRequest"]
