"""Schemas for character endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CharacterResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    name: str
    subclass: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CharacterSearchResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    subclass: str
    user_id: str | None = None


class CharacterForm(BaseModel):
    name: str
    subclass: str


class CharacterListResponse(BaseModel):
    items: list[CharacterResponse]
    can_add: bool


__all__ = ["CharacterResponse", "CharacterSearchResult", "CharacterForm", "CharacterListResponse"]
