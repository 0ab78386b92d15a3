"""Schemas for media post, tag and like endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..constants import DEFAULT_TAG_POSITION


class TagInput(BaseModel):
    character_id: str | None = None
    character_name: str
    position_x: float = Field(DEFAULT_TAG_POSITION, ge=0, le=1)
    position_y: float = Field(DEFAULT_TAG_POSITION, ge=0, le=1)


class TagResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    character_id: str | None = None
    character_name: str
    position_x: float = DEFAULT_TAG_POSITION
    position_y: float = DEFAULT_TAG_POSITION
    subclass: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_character(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("characters"), dict):
            linked = data["characters"]
            data = {**data, "subclass": linked.get("subclass")}
            if linked.get("name"):
                data["character_name"] = linked["name"]
        return data


class MediaPostResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    image_url: str
    description: str | None = None
    created_at: datetime | None = None
    author_name: str | None = None
    author_avatar: str | None = None
    like_count: int = 0
    comment_count: int = 0


class MediaPostDetailResponse(MediaPostResponse):
    tags: list[TagResponse] = Field(default_factory=list)
    liked: bool = False


class LikeStateResponse(BaseModel):
    target_id: str
    liked: bool
    like_count: int


__all__ = ["TagInput", "TagResponse", "MediaPostResponse", "MediaPostDetailResponse", "LikeStateResponse"]
