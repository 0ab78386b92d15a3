"""Schemas for comment endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..constants import MAX_COMMENT_LENGTH


class CommentCreate(BaseModel):
    # The service trims and enforces the limit; the schema caps raw payloads.
    content: str = Field(..., max_length=MAX_COMMENT_LENGTH * 2)


class CommentResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime | None = None
    author_name: str | None = None
    author_avatar: str | None = None
    like_count: int = 0
    liked: bool = False


__all__ = ["CommentCreate", "CommentResponse"]
