"""View models behind the media feed, post detail and character roster.

Each view wraps one session's :class:`IdentityContext`. Actions call the
service layer and only touch local state once the backend has answered;
rejected actions leave the displayed state as it was and record the message
key in ``error``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..constants import MAX_CHARACTERS_PER_PROFILE
from ..services import IdentityContext, ServiceError
from ..services import character_service, comment_service, like_service, post_service

logger = logging.getLogger(__name__)


@dataclass
class FeedView:
    identity: IdentityContext
    posts: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    def load(self) -> "FeedView":
        try:
            self.posts = post_service.list_feed(self.identity)
            self.error = None
        except ServiceError as exc:
            self.error = exc.message_key
            return self
        for post in self.posts:
            post["liked"] = like_service.viewer_likes_post(self.identity, post["id"])
        return self

    def find(self, post_id: str) -> dict[str, Any] | None:
        return next((post for post in self.posts if str(post.get("id")) == str(post_id)), None)

    def toggle_like(self, post_id: str) -> like_service.LikeState | None:
        try:
            state = like_service.toggle_post_like(self.identity, post_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return None
        post = self.find(post_id)
        if post is not None:
            post["like_count"] = state.like_count
            post["liked"] = state.liked
        return state

    def delete_post(self, post_id: str) -> bool:
        """Drop the post from the feed once the backend confirms the delete."""

        try:
            post_service.delete_post(self.identity, post_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return False
        self.posts = [post for post in self.posts if str(post.get("id")) != str(post_id)]
        return True

    def comment_added(self, post_id: str) -> None:
        post = self.find(post_id)
        if post is not None:
            post["comment_count"] = int(post.get("comment_count") or 0) + 1

    def comment_removed(self, post_id: str) -> None:
        post = self.find(post_id)
        if post is not None:
            post["comment_count"] = max(0, int(post.get("comment_count") or 0) - 1)


@dataclass
class PostDetailView:
    identity: IdentityContext
    post_id: str
    post: dict[str, Any] | None = None
    comments: list[dict[str, Any]] = field(default_factory=list)
    tags: list[dict[str, Any]] = field(default_factory=list)
    liked: bool = False
    error: str | None = None

    def load(self) -> "PostDetailView":
        try:
            self.post = post_service.get_post(self.identity, self.post_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return self
        try:
            self.comments = comment_service.list_comments(self.identity, self.post_id)
            self.tags = post_service.list_post_tags(self.identity, self.post_id)
        except ServiceError as exc:
            self.error = exc.message_key
        self.liked = like_service.viewer_likes_post(self.identity, self.post_id)
        for comment in self.comments:
            comment["liked"] = like_service.viewer_likes_comment(self.identity, comment["id"])
        return self

    @property
    def is_owner(self) -> bool:
        return bool(self.post) and self.identity.user_id == self.post.get("user_id")

    def add_comment(self, content: str) -> dict[str, Any] | None:
        try:
            comment = comment_service.create_comment(self.identity, self.post_id, content)
        except ServiceError as exc:
            self.error = exc.message_key
            return None
        self.comments.append(comment)
        if self.post is not None:
            self.post["comment_count"] = int(self.post.get("comment_count") or 0) + 1
        return comment

    def remove_comment(self, comment_id: str) -> bool:
        try:
            comment_service.delete_comment(self.identity, comment_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return False
        self.comments = [c for c in self.comments if str(c.get("id")) != str(comment_id)]
        if self.post is not None:
            self.post["comment_count"] = max(0, int(self.post.get("comment_count") or 0) - 1)
        return True

    def toggle_like(self) -> like_service.LikeState | None:
        try:
            state = like_service.toggle_post_like(self.identity, self.post_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return None
        self.liked = state.liked
        if self.post is not None:
            self.post["like_count"] = state.like_count
        return state

    def toggle_comment_like(self, comment_id: str) -> like_service.LikeState | None:
        try:
            state = like_service.toggle_comment_like(self.identity, comment_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return None
        for comment in self.comments:
            if str(comment.get("id")) == str(comment_id):
                comment["liked"] = state.liked
                comment["like_count"] = state.like_count
        return state


@dataclass
class CharacterRoster:
    identity: IdentityContext
    characters: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    def load(self) -> "CharacterRoster":
        try:
            self.characters = character_service.list_characters(self.identity)
        except ServiceError as exc:
            self.error = exc.message_key
        return self

    @property
    def can_add(self) -> bool:
        return len(self.characters) < MAX_CHARACTERS_PER_PROFILE

    def add(self, name: str, subclass: str) -> dict[str, Any] | None:
        try:
            character = character_service.create_character(self.identity, name, subclass)
        except ServiceError as exc:
            self.error = exc.message_key
            return None
        self.characters.append(character)
        return character

    def edit(self, character_id: str, name: str, subclass: str) -> dict[str, Any] | None:
        try:
            updated = character_service.update_character(self.identity, character_id, name, subclass)
        except ServiceError as exc:
            self.error = exc.message_key
            return None
        self.characters = [updated if str(c.get("id")) == str(character_id) else c for c in self.characters]
        return updated

    def remove(self, character_id: str) -> bool:
        try:
            character_service.delete_character(self.identity, character_id)
        except ServiceError as exc:
            self.error = exc.message_key
            return False
        self.characters = [c for c in self.characters if str(c.get("id")) != str(character_id)]
        return True


__all__ = ["FeedView", "PostDetailView", "CharacterRoster"]
