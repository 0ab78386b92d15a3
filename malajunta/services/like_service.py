"""Like toggles for posts and comments."""
from __future__ import annotations

from typing import NamedTuple

from ..gateway import likes as likes_gateway
from .errors import unwrap
from .identity_service import IdentityContext


class LikeState(NamedTuple):
    target_id: str
    liked: bool
    like_count: int


def toggle_post_like(identity: IdentityContext, post_id: str) -> LikeState:
    identity.require_user()
    data = unwrap(likes_gateway.toggle_post_like(identity.client, post_id), "likes.toggle_failed")
    return LikeState(post_id, data["liked"], data["like_count"])


def toggle_comment_like(identity: IdentityContext, comment_id: str) -> LikeState:
    identity.require_user()
    data = unwrap(likes_gateway.toggle_comment_like(identity.client, comment_id), "likes.toggle_failed")
    return LikeState(comment_id, data["liked"], data["like_count"])


def viewer_likes_post(identity: IdentityContext, post_id: str) -> bool:
    if identity.user_id is None:
        return False
    result = likes_gateway.get_user_post_like(identity.client, identity.user_id, post_id)
    return bool(result.data) if result.ok else False


def viewer_likes_comment(identity: IdentityContext, comment_id: str) -> bool:
    if identity.user_id is None:
        return False
    result = likes_gateway.get_user_comment_like(identity.client, identity.user_id, comment_id)
    return bool(result.data) if result.ok else False


__all__ = ["LikeState", "toggle_post_like", "toggle_comment_like", "viewer_likes_post", "viewer_likes_comment"]
