"""Comments on media posts."""
from __future__ import annotations

from typing import Any

from ..gateway import comments as comments_gateway
from .errors import unwrap
from .identity_service import IdentityContext
from .validation import validate_comment

FALLBACK_AUTHOR_NAME = "Usuario"


def author_name(profile: dict[str, Any] | None, email: str | None) -> str:
    """Display name, then the email's local part, then a generic label."""

    name = ((profile or {}).get("full_name") or "").strip()
    if name:
        return name
    local_part = (email or "").split("@", 1)[0].strip()
    return local_part or FALLBACK_AUTHOR_NAME


def list_comments(identity: IdentityContext, post_id: str) -> list[dict[str, Any]]:
    return unwrap(comments_gateway.list_post_comments(identity.client, post_id), "comments.load_failed")


def create_comment(identity: IdentityContext, post_id: str, content: str) -> dict[str, Any]:
    user = identity.require_user()
    text = validate_comment(content)
    row = unwrap(
        comments_gateway.create_comment(identity.client, user_id=user.id, post_id=post_id, content=text),
        "comments.create_failed",
    )
    return {
        **(row or {}),
        "author_name": author_name(identity.profile, identity.email),
        "author_avatar": (identity.profile or {}).get("avatar_url"),
        "like_count": 0,
    }


def delete_comment(identity: IdentityContext, comment_id: str) -> None:
    identity.require_user()
    unwrap(
        comments_gateway.delete_comment(identity.client, comment_id),
        "comments.delete_failed",
        not_found_key="comments.not_found",
    )


__all__ = ["FALLBACK_AUTHOR_NAME", "author_name", "list_comments", "create_comment", "delete_comment"]
