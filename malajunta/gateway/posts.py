"""Gateway calls for media posts and their stats view."""
from __future__ import annotations

import logging

from supabase import Client

from ..constants import MEDIA_POSTS_TABLE, MEDIA_POSTS_VIEW
from .client import GatewayResult, first_row, gateway_call, not_found_error

logger = logging.getLogger(__name__)


@gateway_call("Listing media posts")
def list_media_posts(client: Client) -> GatewayResult:
    response = client.table(MEDIA_POSTS_VIEW).select("*").order("created_at", desc=True).execute()
    rows = response.data or []
    logger.info("Loaded %d media posts", len(rows))
    return GatewayResult(data=rows)


@gateway_call("Listing media posts for user")
def list_user_media_posts(client: Client, user_id: str) -> GatewayResult:
    response = (
        client.table(MEDIA_POSTS_VIEW)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return GatewayResult(data=response.data or [])


@gateway_call("Loading media post")
def get_media_post(client: Client, post_id: str) -> GatewayResult:
    response = client.table(MEDIA_POSTS_VIEW).select("*").eq("id", post_id).single().execute()
    return GatewayResult(data=response.data)


@gateway_call("Creating media post")
def create_media_post(client: Client, *, user_id: str, image_url: str, description: str) -> GatewayResult:
    response = (
        client.table(MEDIA_POSTS_TABLE)
        .insert({"user_id": user_id, "image_url": image_url, "description": description})
        .execute()
    )
    return GatewayResult(data=first_row(response.data))


@gateway_call("Deleting media post")
def delete_media_post(client: Client, post_id: str) -> GatewayResult:
    """Delete one post; zero affected rows (missing, or not the caller's) is not-found."""

    response = client.table(MEDIA_POSTS_TABLE).delete().eq("id", post_id).execute()
    if not response.data:
        return GatewayResult(error=not_found_error("Media post not found or not owned by caller"))
    logger.info("Media post %s deleted", post_id)
    return GatewayResult(data=None)


__all__ = [
    "list_media_posts",
    "list_user_media_posts",
    "get_media_post",
    "create_media_post",
    "delete_media_post",
]
