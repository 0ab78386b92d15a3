"""Gateway calls for the ``post_tags`` table."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from supabase import Client

from ..constants import DEFAULT_TAG_POSITION, POST_TAGS_TABLE
from .client import GatewayResult, gateway_call

logger = logging.getLogger(__name__)

_TAG_COLUMNS = "id, post_id, character_id, character_name, position_x, position_y, characters(name, subclass)"


@gateway_call("Creating post tags")
def create_post_tags(client: Client, post_id: str, tags: Iterable[dict[str, Any]]) -> GatewayResult:
    rows = [
        {
            "post_id": post_id,
            "character_id": tag.get("character_id") or None,
            "character_name": tag["character_name"],
            "position_x": tag.get("position_x", DEFAULT_TAG_POSITION),
            "position_y": tag.get("position_y", DEFAULT_TAG_POSITION),
        }
        for tag in tags
    ]
    if not rows:
        return GatewayResult(data=[])
    response = client.table(POST_TAGS_TABLE).insert(rows).execute()
    logger.info("Created %d tags for post %s", len(rows), post_id)
    return GatewayResult(data=response.data or [])


@gateway_call("Loading post tags")
def get_post_tags(client: Client, post_id: str) -> GatewayResult:
    response = client.table(POST_TAGS_TABLE).select(_TAG_COLUMNS).eq("post_id", post_id).execute()
    return GatewayResult(data=response.data or [])


@gateway_call("Deleting post tags")
def delete_post_tags(client: Client, post_id: str) -> GatewayResult:
    client.table(POST_TAGS_TABLE).delete().eq("post_id", post_id).execute()
    return GatewayResult(data=None)


__all__ = ["create_post_tags", "get_post_tags", "delete_post_tags"]
