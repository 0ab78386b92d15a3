"""Gateway calls for the ``characters`` table."""
from __future__ import annotations

import logging
from typing import Any

from supabase import Client

from ..constants import CHARACTER_SEARCH_LIMIT, CHARACTERS_TABLE
from .client import GatewayResult, first_row, gateway_call, not_found_error, utc_now_iso

logger = logging.getLogger(__name__)


@gateway_call("Listing characters")
def list_user_characters(client: Client, user_id: str) -> GatewayResult:
    response = (
        client.table(CHARACTERS_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=False)
        .execute()
    )
    rows = response.data or []
    logger.info("Loaded %d characters for %s", len(rows), user_id)
    return GatewayResult(data=rows)


@gateway_call("Counting characters")
def count_user_characters(client: Client, user_id: str) -> GatewayResult:
    response = client.table(CHARACTERS_TABLE).select("id").eq("user_id", user_id).execute()
    return GatewayResult(data=len(response.data or []))


@gateway_call("Creating character")
def create_character(client: Client, *, user_id: str, name: str, subclass: str) -> GatewayResult:
    response = (
        client.table(CHARACTERS_TABLE)
        .insert({"user_id": user_id, "name": name, "subclass": subclass})
        .execute()
    )
    return GatewayResult(data=first_row(response.data))


@gateway_call("Updating character")
def update_character(client: Client, character_id: str, updates: dict[str, Any]) -> GatewayResult:
    payload = {**updates, "updated_at": utc_now_iso()}
    response = client.table(CHARACTERS_TABLE).update(payload).eq("id", character_id).execute()
    row = first_row(response.data)
    if row is None:
        return GatewayResult(error=not_found_error("Character not found"))
    return GatewayResult(data=row)


@gateway_call("Deleting character")
def delete_character(client: Client, character_id: str) -> GatewayResult:
    response = client.table(CHARACTERS_TABLE).delete().eq("id", character_id).execute()
    if not response.data:
        return GatewayResult(error=not_found_error("Character not found or not owned by caller"))
    return GatewayResult(data=None)


@gateway_call("Searching characters")
def search_characters(client: Client, term: str) -> GatewayResult:
    cleaned = (term or "").strip()
    if not cleaned:
        return GatewayResult(data=[])
    response = (
        client.table(CHARACTERS_TABLE)
        .select("id, name, subclass, user_id")
        .ilike("name", f"%{cleaned}%")
        .limit(CHARACTER_SEARCH_LIMIT)
        .execute()
    )
    return GatewayResult(data=response.data or [])


__all__ = [
    "list_user_characters",
    "count_user_characters",
    "create_character",
    "update_character",
    "delete_character",
    "search_characters",
]
