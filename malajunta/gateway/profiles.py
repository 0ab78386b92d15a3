"""Gateway calls for the ``profiles`` table."""
from __future__ import annotations

import logging
from typing import Any

from supabase import Client

from ..constants import PROFILES_TABLE
from .client import GatewayResult, first_row, gateway_call, not_found_error, utc_now_iso

logger = logging.getLogger(__name__)


@gateway_call("Loading profile")
def get_profile(client: Client, user_id: str) -> GatewayResult:
    response = client.table(PROFILES_TABLE).select("*").eq("id", user_id).single().execute()
    return GatewayResult(data=response.data)


@gateway_call("Creating profile")
def create_profile(client: Client, profile: dict[str, Any]) -> GatewayResult:
    response = client.table(PROFILES_TABLE).insert(profile).execute()
    logger.info("Profile created for %s", profile.get("email"))
    return GatewayResult(data=first_row(response.data))


@gateway_call("Updating profile")
def update_profile(client: Client, user_id: str, updates: dict[str, Any]) -> GatewayResult:
    payload = {**updates, "updated_at": utc_now_iso()}
    response = client.table(PROFILES_TABLE).update(payload).eq("id", user_id).execute()
    row = first_row(response.data)
    if row is None:
        return GatewayResult(error=not_found_error("Profile not found"))
    return GatewayResult(data=row)


@gateway_call("Deleting profile")
def delete_profile(client: Client, user_id: str) -> GatewayResult:
    client.table(PROFILES_TABLE).delete().eq("id", user_id).execute()
    return GatewayResult(data=None)


__all__ = ["get_profile", "create_profile", "update_profile", "delete_profile"]
