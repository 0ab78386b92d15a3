"""Like toggles and viewer like lookups.

Toggling runs as a single server-side function per target type. The function
uses the caller's authenticated identity, flips the ``(user, target)`` join row
inside one transaction and returns ``{"liked": bool, "like_count": int}``.
"""
from __future__ import annotations

import logging
from typing import Any

from supabase import Client

from ..constants import (
    COMMENT_LIKES_TABLE,
    POST_LIKES_TABLE,
    TOGGLE_COMMENT_LIKE_RPC,
    TOGGLE_POST_LIKE_RPC,
)
from .client import GatewayError, GatewayResult, first_row, gateway_call

logger = logging.getLogger(__name__)


def _toggle_payload(data: Any) -> dict[str, Any] | None:
    row = first_row(data)
    if not isinstance(row, dict) or "liked" not in row:
        return None
    return {"liked": bool(row["liked"]), "like_count": int(row.get("like_count") or 0)}


def _toggle(client: Client, rpc_name: str, params: dict[str, str]) -> GatewayResult:
    response = client.rpc(rpc_name, params).execute()
    payload = _toggle_payload(response.data)
    if payload is None:
        logger.error("%s returned an unexpected payload: %r", rpc_name, response.data)
        return GatewayResult(error=GatewayError(code=None, message=f"Unexpected {rpc_name} response"))
    return GatewayResult(data=payload)


@gateway_call("Toggling post like")
def toggle_post_like(client: Client, post_id: str) -> GatewayResult:
    return _toggle(client, TOGGLE_POST_LIKE_RPC, {"p_post_id": post_id})


@gateway_call("Toggling comment like")
def toggle_comment_like(client: Client, comment_id: str) -> GatewayResult:
    return _toggle(client, TOGGLE_COMMENT_LIKE_RPC, {"p_comment_id": comment_id})


def _like_exists(client: Client, table: str, column: str, user_id: str, target_id: str) -> GatewayResult:
    response = (
        client.table(table)
        .select("user_id")
        .eq("user_id", user_id)
        .eq(column, target_id)
        .limit(1)
        .execute()
    )
    return GatewayResult(data=bool(response.data))


@gateway_call("Checking post like")
def get_user_post_like(client: Client, user_id: str, post_id: str) -> GatewayResult:
    return _like_exists(client, POST_LIKES_TABLE, "post_id", user_id, post_id)


@gateway_call("Checking comment like")
def get_user_comment_like(client: Client, user_id: str, comment_id: str) -> GatewayResult:
    return _like_exists(client, COMMENT_LIKES_TABLE, "comment_id", user_id, comment_id)


__all__ = ["toggle_post_like", "toggle_comment_like", "get_user_post_like", "get_user_comment_like"]
