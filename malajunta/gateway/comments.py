"""Gateway calls for comments and their stats view."""
from __future__ import annotations

from supabase import Client

from ..constants import COMMENTS_TABLE, COMMENTS_VIEW
from .client import GatewayResult, first_row, gateway_call, not_found_error


@gateway_call("Listing comments")
def list_post_comments(client: Client, post_id: str) -> GatewayResult:
    response = (
        client.table(COMMENTS_VIEW)
        .select("*")
        .eq("post_id", post_id)
        .order("created_at", desc=False)
        .execute()
    )
    return GatewayResult(data=response.data or [])


@gateway_call("Creating comment")
def create_comment(client: Client, *, user_id: str, post_id: str, content: str) -> GatewayResult:
    response = (
        client.table(COMMENTS_TABLE)
        .insert({"user_id": user_id, "post_id": post_id, "content": content})
        .execute()
    )
    return GatewayResult(data=first_row(response.data))


@gateway_call("Deleting comment")
def delete_comment(client: Client, comment_id: str) -> GatewayResult:
    response = client.table(COMMENTS_TABLE).delete().eq("id", comment_id).execute()
    if not response.data:
        return GatewayResult(error=not_found_error("Comment not found or not owned by caller"))
    return GatewayResult(data=None)


__all__ = ["list_post_comments", "create_comment", "delete_comment"]
