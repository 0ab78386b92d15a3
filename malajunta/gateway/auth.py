"""Authentication calls: sessions, sign-up/in/out and change notifications."""
from __future__ import annotations

import logging
from typing import Any, Callable

from supabase import Client

from ..constants import DELETE_USER_RPC
from .client import GatewayResult, gateway_call

logger = logging.getLogger(__name__)

AuthCallback = Callable[[str, Any], None]


@gateway_call("Fetching current session")
def get_session(client: Client) -> GatewayResult:
    return GatewayResult(data=client.auth.get_session())


@gateway_call("Signing up")
def sign_up(client: Client, email: str, password: str, full_name: str) -> GatewayResult:
    response = client.auth.sign_up(
        {
            "email": email,
            "password": password,
            "options": {"data": {"full_name": full_name, "avatar_url": ""}},
        }
    )
    logger.info("Sign-up requested for %s", email)
    return GatewayResult(data=response)


@gateway_call("Signing in")
def sign_in(client: Client, email: str, password: str) -> GatewayResult:
    response = client.auth.sign_in_with_password({"email": email, "password": password})
    logger.info("Signed in %s", email)
    return GatewayResult(data=response)


@gateway_call("Signing out")
def sign_out(client: Client) -> GatewayResult:
    client.auth.sign_out()
    return GatewayResult(data=None)


def subscribe(client: Client, callback: AuthCallback) -> Any:
    """Register ``callback(event, session)`` for auth state changes.

    Returns the subscription handle; call ``unsubscribe()`` on it to stop.
    """

    return client.auth.on_auth_state_change(callback)


@gateway_call("Deleting auth user")
def delete_user(client: Client) -> GatewayResult:
    client.rpc(DELETE_USER_RPC, {}).execute()
    logger.warning("Auth user deleted")
    return GatewayResult(data=None)


__all__ = ["AuthCallback", "get_session", "sign_up", "sign_in", "sign_out", "subscribe", "delete_user"]
