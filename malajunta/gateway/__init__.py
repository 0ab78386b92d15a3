"""Thin passthrough layer over the Supabase backend.

Every function takes a :class:`supabase.Client` first and returns a
:class:`GatewayResult` instead of raising.
"""
from . import auth, characters, comments, likes, posts, profiles, storage, tags
from .client import GatewayError, GatewayResult, create_supabase_client

__all__ = [
    "GatewayError",
    "GatewayResult",
    "create_supabase_client",
    "auth",
    "characters",
    "comments",
    "likes",
    "posts",
    "profiles",
    "storage",
    "tags",
]
