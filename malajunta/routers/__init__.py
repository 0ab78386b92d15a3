"""Aggregate router exports."""
from .auth import router as auth_router
from .characters import router as characters_router
from .comments import router as comments_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .system import router as system_router

__all__ = [
    "auth_router",
    "characters_router",
    "comments_router",
    "posts_router",
    "profiles_router",
    "system_router",
]
