"""Export page routers for composition."""
from __future__ import annotations

from . import auth, home, media, profile

__all__ = ["auth", "home", "media", "profile"]
