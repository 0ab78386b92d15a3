"""Middleware exports."""
from __future__ import annotations

from .identity import IdentitySessionMiddleware

__all__ = ["IdentitySessionMiddleware"]
