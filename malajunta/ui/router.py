"""Server-rendered pages plus the translation endpoints, as one router."""
from __future__ import annotations

from fastapi import APIRouter

from . import i18n
from .pages import auth, home, media, profile

PAGE_MODULES = (home, auth, media, profile)

router = APIRouter(include_in_schema=False)
router.include_router(i18n.router)
for page in PAGE_MODULES:
    router.include_router(page.router)

__all__ = ["router", "PAGE_MODULES"]
