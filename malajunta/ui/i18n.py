"""Message bundles for client-side scripts and the language switcher."""
from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from ..services.i18n_service import (
    DEFAULT_LOCALE,
    bundle_slice,
    normalize_locale,
    remember_locale,
    resolve_request_locale,
)

router = APIRouter(prefix="/i18n", include_in_schema=False)


def _local_path(target: str | None) -> str:
    if not target or not target.startswith("/") or target.startswith("//"):
        return "/"
    return target


@router.get("/messages")
async def fetch_messages(request: Request, prefix: str | None = None) -> JSONResponse:
    locale = resolve_request_locale(request)
    payload = {
        "locale": locale,
        "messages": bundle_slice(locale, prefix),
        "fallback": bundle_slice(DEFAULT_LOCALE, prefix),
    }
    return remember_locale(JSONResponse(payload), locale)


@router.get("/switch/{code}")
async def switch_locale(code: str, next: str | None = None) -> RedirectResponse:
    locale = normalize_locale(code)
    response = RedirectResponse(_local_path(next), status_code=status.HTTP_303_SEE_OTHER)
    return remember_locale(response, locale)


__all__ = ["router"]
