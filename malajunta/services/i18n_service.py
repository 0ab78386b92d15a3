"""Spanish/English message bundles for pages and API error details.

Bundles are flat JSON maps under ``ui/i18n``. Spanish is the primary
language of the app; English lookups fall back to it key by key.
"""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Iterable, TypeVar

from fastapi import HTTPException, Request, status
from starlette.responses import Response

from .errors import ServiceError

SUPPORTED_LOCALES: tuple[str, ...] = ("es", "en")
DEFAULT_LOCALE = "es"
LOCALE_COOKIE = "ui_locale"
LOCALE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365
BUNDLE_DIR = Path(__file__).resolve().parent.parent / "ui" / "i18n"

ResponseT = TypeVar("ResponseT", bound=Response)


@lru_cache(maxsize=len(SUPPORTED_LOCALES))
def get_messages(locale: str) -> dict[str, str]:
    code = normalize_locale(locale)
    bundle = BUNDLE_DIR / f"{code}.json"
    try:
        return json.loads(bundle.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Message bundle {bundle.name} is unreadable",
        ) from exc


def bundle_slice(locale: str, prefix: str | None = None) -> dict[str, str]:
    """Messages for ``locale``, optionally only the ``prefix.*`` group."""

    messages = get_messages(locale)
    if not prefix:
        return dict(messages)
    head = prefix.rstrip(".") + "."
    return {key: value for key, value in messages.items() if key.startswith(head)}


def normalize_locale(locale: str | None) -> str:
    """Map ``es-AR``/``en_US`` style tags onto a bundled locale."""

    if not locale:
        return DEFAULT_LOCALE
    language = locale.strip().replace("_", "-").split("-", 1)[0].lower()
    if language not in SUPPORTED_LOCALES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unsupported locale: {locale}")
    return language


def _supported(tag: str | None) -> str | None:
    if not tag:
        return None
    try:
        return normalize_locale(tag)
    except HTTPException:
        return None


def parse_accept_language(header: str | None) -> list[str]:
    """Language tags from an ``Accept-Language`` header, best ``q`` first."""

    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate((header or "").split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag or tag == "*":
            continue
        quality = 1.0
        if params.strip().startswith("q="):
            try:
                quality = float(params.strip()[2:])
            except ValueError:
                quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, tag.strip()))
    return [tag for _, _, tag in sorted(weighted)]


def select_locale(candidate: str | None, accept_languages: Iterable[str] | None = None) -> str:
    for tag in (candidate, *(accept_languages or ())):
        code = _supported(tag)
        if code:
            return code
    return DEFAULT_LOCALE


def translate(locale: str, key: str, default: str | None = None) -> str:
    for code in dict.fromkeys((locale, DEFAULT_LOCALE)):
        text = get_messages(code).get(key)
        if text is not None:
            return text
    return key if default is None else default


def describe_error(locale: str, error: ServiceError) -> str:
    return translate(locale, error.message_key, translate(locale, error.default_key))


def resolve_request_locale(request: Request) -> str:
    """``?lang=`` wins, then the locale cookie, then ``Accept-Language``."""

    explicit = request.query_params.get("lang") or request.cookies.get(LOCALE_COOKIE)
    return select_locale(explicit, parse_accept_language(request.headers.get("accept-language")))


def remember_locale(response: ResponseT, locale: str) -> ResponseT:
    response.set_cookie(
        LOCALE_COOKIE,
        locale,
        max_age=LOCALE_COOKIE_MAX_AGE,
        httponly=False,
        samesite="lax",
        path="/",
    )
    response.headers["Content-Language"] = locale
    return response


__all__ = [
    "DEFAULT_LOCALE",
    "LOCALE_COOKIE",
    "SUPPORTED_LOCALES",
    "bundle_slice",
    "describe_error",
    "get_messages",
    "normalize_locale",
    "parse_accept_language",
    "remember_locale",
    "resolve_request_locale",
    "select_locale",
    "translate",
]
