"""Utilities for rendering UI templates with shared context."""
from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlencode

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import get_settings
from ..constants import CHARACTER_SUBCLASSES, MAX_COMMENT_LENGTH, MAX_DESCRIPTION_LENGTH
from ..services.i18n_service import remember_locale, resolve_request_locale, translate
from . import presentation
from .components import TEMPLATE_COMPONENTS

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def redirect(url: str, *, error: str | None = None, notice: str | None = None) -> RedirectResponse:
    """303 redirect carrying an optional flash message key."""

    params = {key: value for key, value in (("error", error), ("notice", notice)) if value}
    target = f"{url}{'&' if '?' in url else '?'}{urlencode(params)}" if params else url
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)


def render_template(request: Request, template_name: str, context: dict[str, Any] | None = None):
    """Return a TemplateResponse with shared UI, identity and i18n context."""

    locale = resolve_request_locale(request)
    identity = getattr(request.state, "identity", None)

    def _t(key: str, default: str | None = None) -> str:
        return translate(locale, key, default)

    error_key = request.query_params.get("error")
    notice_key = request.query_params.get("notice")

    base_context: dict[str, Any] = {
        "request": request,
        "app_name": get_settings().app_name,
        "components": TEMPLATE_COMPONENTS,
        "fmt": presentation,
        "active_nav": None,
        "page_title": "",
        "identity": identity,
        "locale": locale,
        "t": _t,
        "flash_error": _t(error_key) if error_key else None,
        "flash_notice": _t(notice_key) if notice_key else None,
        "subclasses": CHARACTER_SUBCLASSES,
        "max_comment_length": MAX_COMMENT_LENGTH,
        "max_description_length": MAX_DESCRIPTION_LENGTH,
    }
    if context:
        base_context.update(context)

    return remember_locale(templates.TemplateResponse(request, template_name, base_context), locale)


__all__ = ["templates", "render_template", "redirect"]
