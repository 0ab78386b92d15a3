"""Reusable button components for the UI."""
from __future__ import annotations

from typing import Mapping

from markupsafe import Markup, escape

_PRIMARY = "inline-flex items-center justify-center gap-2 rounded-full bg-amber-600 px-5 py-2 text-sm font-semibold text-white shadow-lg shadow-amber-500/30 transition hover:bg-amber-500"
_GHOST = "inline-flex items-center gap-2 rounded-full border border-slate-600/40 px-4 py-2 text-sm font-medium text-slate-100 transition hover:border-amber-500 hover:text-amber-300"
_DANGER = "inline-flex items-center gap-2 rounded-full border border-rose-500/50 px-4 py-2 text-sm font-semibold text-rose-200 transition hover:bg-rose-600/20"


def primary(label: str, *, href: str | None = None, submit: bool = False, icon: str | None = None) -> Markup:
    """Return a stylised primary button or link."""

    content = f"<span>{escape(label)}</span>"
    if icon:
        content = f"<span class=\"text-base\">{icon}</span>{content}"
    if href:
        return Markup(f"<a class=\"{_PRIMARY}\" href=\"{escape(href)}\">{content}</a>")
    kind = "submit" if submit else "button"
    return Markup(f"<button class=\"{_PRIMARY}\" type=\"{kind}\">{content}</button>")


def ghost(label: str, *, href: str | None = None, submit: bool = False) -> Markup:
    if href:
        return Markup(f"<a class=\"{_GHOST}\" href=\"{escape(href)}\">{escape(label)}</a>")
    kind = "submit" if submit else "button"
    return Markup(f"<button class=\"{_GHOST}\" type=\"{kind}\">{escape(label)}</button>")


def action(
    label: str,
    *,
    url: str,
    fields: Mapping[str, str] | None = None,
    danger: bool = False,
    icon: str | None = None,
) -> Markup:
    """A one-button POST form for likes, deletes and similar actions."""

    hidden = "".join(
        f"<input type=\"hidden\" name=\"{escape(name)}\" value=\"{escape(value)}\">" for name, value in (fields or {}).items()
    )
    content = f"<span>{escape(label)}</span>"
    if icon:
        content = f"<span class=\"text-base\">{icon}</span>{content}"
    css = _DANGER if danger else _GHOST
    return Markup(
        f"<form method=\"post\" action=\"{escape(url)}\" class=\"inline\">{hidden}"
        f"<button class=\"{css}\" type=\"submit\">{content}</button></form>"
    )


__all__ = ["primary", "ghost", "action"]
