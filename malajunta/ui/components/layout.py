"""Layout building blocks shared across pages."""
from __future__ import annotations

from typing import Any, Callable
from urllib.parse import quote

from markupsafe import Markup, escape

NAV_LINKS = (
    ("nav.home", "/"),
    ("nav.media", "/media"),
    ("nav.profile", "/profile"),
)


def navbar(
    *,
    t: Callable[..., str],
    app_name: str,
    active: str | None = None,
    identity: Any = None,
    locale: str = "es",
    path: str = "/",
) -> Markup:
    links_html: list[str] = []
    for key, href in NAV_LINKS:
        text_class = "text-white" if active == href else "text-slate-300"
        links_html.append(
            f"<a href=\"{href}\" class=\"rounded-full px-4 py-2 text-sm font-medium transition hover:text-white {text_class}\">{escape(t(key))}</a>"
        )

    if identity is not None and identity.is_authenticated:
        auth_control = (
            "<form method=\"post\" action=\"/logout\" class=\"inline\">"
            "<button type=\"submit\" class=\"rounded-full border border-amber-500/40 px-4 py-2 text-sm font-semibold text-amber-300 transition hover:bg-amber-600/20\">"
            f"{escape(t('nav.logout'))}</button></form>"
        )
    else:
        auth_control = (
            "<a href=\"/login\" class=\"rounded-full border border-amber-500/40 px-4 py-2 text-sm font-semibold text-amber-300 transition hover:bg-amber-600/20\">"
            f"{escape(t('nav.login'))}</a>"
        )

    other_locale = "en" if locale == "es" else "es"
    language_switch = (
        f"<a href=\"/i18n/switch/{other_locale}?next={escape(quote(path))}\" data-role=\"language-switch\" "
        "class=\"rounded-full px-3 py-2 text-xs font-semibold uppercase text-slate-400 transition hover:text-white\">"
        f"{escape(t('nav.switch_language'))}</a>"
    )

    return Markup(
        f"""
        <header class=\"sticky top-0 z-40 border-b border-slate-800/60 bg-slate-950/90 backdrop-blur\">
            <div class=\"mx-auto flex max-w-5xl flex-wrap items-center gap-3 px-4 py-4 sm:px-6\">
                <a href=\"/\" class=\"flex-1 text-lg font-semibold text-white\">{escape(app_name)}</a>
                <nav class=\"flex items-center gap-1\">{''.join(links_html)}</nav>
                {language_switch}
                {auth_control}
            </div>
        </header>
        """
    )


__all__ = ["navbar", "NAV_LINKS"]
