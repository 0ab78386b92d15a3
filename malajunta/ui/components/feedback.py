"""Status markup: the pending-profile panel, flash banners, empty lists."""
from __future__ import annotations

from markupsafe import Markup, escape

FLASH_TONES = {
    "error": "border-rose-500/40 bg-rose-500/10 text-rose-200",
    "notice": "border-emerald-500/40 bg-emerald-500/10 text-emerald-200",
}


def pending_panel(label: str, *, refresh_url: str, refresh_seconds: int = 2) -> Markup:
    """Spinner shown while a profile row is still being fetched.

    The page re-requests ``refresh_url`` on its own until the identity settles.
    """

    return Markup(
        f"""
        <section data-role=\"pending\" class=\"flex items-center gap-3 rounded-3xl bg-slate-900/70 p-6 text-sm text-slate-200\">
            <meta http-equiv=\"refresh\" content=\"{int(refresh_seconds)};url={escape(refresh_url)}\">
            <span class=\"inline-block h-4 w-4 animate-spin rounded-full border-2 border-amber-500 border-t-transparent\"></span>
            <span>{escape(label)}…</span>
        </section>
        """
    )


def flash(message: str | None, *, tone: str = "error") -> Markup:
    if not message:
        return Markup("")
    palette = FLASH_TONES.get(tone, FLASH_TONES["error"])
    return Markup(
        f"<div role=\"{'alert' if tone == 'error' else 'status'}\" class=\"rounded-2xl border px-4 py-3 text-sm {palette}\">{escape(message)}</div>"
    )


def empty_state(message: str) -> Markup:
    return Markup(f"<p class=\"rounded-2xl bg-slate-900/60 p-6 text-center text-sm text-slate-400\">{escape(message)}</p>")


__all__ = ["FLASH_TONES", "pending_panel", "flash", "empty_state"]
