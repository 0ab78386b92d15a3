"""Formatting helpers shared by templates and view models."""
from __future__ import annotations

from datetime import datetime, timezone


def initials(name: str | None, email: str | None = None) -> str:
    words = (name or "").split()
    if len(words) >= 2:
        return f"{words[0][0]}{words[1][0]}".upper()
    if words:
        return words[0][0].upper()
    if email:
        return email[0].upper()
    return "U"


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _elapsed_seconds(value: datetime | str | None, now: datetime | None) -> tuple[datetime, float] | None:
    moment = parse_timestamp(value)
    if moment is None:
        return None
    current = now or datetime.now(timezone.utc)
    return moment, (current - moment).total_seconds()


def relative_post_date(value: datetime | str | None, *, now: datetime | None = None) -> str:
    """Spanish relative age for posts; older than a week shows the date."""

    elapsed = _elapsed_seconds(value, now)
    if elapsed is None:
        return ""
    moment, seconds = elapsed
    hours = int(seconds // 3600)
    if hours < 1:
        return "Hace unos minutos"
    if hours < 24:
        return f"Hace {hours} hora{'s' if hours > 1 else ''}"
    days = hours // 24
    if days < 7:
        return f"Hace {days} día{'s' if days > 1 else ''}"
    return moment.strftime("%d/%m/%Y")


def compact_comment_date(value: datetime | str | None, *, now: datetime | None = None) -> str:
    elapsed = _elapsed_seconds(value, now)
    if elapsed is None:
        return ""
    minutes = int(elapsed[1] // 60)
    if minutes < 1:
        return "Ahora"
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    return f"{hours // 24}d"


def full_date(value: datetime | str | None) -> str:
    moment = parse_timestamp(value)
    return moment.strftime("%d/%m/%Y") if moment else ""


__all__ = ["initials", "parse_timestamp", "relative_post_date", "compact_comment_date", "full_date"]
