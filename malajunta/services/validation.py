"""Form-level validation applied before any remote call."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

from ..constants import (
    CHARACTER_SUBCLASSES,
    DEFAULT_TAG_POSITION,
    MAX_AVATAR_BYTES,
    MAX_CHARACTER_NAME_LENGTH,
    MAX_COMMENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_POST_IMAGE_BYTES,
    MIN_CHARACTER_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from .errors import ValidationFailed

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class UploadedImage:
    """Raw file received from a form post."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def validate_credentials(email: str, password: str, *, full_name: str | None = None, sign_up: bool = False) -> tuple[str, str]:
    cleaned_email = (email or "").strip()
    if not cleaned_email or not password:
        raise ValidationFailed("auth.missing_fields")
    if not _EMAIL_PATTERN.match(cleaned_email):
        raise ValidationFailed("auth.invalid_email")
    if sign_up:
        if not (full_name or "").strip():
            raise ValidationFailed("auth.missing_name")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed("auth.password_too_short")
    return cleaned_email, password


def validate_character_form(name: str, subclass: str) -> tuple[str, str]:
    cleaned_name = (name or "").strip()
    cleaned_subclass = (subclass or "").strip()
    if not cleaned_name or not cleaned_subclass:
        raise ValidationFailed("characters.missing_fields")
    if len(cleaned_name) < MIN_CHARACTER_NAME_LENGTH:
        raise ValidationFailed("characters.name_too_short")
    if len(cleaned_name) > MAX_CHARACTER_NAME_LENGTH:
        raise ValidationFailed("characters.name_too_long")
    if cleaned_subclass not in CHARACTER_SUBCLASSES:
        raise ValidationFailed("characters.invalid_subclass")
    return cleaned_name, cleaned_subclass


def validate_comment(content: str) -> str:
    """Return the trimmed comment; the length limit applies to the raw input."""

    raw = content or ""
    if not raw.strip():
        raise ValidationFailed("comments.empty")
    if len(raw) > MAX_COMMENT_LENGTH:
        raise ValidationFailed("comments.too_long")
    return raw.strip()


def validate_description(description: str | None) -> str:
    raw = description or ""
    if len(raw) > MAX_DESCRIPTION_LENGTH:
        raise ValidationFailed("posts.description_too_long")
    return raw.strip()


def validate_display_name(full_name: str) -> str:
    cleaned = (full_name or "").strip()
    if not cleaned:
        raise ValidationFailed("profile.name_required")
    return cleaned


def _validate_image(upload: UploadedImage | None, max_bytes: int, prefix: str) -> UploadedImage:
    if upload is None or not upload.filename or not upload.data:
        raise ValidationFailed(f"{prefix}.image_required")
    if not (upload.content_type or "").startswith("image/"):
        raise ValidationFailed(f"{prefix}.not_an_image")
    if upload.size > max_bytes:
        raise ValidationFailed(f"{prefix}.image_too_large")
    return upload


def validate_avatar_file(upload: UploadedImage | None) -> UploadedImage:
    return _validate_image(upload, MAX_AVATAR_BYTES, "avatar")


def validate_post_image(upload: UploadedImage | None) -> UploadedImage:
    return _validate_image(upload, MAX_POST_IMAGE_BYTES, "posts")


def _clamp(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TAG_POSITION
    return min(1.0, max(0.0, number))


def normalize_tags(tags: Iterable[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """Clean a list of tag drafts.

    Blank free-text names are dropped. A character tagged twice, or two free-text
    tags sharing a name (case-insensitive), is rejected.
    """

    cleaned: list[dict[str, Any]] = []
    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    for tag in tags or []:
        name = str(tag.get("character_name") or "").strip()
        character_id = tag.get("character_id") or None
        if not name:
            continue
        if character_id is not None:
            if str(character_id) in seen_ids:
                raise ValidationFailed("tags.duplicate_character")
            seen_ids.add(str(character_id))
        else:
            if name.lower() in seen_names:
                raise ValidationFailed("tags.duplicate_name")
            seen_names.add(name.lower())
        cleaned.append(
            {
                "character_id": str(character_id) if character_id is not None else None,
                "character_name": name,
                "position_x": _clamp(tag.get("position_x", DEFAULT_TAG_POSITION)),
                "position_y": _clamp(tag.get("position_y", DEFAULT_TAG_POSITION)),
            }
        )
    return cleaned


__all__ = [
    "UploadedImage",
    "validate_credentials",
    "validate_character_form",
    "validate_comment",
    "validate_description",
    "validate_display_name",
    "validate_avatar_file",
    "validate_post_image",
    "normalize_tags",
]
