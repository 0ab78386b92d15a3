"""Character roster operations."""
from __future__ import annotations

import logging
from typing import Any

from ..constants import MAX_CHARACTERS_PER_PROFILE, MIN_CHARACTER_SEARCH_LENGTH
from ..gateway import characters as characters_gateway
from .errors import ValidationFailed, unwrap
from .identity_service import IdentityContext
from .validation import validate_character_form

logger = logging.getLogger(__name__)


def list_characters(identity: IdentityContext, user_id: str | None = None) -> list[dict[str, Any]]:
    owner = user_id or identity.require_user().id
    return unwrap(characters_gateway.list_user_characters(identity.client, owner), "characters.load_failed")


def create_character(identity: IdentityContext, name: str, subclass: str) -> dict[str, Any]:
    user = identity.require_user()
    name, subclass = validate_character_form(name, subclass)
    count = unwrap(characters_gateway.count_user_characters(identity.client, user.id), "characters.create_failed")
    if count >= MAX_CHARACTERS_PER_PROFILE:
        raise ValidationFailed("characters.limit_reached")
    character = unwrap(
        characters_gateway.create_character(identity.client, user_id=user.id, name=name, subclass=subclass),
        "characters.create_failed",
    )
    logger.info("Character %s created for %s", name, user.id)
    return character


def update_character(identity: IdentityContext, character_id: str, name: str, subclass: str) -> dict[str, Any]:
    identity.require_user()
    name, subclass = validate_character_form(name, subclass)
    return unwrap(
        characters_gateway.update_character(identity.client, character_id, {"name": name, "subclass": subclass}),
        "characters.update_failed",
        not_found_key="characters.not_found",
    )


def delete_character(identity: IdentityContext, character_id: str) -> None:
    identity.require_user()
    unwrap(
        characters_gateway.delete_character(identity.client, character_id),
        "characters.delete_failed",
        not_found_key="characters.not_found",
    )


def search_characters(identity: IdentityContext, term: str) -> list[dict[str, Any]]:
    """Search every character by name; short terms return nothing."""

    cleaned = (term or "").strip()
    if len(cleaned) < MIN_CHARACTER_SEARCH_LENGTH:
        return []
    return unwrap(characters_gateway.search_characters(identity.client, cleaned), "characters.search_failed")


__all__ = [
    "list_characters",
    "create_character",
    "update_character",
    "delete_character",
    "search_characters",
]
