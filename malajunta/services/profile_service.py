"""Profile maintenance for the signed-in identity."""
from __future__ import annotations

import logging
from typing import Any

from ..constants import ACCOUNT_DELETION_CONFIRMATION, AVATARS_BUCKET
from ..gateway import auth as auth_gateway
from ..gateway import profiles as profiles_gateway
from ..gateway import storage as storage_gateway
from ..gateway.client import utc_now_iso
from .errors import NotFound, RemoteCallFailed, ValidationFailed, unwrap
from .identity_service import IdentityContext
from .validation import UploadedImage, validate_avatar_file, validate_display_name

logger = logging.getLogger(__name__)


def _update(identity: IdentityContext, updates: dict[str, Any], message_key: str) -> dict[str, Any]:
    user = identity.require_user()
    result = profiles_gateway.update_profile(identity.client, user.id, updates)
    if result.error is not None and result.error.not_found:
        raise NotFound("profile.missing")
    profile = unwrap(result, message_key)
    identity.set_profile(profile)
    return profile


def update_display_name(identity: IdentityContext, full_name: str) -> dict[str, Any]:
    return _update(identity, {"full_name": validate_display_name(full_name)}, "profile.update_failed")


def upload_avatar(identity: IdentityContext, upload: UploadedImage | None) -> str:
    """Store a new avatar image and point the profile at its public URL."""

    user = identity.require_user()
    image = validate_avatar_file(upload)
    path = storage_gateway.build_object_path(user.id, image.filename, "avatar-")
    unwrap(
        storage_gateway.upload_object(identity.client, AVATARS_BUCKET, path, image.data, image.content_type),
        "avatar.upload_failed",
    )
    url = unwrap(storage_gateway.public_url(identity.client, AVATARS_BUCKET, path), "avatar.upload_failed")
    try:
        _update(identity, {"avatar_url": url}, "avatar.upload_failed")
    except (RemoteCallFailed, NotFound):
        logger.error("Avatar object %s left without a profile reference", path)
        raise
    logger.info("Avatar updated for %s", user.id)
    return url


def delete_avatar(identity: IdentityContext) -> dict[str, Any] | None:
    """Clear ``avatar_url``; the stored object is kept."""

    identity.require_user()
    if not identity.profile or not identity.profile.get("avatar_url"):
        return identity.profile
    return _update(identity, {"avatar_url": None}, "avatar.delete_failed")


def create_missing_profile(identity: IdentityContext) -> dict[str, Any]:
    user = identity.require_user()
    if identity.profile is not None:
        return identity.profile
    now = utc_now_iso()
    row = {
        "id": user.id,
        "email": identity.email,
        "full_name": identity.user_metadata.get("full_name") or "",
        "avatar_url": None,
        "created_at": now,
        "updated_at": now,
    }
    profile = unwrap(profiles_gateway.create_profile(identity.client, row), "profile.create_failed")
    identity.set_profile(profile or row)
    return identity.profile


def delete_account(identity: IdentityContext, confirmation: str) -> None:
    """Remove the profile row, its avatar object and finally the auth user.

    Profile and avatar removal failures are logged and skipped; only the auth
    user deletion decides the outcome.
    """

    if (confirmation or "").strip() != ACCOUNT_DELETION_CONFIRMATION:
        raise ValidationFailed("account.confirmation_mismatch")
    user = identity.require_user()
    logger.warning("Starting account deletion for %s", user.id)

    result = profiles_gateway.delete_profile(identity.client, user.id)
    if result.error is not None:
        logger.error("Profile row for %s could not be deleted; continuing", user.id)

    avatar_url = (identity.profile or {}).get("avatar_url")
    if avatar_url:
        path = storage_gateway.object_path_from_url(user.id, avatar_url)
        removed = storage_gateway.remove_objects(identity.client, AVATARS_BUCKET, [path])
        if removed.error is not None:
            logger.error("Avatar %s could not be removed; continuing", path)

    unwrap(auth_gateway.delete_user(identity.client), "account.delete_failed")
    # The client still holds the deleted user's tokens until it signs out.
    if auth_gateway.sign_out(identity.client).error is not None:
        logger.warning("Stored session for %s could not be cleared; dropping it locally", user.id)
    identity.clear()
    logger.warning("Account %s deleted", user.id)


__all__ = [
    "update_display_name",
    "upload_avatar",
    "delete_avatar",
    "create_missing_profile",
    "delete_account",
]
