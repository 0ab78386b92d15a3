"""Profile edits, avatar storage and account deletion."""
from __future__ import annotations

import logging

import pytest

from malajunta.services import AuthenticationRequired, IdentityState, NotFound, RemoteCallFailed, UploadedImage, ValidationFailed
from malajunta.services import profile_service
from malajunta.services.identity_service import IdentityContext

from tests.fakes import PUBLIC_URL_ROOT, FakeBackend, FakeUser

AVATAR = UploadedImage(filename="cara.png", content_type="image/png", data=b"\x89PNG" * 8)


def test_update_display_name_refreshes_identity(backend: FakeBackend, signed_in: IdentityContext, user: FakeUser) -> None:
    profile = profile_service.update_display_name(signed_in, "  Ana María ")

    assert profile["full_name"] == "Ana María"
    assert signed_in.profile["full_name"] == "Ana María"
    assert backend.profile(user.id)["full_name"] == "Ana María"


def test_blank_display_name_is_rejected(backend: FakeBackend, signed_in: IdentityContext) -> None:
    calls = len(backend.calls)
    with pytest.raises(ValidationFailed):
        profile_service.update_display_name(signed_in, "   ")
    assert len(backend.calls) == calls


def test_profile_actions_require_sign_in(identity: IdentityContext) -> None:
    with pytest.raises(AuthenticationRequired):
        profile_service.update_display_name(identity, "Ana")


def test_upload_avatar_stores_object_under_owner_folder(
    backend: FakeBackend, signed_in: IdentityContext, user: FakeUser
) -> None:
    url = profile_service.upload_avatar(signed_in, AVATAR)

    (path,) = backend.buckets["avatars"]
    assert path.startswith(f"{user.id}/avatar-") and path.endswith(".png")
    assert url == f"{PUBLIC_URL_ROOT}/avatars/{path}"
    assert signed_in.profile["avatar_url"] == url


def test_oversized_avatar_never_reaches_storage(backend: FakeBackend, signed_in: IdentityContext) -> None:
    big = UploadedImage(filename="big.png", content_type="image/png", data=b"x" * (5 * 1024 * 1024 + 1))
    with pytest.raises(ValidationFailed) as excinfo:
        profile_service.upload_avatar(signed_in, big)

    assert excinfo.value.message_key == "avatar.image_too_large"
    assert "storage:upload" not in backend.calls


def test_avatar_profile_update_failure_logs_orphan(
    backend: FakeBackend, signed_in: IdentityContext, caplog: pytest.LogCaptureFixture
) -> None:
    backend.fail("table:profiles:update")
    caplog.set_level(logging.ERROR)

    with pytest.raises(RemoteCallFailed) as excinfo:
        profile_service.upload_avatar(signed_in, AVATAR)

    assert excinfo.value.message_key == "avatar.upload_failed"
    assert len(backend.buckets["avatars"]) == 1
    assert "left without a profile reference" in caplog.text


def test_delete_avatar_clears_reference_only(backend: FakeBackend, signed_in: IdentityContext) -> None:
    profile_service.upload_avatar(signed_in, AVATAR)

    profile = profile_service.delete_avatar(signed_in)

    assert profile["avatar_url"] is None
    assert len(backend.buckets["avatars"]) == 1


def test_create_missing_profile_uses_sign_up_metadata(backend: FakeBackend, identity: IdentityContext) -> None:
    orphan = backend.create_user("sin@malajunta.com", full_name="Sin Perfil", with_profile=False)
    identity.sign_in(orphan.email, "secreto123")

    profile = profile_service.create_missing_profile(identity)

    assert profile["id"] == orphan.id
    assert profile["full_name"] == "Sin Perfil"
    assert profile["email"] == "sin@malajunta.com"
    assert identity.state is IdentityState.AUTHENTICATED_WITH_PROFILE


def test_update_without_profile_row_is_not_found(backend: FakeBackend, identity: IdentityContext) -> None:
    orphan = backend.create_user("sin@malajunta.com", with_profile=False)
    identity.sign_in(orphan.email, "secreto123")

    with pytest.raises(NotFound) as excinfo:
        profile_service.update_display_name(identity, "Nombre")
    assert excinfo.value.message_key == "profile.missing"


def test_delete_account_requires_exact_confirmation(backend: FakeBackend, signed_in: IdentityContext) -> None:
    calls = len(backend.calls)
    for attempt in ("", "eliminar", "BORRAR"):
        with pytest.raises(ValidationFailed) as excinfo:
            profile_service.delete_account(signed_in, attempt)
        assert excinfo.value.message_key == "account.confirmation_mismatch"
    assert len(backend.calls) == calls
    assert signed_in.is_authenticated


def test_delete_account_removes_profile_avatar_and_user(
    backend: FakeBackend, signed_in: IdentityContext, user: FakeUser
) -> None:
    profile_service.upload_avatar(signed_in, AVATAR)
    backend.add_row("characters", user_id=user.id, name="Zorro", subclass="Tirador")

    profile_service.delete_account(signed_in, "ELIMINAR")

    assert backend.profile(user.id) is None
    assert backend.buckets["avatars"] == {}
    assert user.email not in backend.users
    assert backend.tables["characters"] == []
    assert signed_in.state is IdentityState.UNAUTHENTICATED
    assert signed_in.client.auth.session is None


def test_delete_account_continues_past_profile_and_avatar_failures(
    backend: FakeBackend, signed_in: IdentityContext, user: FakeUser, caplog: pytest.LogCaptureFixture
) -> None:
    profile_service.upload_avatar(signed_in, AVATAR)
    backend.fail("table:profiles:delete")
    backend.fail("storage:remove")
    caplog.set_level(logging.ERROR)

    profile_service.delete_account(signed_in, "ELIMINAR")

    assert user.email not in backend.users
    assert "could not be deleted; continuing" in caplog.text
    assert "could not be removed; continuing" in caplog.text
    assert not signed_in.is_authenticated


def test_delete_account_tolerates_failed_sign_out(
    backend: FakeBackend, signed_in: IdentityContext, user: FakeUser, caplog: pytest.LogCaptureFixture
) -> None:
    backend.fail("auth:sign_out")
    caplog.set_level(logging.WARNING)

    profile_service.delete_account(signed_in, "ELIMINAR")

    assert "auth:sign_out" in backend.calls
    assert user.email not in backend.users
    assert "could not be cleared" in caplog.text
    assert not signed_in.is_authenticated


def test_delete_account_fails_when_user_deletion_fails(
    backend: FakeBackend, signed_in: IdentityContext, user: FakeUser
) -> None:
    backend.fail("rpc:delete_user")

    with pytest.raises(RemoteCallFailed) as excinfo:
        profile_service.delete_account(signed_in, "ELIMINAR")

    assert excinfo.value.message_key == "account.delete_failed"
    assert user.email in backend.users
    assert signed_in.is_authenticated
