"""Identity lifecycle: session resolution, profile loading and sign-out."""
from __future__ import annotations

import pytest

from malajunta.services import AuthenticationRequired, IdentityRegistry, IdentityState, RemoteCallFailed, ValidationFailed
from malajunta.services.identity_service import IdentityContext

from tests.fakes import FakeBackend, FakeSession, FakeUser


def test_new_context_without_session_is_unauthenticated(identity: IdentityContext) -> None:
    assert identity.state is IdentityState.UNAUTHENTICATED
    assert identity.loading is False
    assert identity.wait_settled(0)
    with pytest.raises(AuthenticationRequired):
        identity.require_user()


def test_existing_session_is_resolved_on_start(backend: FakeBackend, user: FakeUser) -> None:
    client = backend.client()
    client.auth.session = FakeSession(user=user)

    context = IdentityContext(client)
    assert context.state is IdentityState.LOADING_PROFILE
    assert context.wait_settled(0) is False

    context.start()

    assert context.state is IdentityState.AUTHENTICATED_WITH_PROFILE
    assert context.profile["full_name"] == "Ana Torres"
    context.close()
    assert client.auth.subscriptions == []


def test_sign_in_loads_profile_once(backend: FakeBackend, identity: IdentityContext, user: FakeUser) -> None:
    identity.sign_in(user.email, "secreto123")

    assert identity.user_id == user.id
    assert identity.state is IdentityState.AUTHENTICATED_WITH_PROFILE
    assert backend.calls.count("table:profiles:select") == 1


def test_account_without_profile_row(backend: FakeBackend, identity: IdentityContext) -> None:
    orphan = backend.create_user("sin@malajunta.com", with_profile=False)
    identity.sign_in(orphan.email, "secreto123")

    assert identity.is_authenticated
    assert identity.profile is None
    assert identity.state is IdentityState.AUTHENTICATED_WITHOUT_PROFILE


def test_bad_credentials_raise_remote_error(identity: IdentityContext, user: FakeUser) -> None:
    with pytest.raises(RemoteCallFailed) as excinfo:
        identity.sign_in(user.email, "wrong-password")

    assert excinfo.value.message_key == "auth.sign_in_failed"
    assert excinfo.value.gateway_error.code == "invalid_credentials"
    assert identity.state is IdentityState.UNAUTHENTICATED


def test_invalid_form_is_rejected_before_backend(backend: FakeBackend, identity: IdentityContext) -> None:
    calls = len(backend.calls)
    with pytest.raises(ValidationFailed):
        identity.sign_in("", "")
    assert len(backend.calls) == calls


def test_sign_up_waiting_for_confirmation_keeps_session_closed(backend: FakeBackend, identity: IdentityContext) -> None:
    backend.require_email_confirmation = True

    user = identity.sign_up("nuevo@malajunta.com", "secreto123", "Nuevo")

    assert user.email == "nuevo@malajunta.com"
    assert user.user_metadata == {"full_name": "Nuevo", "avatar_url": ""}
    assert identity.state is IdentityState.UNAUTHENTICATED


def test_sign_up_with_immediate_session(identity: IdentityContext) -> None:
    identity.sign_up("nuevo@malajunta.com", "secreto123", "Nuevo")

    assert identity.is_authenticated
    # The backend creates no profile row on sign-up.
    assert identity.state is IdentityState.AUTHENTICATED_WITHOUT_PROFILE


def test_duplicate_sign_up_fails(identity: IdentityContext, user: FakeUser) -> None:
    with pytest.raises(RemoteCallFailed) as excinfo:
        identity.sign_up(user.email, "secreto123", "Otra")
    assert excinfo.value.message_key == "auth.sign_up_failed"


def test_sign_out_clears_state_even_when_backend_fails(backend: FakeBackend, signed_in: IdentityContext) -> None:
    backend.fail("auth:sign_out")

    assert signed_in.sign_out() is True
    assert signed_in.user is None
    assert signed_in.profile is None
    assert signed_in.state is IdentityState.UNAUTHENTICATED


def test_stale_profile_result_is_ignored(backend: FakeBackend, signed_in: IdentityContext, user: FakeUser) -> None:
    other = backend.create_user("otro@malajunta.com", full_name="Otro")
    signed_in.clear()
    signed_in.user = other

    assert signed_in.load_profile(user.id) is None
    assert signed_in.profile is None


def test_profile_is_loading_until_fetch_settles(backend: FakeBackend, identity: IdentityContext, user: FakeUser) -> None:
    seen: list[IdentityState] = []
    original = identity.load_profile

    def _observe(user_id: str):
        seen.append(identity.state)
        return original(user_id)

    identity.load_profile = _observe  # type: ignore[method-assign]
    identity.sign_in(user.email, "secreto123")

    assert seen == [IdentityState.LOADING_PROFILE]
    assert identity.loading is False
    assert identity.state is IdentityState.AUTHENTICATED_WITH_PROFILE


def test_registry_reuses_contexts_per_key(backend: FakeBackend) -> None:
    registry = IdentityRegistry(client_factory=backend.client)
    first = registry.get_or_create("a" * 20)

    assert registry.get_or_create("a" * 20) is first
    assert registry.get_or_create("b" * 20) is not first
    assert len(registry) == 2

    registry.discard("a" * 20)
    assert registry.get("a" * 20) is None
    registry.close()
    assert len(registry) == 0


def test_registry_resolves_unknown_keys_to_one_guest(backend: FakeBackend) -> None:
    registry = IdentityRegistry(client_factory=backend.client)

    guest = registry.resolve("a" * 20)
    assert registry.resolve("b" * 20) is guest
    assert guest.state is IdentityState.UNAUTHENTICATED
    assert len(registry) == 0

    owned = registry.get_or_create("a" * 20)
    assert registry.resolve("a" * 20) is owned is not guest
    registry.close()


def test_registry_evicts_least_recently_used(backend: FakeBackend) -> None:
    registry = IdentityRegistry(client_factory=backend.client, max_contexts=2)
    first = registry.get_or_create("a" * 20)
    registry.get_or_create("b" * 20)
    registry.get("a" * 20)

    registry.get_or_create("c" * 20)

    assert len(registry) == 2
    assert registry.get("b" * 20) is None
    assert registry.get("a" * 20) is first
    registry.close()


def test_registry_expires_idle_contexts(backend: FakeBackend) -> None:
    now = [0.0]
    registry = IdentityRegistry(client_factory=backend.client, idle_timeout=60, clock=lambda: now[0])
    stale = registry.get_or_create("a" * 20)
    subscription_count = len(stale.client.auth.subscriptions)

    now[0] = 30.0
    registry.get_or_create("b" * 20)
    now[0] = 75.0

    assert registry.get("a" * 20) is None
    assert registry.get("b" * 20) is not None
    assert len(stale.client.auth.subscriptions) == subscription_count - 1
    registry.close()
