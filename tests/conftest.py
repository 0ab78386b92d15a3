"""Shared fixtures: an in-memory backend behind every identity context."""
from __future__ import annotations

import os
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

# Settings validation runs at import time; provide non-placeholder values first.
os.environ.setdefault("SUPABASE_URL", "https://malajunta-test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("AUTO_MIGRATE", "false")

from malajunta.main import app  # noqa: E402
from malajunta.services import IdentityContext, IdentityRegistry  # noqa: E402

from tests.fakes import FakeBackend, FakeUser  # noqa: E402


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_identity(backend: FakeBackend) -> Callable[[], IdentityContext]:
    """Build started identity contexts, one per simulated browser."""

    contexts: list[IdentityContext] = []

    def _make() -> IdentityContext:
        context = IdentityContext(backend.client())
        context.start()
        contexts.append(context)
        return context

    yield _make
    for context in contexts:
        context.close()


@pytest.fixture
def identity(make_identity) -> IdentityContext:
    return make_identity()


@pytest.fixture
def user(backend: FakeBackend) -> FakeUser:
    return backend.create_user()


@pytest.fixture
def signed_in(identity: IdentityContext, user: FakeUser) -> IdentityContext:
    identity.sign_in(user.email, "secreto123")
    return identity


@pytest.fixture
def client(backend: FakeBackend) -> Iterator[TestClient]:
    original = app.state.identities
    app.state.identities = IdentityRegistry(client_factory=backend.client)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.state.identities.close()
        app.state.identities = original


@pytest.fixture
def authed_client(client: TestClient, user: FakeUser) -> TestClient:
    response = client.post("/api/auth/sign-in", json={"email": user.email, "password": "secreto123"})
    assert response.status_code == 200
    return client
