"""Request-scoped access to the session's identity context."""
from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request, status

from .errors import AuthenticationRequired, ServiceError
from .i18n_service import describe_error, resolve_request_locale
from .identity_service import IdentityContext


def get_identity(request: Request) -> IdentityContext:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Identity middleware is not installed")
    return identity


def claim_identity(request: Request) -> IdentityContext:
    """Give the request's session its own identity context before a sign-in."""

    key = getattr(request.state, "session_key", None)
    if key is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Identity middleware is not installed")
    identity = request.app.state.identities.get_or_create(key)
    request.state.identity = identity
    return identity


def release_identity(request: Request) -> IdentityContext:
    """Drop the session's own context and fall back to the guest context."""

    registry = request.app.state.identities
    key = getattr(request.state, "session_key", None)
    if key is not None:
        registry.discard(key)
    request.state.identity = registry.guest()
    return request.state.identity


def get_current_user(request: Request, identity: IdentityContext = Depends(get_identity)) -> Any:
    if identity.user is None:
        raise http_error(request, AuthenticationRequired())
    return identity.user


def get_optional_user(identity: IdentityContext = Depends(get_identity)) -> Any | None:
    return identity.user


def http_error(request: Request, exc: ServiceError) -> HTTPException:
    """Translate a :class:`ServiceError` into a localised ``HTTPException``."""

    return HTTPException(status_code=exc.status_code, detail=describe_error(resolve_request_locale(request), exc))


__all__ = [
    "get_identity",
    "claim_identity",
    "release_identity",
    "get_current_user",
    "get_optional_user",
    "http_error",
]
