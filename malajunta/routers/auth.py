"""Authentication routes backed by the session's identity context."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from ..schemas import LoginRequest, ProfileResponse, RegisterRequest, SessionResponse, SessionUser
from ..services import IdentityContext, ServiceError
from ..services.auth_service import claim_identity, get_identity, http_error, release_identity

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session_user(user: Any) -> SessionUser | None:
    if user is None:
        return None
    metadata = getattr(user, "user_metadata", None) or {}
    return SessionUser(id=str(user.id), email=getattr(user, "email", None), full_name=metadata.get("full_name"))


def build_session_response(identity: IdentityContext, *, needs_confirmation: bool = False) -> SessionResponse:
    profile = ProfileResponse.model_validate(identity.profile) if identity.profile else None
    return SessionResponse(
        state=identity.state.value,
        user=_session_user(identity.user),
        profile=profile,
        needs_confirmation=needs_confirmation,
    )


@router.get("/session", response_model=SessionResponse)
def read_session(identity: IdentityContext = Depends(get_identity)) -> SessionResponse:
    return build_session_response(identity)


@router.post("/sign-up", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: RegisterRequest, request: Request, identity: IdentityContext = Depends(claim_identity)) -> SessionResponse:
    """Register a new account.

    When the backend requires email confirmation no session is opened and
    ``needs_confirmation`` is set.
    """

    try:
        identity.sign_up(payload.email, payload.password, payload.full_name)
    except ServiceError as exc:
        if not identity.is_authenticated:
            release_identity(request)
        raise http_error(request, exc) from exc
    if identity.user is None:
        return build_session_response(release_identity(request), needs_confirmation=True)
    return build_session_response(identity)


@router.post("/sign-in", response_model=SessionResponse)
def sign_in(payload: LoginRequest, request: Request, identity: IdentityContext = Depends(claim_identity)) -> SessionResponse:
    try:
        identity.sign_in(payload.email, payload.password)
    except ServiceError as exc:
        if not identity.is_authenticated:
            release_identity(request)
        raise http_error(request, exc) from exc
    return build_session_response(identity)


@router.post("/sign-out", response_model=SessionResponse)
def sign_out(request: Request, identity: IdentityContext = Depends(get_identity)) -> SessionResponse:
    identity.sign_out()
    return build_session_response(release_identity(request))


__all__ = ["router", "build_session_response"]
