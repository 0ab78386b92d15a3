"""Routes for the signed-in user's profile."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ..schemas import AccountDeletionRequest, AvatarResponse, ProfileResponse, ProfileUpdateRequest
from ..services import IdentityContext, NotFound, ServiceError, UploadedImage
from ..services import profile_service
from ..services.auth_service import get_current_user, get_identity, http_error, release_identity

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
def read_my_profile(
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> ProfileResponse:
    if identity.profile is None:
        raise http_error(request, NotFound("profile.missing"))
    return ProfileResponse.model_validate(identity.profile)


@router.post("/me", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def create_my_profile(
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> ProfileResponse:
    """Insert the default profile row when the account has none."""

    try:
        profile = profile_service.create_missing_profile(identity)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return ProfileResponse.model_validate(profile)


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    payload: ProfileUpdateRequest,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> ProfileResponse:
    try:
        profile = profile_service.update_display_name(identity, payload.full_name)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return ProfileResponse.model_validate(profile)


@router.post("/me/avatar", response_model=AvatarResponse)
async def upload_my_avatar(
    request: Request,
    file: UploadFile = File(...),
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> AvatarResponse:
    upload = UploadedImage(
        filename=(file.filename or "").strip(),
        content_type=(file.content_type or "").strip(),
        data=await file.read(),
    )
    try:
        url = await run_in_threadpool(profile_service.upload_avatar, identity, upload)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return AvatarResponse(avatar_url=url)


@router.delete("/me/avatar", response_model=ProfileResponse)
def delete_my_avatar(
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> ProfileResponse:
    try:
        profile = profile_service.delete_avatar(identity)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    if profile is None:
        raise http_error(request, NotFound("profile.missing"))
    return ProfileResponse.model_validate(profile)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_my_account(
    payload: AccountDeletionRequest,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> Response:
    try:
        profile_service.delete_account(identity, payload.confirmation)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    release_identity(request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
