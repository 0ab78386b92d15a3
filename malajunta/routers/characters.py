"""Character roster routes."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ..constants import MAX_CHARACTERS_PER_PROFILE
from ..schemas import CharacterForm, CharacterListResponse, CharacterResponse, CharacterSearchResult
from ..services import IdentityContext, ServiceError
from ..services import character_service
from ..services.auth_service import get_current_user, get_identity, http_error

router = APIRouter(prefix="/api/characters", tags=["characters"])


@router.get("", response_model=CharacterListResponse)
def list_characters(
    request: Request,
    user_id: str | None = Query(None, description="Owner to list; defaults to the signed-in user"),
    identity: IdentityContext = Depends(get_identity),
) -> CharacterListResponse:
    try:
        rows = character_service.list_characters(identity, user_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    items = [CharacterResponse.model_validate(row) for row in rows]
    return CharacterListResponse(items=items, can_add=len(items) < MAX_CHARACTERS_PER_PROFILE)


@router.get("/search", response_model=list[CharacterSearchResult])
def search_characters(
    request: Request,
    q: str = Query("", description="Case-insensitive substring of the character name"),
    identity: IdentityContext = Depends(get_identity),
) -> list[CharacterSearchResult]:
    try:
        rows = character_service.search_characters(identity, q)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return [CharacterSearchResult.model_validate(row) for row in rows]


@router.post("", response_model=CharacterResponse, status_code=status.HTTP_201_CREATED)
def create_character(
    payload: CharacterForm,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> CharacterResponse:
    try:
        row = character_service.create_character(identity, payload.name, payload.subclass)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return CharacterResponse.model_validate(row)


@router.patch("/{character_id}", response_model=CharacterResponse)
def update_character(
    character_id: str,
    payload: CharacterForm,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> CharacterResponse:
    try:
        row = character_service.update_character(identity, character_id, payload.name, payload.subclass)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return CharacterResponse.model_validate(row)


@router.delete("/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_character(
    character_id: str,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> Response:
    try:
        character_service.delete_character(identity, character_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
