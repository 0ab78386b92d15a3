"""Comment routes that address a comment directly."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from ..schemas import LikeStateResponse
from ..services import IdentityContext, ServiceError
from ..services import comment_service, like_service
from ..services.auth_service import get_current_user, get_identity, http_error

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: str,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> Response:
    try:
        comment_service.delete_comment(identity, comment_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{comment_id}/like", response_model=LikeStateResponse)
def toggle_comment_like(
    comment_id: str,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> LikeStateResponse:
    try:
        state = like_service.toggle_comment_like(identity, comment_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return LikeStateResponse(**state._asdict())


__all__ = ["router"]
