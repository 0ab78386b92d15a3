"""Media post routes: feed, upload, detail, likes, comments and download."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import TypeAdapter, ValidationError

from ..schemas import (
    CommentCreate,
    CommentResponse,
    LikeStateResponse,
    MediaPostDetailResponse,
    MediaPostResponse,
    TagInput,
    TagResponse,
)
from ..services import IdentityContext, ServiceError, UploadedImage
from ..services import comment_service, like_service, post_service
from ..services.auth_service import get_current_user, get_identity, http_error

router = APIRouter(prefix="/api/posts", tags=["posts"])

_TAGS_ADAPTER = TypeAdapter(list[TagInput])


@router.get("", response_model=list[MediaPostResponse])
def list_posts(
    request: Request,
    user_id: str | None = Query(None),
    identity: IdentityContext = Depends(get_identity),
) -> list[MediaPostResponse]:
    try:
        rows = post_service.list_user_posts(identity, user_id) if user_id else post_service.list_feed(identity)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return [MediaPostResponse.model_validate(row) for row in rows]


@router.post("", response_model=MediaPostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: Request,
    file: UploadFile = File(...),
    description: str = Form(""),
    tags: str = Form("[]", description="JSON list of tags"),
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> MediaPostResponse:
    try:
        tag_inputs = _TAGS_ADAPTER.validate_json(tags or "[]")
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors()) from exc

    upload = UploadedImage(
        filename=(file.filename or "").strip(),
        content_type=(file.content_type or "").strip(),
        data=await file.read(),
    )
    try:
        row = await run_in_threadpool(
            post_service.create_post,
            identity,
            upload,
            description,
            [tag.model_dump() for tag in tag_inputs],
        )
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return MediaPostResponse.model_validate(row)


@router.get("/{post_id}", response_model=MediaPostDetailResponse)
def read_post(post_id: str, request: Request, identity: IdentityContext = Depends(get_identity)) -> MediaPostDetailResponse:
    try:
        post = post_service.get_post(identity, post_id)
        tags = post_service.list_post_tags(identity, post_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return MediaPostDetailResponse.model_validate(
        {**post, "tags": tags, "liked": like_service.viewer_likes_post(identity, post_id)}
    )


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> Response:
    try:
        post_service.delete_post(identity, post_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=LikeStateResponse)
def toggle_post_like(
    post_id: str,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> LikeStateResponse:
    try:
        state = like_service.toggle_post_like(identity, post_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return LikeStateResponse(**state._asdict())


@router.get("/{post_id}/tags", response_model=list[TagResponse])
def list_post_tags(post_id: str, request: Request, identity: IdentityContext = Depends(get_identity)) -> list[TagResponse]:
    try:
        rows = post_service.list_post_tags(identity, post_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return [TagResponse.model_validate(row) for row in rows]


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_post_comments(
    post_id: str,
    request: Request,
    identity: IdentityContext = Depends(get_identity),
) -> list[CommentResponse]:
    try:
        rows = comment_service.list_comments(identity, post_id)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return [
        CommentResponse.model_validate({**row, "liked": like_service.viewer_likes_comment(identity, row["id"])})
        for row in rows
    ]


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_post_comment(
    post_id: str,
    payload: CommentCreate,
    request: Request,
    _user: Any = Depends(get_current_user),
    identity: IdentityContext = Depends(get_identity),
) -> CommentResponse:
    try:
        row = comment_service.create_comment(identity, post_id, payload.content)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return CommentResponse.model_validate(row)


@router.get("/{post_id}/download")
def download_post_image(post_id: str, request: Request, identity: IdentityContext = Depends(get_identity)) -> Response:
    try:
        post = post_service.get_post(identity, post_id)
        image = post_service.fetch_post_image(post)
    except ServiceError as exc:
        raise http_error(request, exc) from exc
    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={"Content-Disposition": f'attachment; filename="{image.filename}"'},
    )


__all__ = ["router"]
