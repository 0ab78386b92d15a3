"""Media feed, upload form and post detail pages."""
from __future__ import annotations

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, Response

from ...services import ServiceError, UploadedImage
from ...services import character_service, post_service
from ..template_helpers import redirect, render_template
from ..views import FeedView, PostDetailView

router = APIRouter()


def _safe_next(target: str | None, default: str) -> str:
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return default


def _collect_tags(tag_names: str, tag_characters: list[str]) -> list[dict]:
    """Build tag drafts from ``id::name`` character picks plus comma separated names."""

    tags: list[dict] = []
    for value in tag_characters:
        character_id, _, name = value.partition("::")
        if character_id and name:
            tags.append({"character_id": character_id, "character_name": name})
    for name in tag_names.split(","):
        if name.strip():
            tags.append({"character_id": None, "character_name": name.strip()})
    return tags


@router.get("/media", response_class=HTMLResponse)
async def media(request: Request, q: str = "") -> HTMLResponse:
    identity = request.state.identity
    feed = await run_in_threadpool(FeedView(identity).load)
    search_results: list[dict] = []
    if q and identity.is_authenticated:
        try:
            search_results = await run_in_threadpool(character_service.search_characters, identity, q)
        except ServiceError as exc:
            feed.error = exc.message_key
    return render_template(
        request,
        "media.html",
        {
            "page_title": "Media",
            "active_nav": "/media",
            "feed": feed,
            "search_term": q,
            "search_results": search_results,
        },
    )


@router.post("/media/posts")
async def create_post(
    request: Request,
    image: UploadFile = File(...),
    description: str = Form(""),
    tag_names: str = Form(""),
    tag_characters: list[str] = Form([]),
) -> Response:
    identity = request.state.identity
    upload = UploadedImage(
        filename=(image.filename or "").strip(),
        content_type=(image.content_type or "").strip(),
        data=await image.read(),
    )
    try:
        await run_in_threadpool(
            post_service.create_post, identity, upload, description, _collect_tags(tag_names, tag_characters)
        )
    except ServiceError as exc:
        return redirect("/media", error=exc.message_key)
    return redirect("/media", notice="posts.created")


@router.get("/media/{post_id}", response_class=HTMLResponse)
async def post_detail(request: Request, post_id: str) -> HTMLResponse:
    detail = await run_in_threadpool(PostDetailView(request.state.identity, post_id).load)
    return render_template(
        request,
        "post_detail.html",
        {
            "page_title": "Media",
            "active_nav": "/media",
            "detail": detail,
        },
    )


@router.post("/media/{post_id}/like")
async def like_post(request: Request, post_id: str, next: str = Form("")) -> Response:
    view = FeedView(request.state.identity)
    state = await run_in_threadpool(view.toggle_like, post_id)
    target = _safe_next(next, f"/media/{post_id}")
    return redirect(target, error=view.error if state is None else None)


@router.post("/media/{post_id}/delete")
async def delete_post(request: Request, post_id: str) -> Response:
    view = FeedView(request.state.identity)
    if not await run_in_threadpool(view.delete_post, post_id):
        return redirect("/media", error=view.error)
    return redirect("/media", notice="posts.deleted")


@router.post("/media/{post_id}/comments")
async def add_comment(request: Request, post_id: str, content: str = Form("")) -> Response:
    detail = PostDetailView(request.state.identity, post_id)
    comment = await run_in_threadpool(detail.add_comment, content)
    return redirect(f"/media/{post_id}", error=detail.error if comment is None else None)


@router.post("/media/{post_id}/comments/{comment_id}/delete")
async def delete_comment(request: Request, post_id: str, comment_id: str) -> Response:
    detail = PostDetailView(request.state.identity, post_id)
    removed = await run_in_threadpool(detail.remove_comment, comment_id)
    return redirect(f"/media/{post_id}", error=None if removed else detail.error)


@router.post("/media/{post_id}/comments/{comment_id}/like")
async def like_comment(request: Request, post_id: str, comment_id: str) -> Response:
    detail = PostDetailView(request.state.identity, post_id)
    state = await run_in_threadpool(detail.toggle_comment_like, comment_id)
    return redirect(f"/media/{post_id}", error=detail.error if state is None else None)


@router.get("/media/{post_id}/download")
async def download_post(request: Request, post_id: str) -> Response:
    identity = request.state.identity
    try:
        post = await run_in_threadpool(post_service.get_post, identity, post_id)
        image = await run_in_threadpool(post_service.fetch_post_image, post)
    except ServiceError as exc:
        return redirect("/media", error=exc.message_key)
    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={"Content-Disposition": f'attachment; filename="{image.filename}"'},
    )
