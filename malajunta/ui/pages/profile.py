"""Profile page: personal info, character roster and account options."""
from __future__ import annotations

import logging

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, Response

from ...constants import PROFILE_LOADING_TIMEOUT
from ...services import IdentityState, ServiceError, UploadedImage
from ...services import post_service, profile_service
from ...services.auth_service import release_identity
from ..template_helpers import redirect, render_template
from ..views import CharacterRoster

logger = logging.getLogger(__name__)

router = APIRouter()

PROFILE_TABS = ("info", "chars", "options")


@router.get("/profile", response_class=HTMLResponse)
async def profile(request: Request, tab: str = "info") -> Response:
    identity = request.state.identity
    settled = await run_in_threadpool(identity.wait_settled, PROFILE_LOADING_TIMEOUT)
    if not identity.is_authenticated:
        if not settled:
            logger.warning("Identity still loading after %.0fs; leaving profile page", PROFILE_LOADING_TIMEOUT)
        return redirect("/")

    active_tab = tab if tab in PROFILE_TABS else "info"
    roster = None
    posts: list[dict] = []
    if active_tab == "chars":
        roster = await run_in_threadpool(CharacterRoster(identity).load)
    elif active_tab == "info" and identity.profile is not None:
        try:
            posts = await run_in_threadpool(post_service.list_user_posts, identity, identity.user_id)
        except ServiceError as exc:
            logger.info("Profile posts unavailable: %s", exc.message_key)

    return render_template(
        request,
        "profile.html",
        {
            "page_title": "Perfil",
            "active_nav": "/profile",
            "tab": active_tab,
            "tabs": PROFILE_TABS,
            "roster": roster,
            "user_posts": posts,
            "profile_missing": identity.state is IdentityState.AUTHENTICATED_WITHOUT_PROFILE,
            "profile_loading": identity.state is IdentityState.LOADING_PROFILE,
        },
    )


async def _run(request: Request, func, *args, tab: str, notice: str) -> Response:
    try:
        await run_in_threadpool(func, request.state.identity, *args)
    except ServiceError as exc:
        return redirect(f"/profile?tab={tab}", error=exc.message_key)
    return redirect(f"/profile?tab={tab}", notice=notice)


@router.post("/profile/create")
async def create_profile(request: Request) -> Response:
    return await _run(request, profile_service.create_missing_profile, tab="info", notice="profile.created")


@router.post("/profile/name")
async def update_name(request: Request, full_name: str = Form("")) -> Response:
    return await _run(request, profile_service.update_display_name, full_name, tab="info", notice="profile.updated")


@router.post("/profile/avatar")
async def upload_avatar(request: Request, avatar: UploadFile = File(...)) -> Response:
    upload = UploadedImage(
        filename=(avatar.filename or "").strip(),
        content_type=(avatar.content_type or "").strip(),
        data=await avatar.read(),
    )
    return await _run(request, profile_service.upload_avatar, upload, tab="info", notice="avatar.updated")


@router.post("/profile/avatar/delete")
async def delete_avatar(request: Request) -> Response:
    return await _run(request, profile_service.delete_avatar, tab="info", notice="avatar.deleted")


@router.post("/profile/characters")
async def add_character(request: Request, name: str = Form(""), subclass: str = Form("")) -> Response:
    roster = CharacterRoster(request.state.identity)
    added = await run_in_threadpool(roster.add, name, subclass)
    if added is None:
        return redirect("/profile?tab=chars", error=roster.error)
    return redirect("/profile?tab=chars", notice="characters.created")


@router.post("/profile/characters/{character_id}")
async def edit_character(request: Request, character_id: str, name: str = Form(""), subclass: str = Form("")) -> Response:
    roster = CharacterRoster(request.state.identity)
    updated = await run_in_threadpool(roster.edit, character_id, name, subclass)
    if updated is None:
        return redirect("/profile?tab=chars", error=roster.error)
    return redirect("/profile?tab=chars", notice="characters.updated")


@router.post("/profile/characters/{character_id}/delete")
async def remove_character(request: Request, character_id: str) -> Response:
    roster = CharacterRoster(request.state.identity)
    if not await run_in_threadpool(roster.remove, character_id):
        return redirect("/profile?tab=chars", error=roster.error)
    return redirect("/profile?tab=chars", notice="characters.deleted")


@router.post("/profile/delete-account")
async def delete_account(request: Request, confirmation: str = Form("")) -> Response:
    try:
        await run_in_threadpool(profile_service.delete_account, request.state.identity, confirmation)
    except ServiceError as exc:
        return redirect("/profile?tab=options", error=exc.message_key)
    await run_in_threadpool(release_identity, request)
    return redirect("/", notice="account.deleted")
