"""Sign-in, sign-up and sign-out pages."""
from __future__ import annotations

from fastapi import APIRouter, Form, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, Response

from ...services import ServiceError
from ...services.auth_service import claim_identity, release_identity
from ..template_helpers import redirect, render_template

router = APIRouter()


@router.get("/login", response_class=HTMLResponse)
async def login(request: Request, mode: str = "signin") -> Response:
    if request.state.identity.is_authenticated:
        return redirect("/")
    return render_template(
        request,
        "login.html",
        {
            "page_title": "Acceso",
            "mode": "signup" if mode == "signup" else "signin",
        },
    )


@router.post("/login")
async def submit_login(request: Request, email: str = Form(""), password: str = Form("")) -> Response:
    identity = await run_in_threadpool(claim_identity, request)
    try:
        await run_in_threadpool(identity.sign_in, email, password)
    except ServiceError as exc:
        if not identity.is_authenticated:
            await run_in_threadpool(release_identity, request)
        return redirect("/login", error=exc.message_key)
    return redirect("/")


@router.post("/signup")
async def submit_signup(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    full_name: str = Form(""),
) -> Response:
    identity = await run_in_threadpool(claim_identity, request)
    try:
        await run_in_threadpool(identity.sign_up, email, password, full_name)
    except ServiceError as exc:
        if not identity.is_authenticated:
            await run_in_threadpool(release_identity, request)
        return redirect("/login?mode=signup", error=exc.message_key)
    if identity.is_authenticated:
        return redirect("/")
    await run_in_threadpool(release_identity, request)
    return redirect("/login", notice="auth.check_email")


@router.api_route("/logout", methods=["GET", "POST"])
async def logout(request: Request) -> Response:
    await run_in_threadpool(request.state.identity.sign_out)
    await run_in_threadpool(release_identity, request)
    return redirect("/")
