"""Landing page with a preview of the newest posts."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from ...services import IdentityContext, ServiceError
from ...services import post_service
from ..template_helpers import render_template

logger = logging.getLogger(__name__)

router = APIRouter()

HOME_PREVIEW_SIZE = 3


def _latest_posts(identity: IdentityContext) -> list[dict]:
    if not identity.is_authenticated:
        return []
    try:
        return post_service.list_feed(identity)[:HOME_PREVIEW_SIZE]
    except ServiceError as exc:
        logger.info("Home preview unavailable: %s", exc.message_key)
        return []


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    latest = await run_in_threadpool(_latest_posts, request.state.identity)
    return render_template(
        request,
        "home.html",
        {
            "page_title": "Inicio",
            "active_nav": "/",
            "latest_posts": latest,
        },
    )
