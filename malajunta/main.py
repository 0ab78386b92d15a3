"""ASGI application for the Mala Junta web client."""
from __future__ import annotations

import logging
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .gateway import create_supabase_client
from .middleware import IdentitySessionMiddleware
from .routers import (
    auth_router,
    characters_router,
    comments_router,
    posts_router,
    profiles_router,
    system_router,
)
from .security.secrets import redact
from .services import IdentityRegistry
from .services.migrations import run_migrations_if_needed
from .ui import router as ui_router

logger = logging.getLogger(__name__)

# Raises a ValidationError when the Supabase credentials are missing.
settings = get_settings()

app = FastAPI(title=settings.app_name, version=settings.api_version)

# Signed-in browser sessions get their own Supabase client and auth listener.
app.state.identities = IdentityRegistry(
    client_factory=partial(create_supabase_client, settings),
    max_contexts=settings.max_sessions,
    idle_timeout=settings.session_idle_seconds,
)

app.add_middleware(
    IdentitySessionMiddleware,
    cookie_name=settings.session_cookie_name,
    secure=settings.session_cookie_secure,
    exempt_paths=("/health", "/i18n", "/docs", "/openapi.json"),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for api_router in (
    system_router,
    auth_router,
    profiles_router,
    characters_router,
    posts_router,
    comments_router,
):
    app.include_router(api_router)
app.include_router(ui_router)


@app.on_event("startup")
async def _startup() -> None:
    logger.info(
        "Supabase project %s (anon key %s)",
        settings.supabase_url,
        redact(settings.supabase_anon_key),
    )
    run_migrations_if_needed(settings)


@app.on_event("shutdown")
async def _shutdown() -> None:
    app.state.identities.close()
    logger.info("Closed all identity contexts")
