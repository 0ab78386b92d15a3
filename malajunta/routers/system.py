"""System-level routes for service discovery and health checks."""
from __future__ import annotations

from fastapi import APIRouter, Request

from ..config import get_settings

router = APIRouter(tags=["system"])


@router.get("/api")
def api_info() -> dict[str, str]:
    settings = get_settings()
    return {"service": settings.app_name, "version": settings.api_version}


@router.get("/health")
def healthcheck(request: Request) -> dict[str, object]:
    """Report the configured backend and how many sessions are held."""

    registry = getattr(request.app.state, "identities", None)
    return {
        "status": "ok",
        "backend": get_settings().supabase_url,
        "sessions": len(registry) if registry is not None else 0,
    }


__all__ = ["router"]
