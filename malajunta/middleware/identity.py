"""Middleware binding each browser session to its identity context."""
from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Iterable, Sequence

from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from ..services.identity_service import IdentityRegistry

logger = logging.getLogger(__name__)

_SESSION_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


class IdentitySessionMiddleware(BaseHTTPMiddleware):
    """Resolve ``request.state.identity`` from the session cookie.

    A missing or malformed cookie gets a fresh session key. Until the session
    signs in it resolves to the registry's shared guest context.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        cookie_name: str = "mj_session",
        secure: bool = False,
        exempt_paths: Sequence[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._cookie_name = cookie_name
        self._secure = secure
        self._exempt_paths = tuple(exempt_paths or ())

    def _should_skip(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self._exempt_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method.upper() == "OPTIONS" or self._should_skip(request.url.path):
            return await call_next(request)

        registry: IdentityRegistry = request.app.state.identities
        key = request.cookies.get(self._cookie_name) or ""
        issued = False
        if not _SESSION_KEY_PATTERN.match(key):
            key = secrets.token_urlsafe(32)
            issued = True
            logger.debug("Issued new session key")

        request.state.session_key = key
        request.state.identity = await run_in_threadpool(registry.resolve, key)

        response = await call_next(request)
        if issued:
            response.set_cookie(
                self._cookie_name,
                key,
                httponly=True,
                samesite="lax",
                secure=self._secure,
                path="/",
            )
        return response


__all__: Iterable[str] = ["IdentitySessionMiddleware"]
