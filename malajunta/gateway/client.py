"""Supabase client construction plus the ``(data, error)`` envelope shared by gateway calls."""
from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, NamedTuple

import httpx
from supabase import AuthError, Client, PostgrestAPIError, StorageException, create_client

from ..config import Settings, get_settings
from ..constants import NOT_FOUND_CODE

logger = logging.getLogger(__name__)

_BACKEND_ERRORS: tuple[type[Exception], ...] = (PostgrestAPIError, StorageException, AuthError, httpx.HTTPError)


@dataclass(frozen=True)
class GatewayError:
    """Failure reported by the backend, normalised across PostgREST, Storage and Auth."""

    code: str | None
    message: str
    details: str | None = None

    @property
    def not_found(self) -> bool:
        return self.code == NOT_FOUND_CODE

    @classmethod
    def from_exception(cls, exc: Exception) -> "GatewayError":
        payload = exc.args[0] if exc.args and isinstance(exc.args[0], dict) else {}
        code = getattr(exc, "code", None) or payload.get("code") or payload.get("statusCode")
        message = getattr(exc, "message", None) or payload.get("message") or str(exc) or exc.__class__.__name__
        details = getattr(exc, "details", None) or payload.get("details")
        return cls(
            code=str(code) if code is not None else None,
            message=str(message),
            details=str(details) if details is not None else None,
        )


class GatewayResult(NamedTuple):
    """Result-or-error pair returned by every gateway function."""

    data: Any = None
    error: GatewayError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def not_found_error(message: str = "No matching rows") -> GatewayError:
    return GatewayError(code=NOT_FOUND_CODE, message=message)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def first_row(data: Any) -> Any:
    """Return the first row of a PostgREST payload (list or object) or ``None``."""

    if isinstance(data, list):
        return data[0] if data else None
    return data


def gateway_call(action: str) -> Callable[[Callable[..., GatewayResult]], Callable[..., GatewayResult]]:
    """Wrap a gateway function so backend failures become ``GatewayResult(error=...)``.

    The wrapped function never raises past its boundary: a failed call is logged
    once and surfaced to the caller without retries.
    """

    def decorator(func: Callable[..., GatewayResult]) -> Callable[..., GatewayResult]:
        call_logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> GatewayResult:
            call_logger.debug("%s", action)
            try:
                return func(*args, **kwargs)
            except _BACKEND_ERRORS as exc:
                error = GatewayError.from_exception(exc)
                if error.not_found:
                    call_logger.warning("%s: no matching rows", action)
                else:
                    call_logger.error("%s failed (code=%s): %s", action, error.code, error.message)
                return GatewayResult(error=error)
            except Exception as exc:  # pragma: no cover - transport errors
                call_logger.exception("Unexpected error during: %s", action)
                return GatewayResult(error=GatewayError(code=None, message=str(exc)))

        return wrapper

    return decorator


def create_supabase_client(settings: Settings | None = None) -> Client:
    """Create a fresh Supabase client bound to the configured project."""

    config = settings or get_settings()
    logger.debug("Creating Supabase client for %s", config.supabase_url)
    return create_client(config.supabase_url, config.supabase_anon_key)


__all__ = [
    "Client",
    "GatewayError",
    "GatewayResult",
    "create_supabase_client",
    "first_row",
    "gateway_call",
    "not_found_error",
    "utc_now_iso",
]
