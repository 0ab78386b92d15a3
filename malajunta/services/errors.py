"""Service-level error taxonomy shared by the API and page routers."""
from __future__ import annotations

from typing import Any

from fastapi import status

from ..gateway import GatewayError, GatewayResult


class ServiceError(RuntimeError):
    """Base class for failures scoped to a single user action.

    ``message_key`` names a localised message; the HTTP layer translates it.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_key: str = "errors.generic"

    def __init__(self, message_key: str | None = None, *, detail: str | None = None) -> None:
        self.message_key = message_key or self.default_key
        self.detail = detail
        super().__init__(detail or self.message_key)


class ValidationFailed(ServiceError):
    """Raised before any remote call when form input is rejected."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_key = "errors.validation"


class RemoteCallFailed(ServiceError):
    """Raised when the backend reports an error for a gateway call."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_key = "errors.remote"

    def __init__(self, message_key: str | None = None, *, error: GatewayError | None = None) -> None:
        self.gateway_error = error
        super().__init__(message_key, detail=error.message if error else None)


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_key = "errors.not_found"


class AuthenticationRequired(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_key = "errors.auth_required"


def unwrap(result: GatewayResult, message_key: str, *, not_found_key: str | None = None) -> Any:
    """Return ``result.data`` or raise the matching :class:`ServiceError`.

    When ``not_found_key`` is given, a "no rows" error becomes :class:`NotFound`
    instead of :class:`RemoteCallFailed`.
    """

    if result.error is None:
        return result.data
    if not_found_key is not None and result.error.not_found:
        raise NotFound(not_found_key)
    raise RemoteCallFailed(message_key, error=result.error)


__all__ = [
    "ServiceError",
    "ValidationFailed",
    "RemoteCallFailed",
    "NotFound",
    "AuthenticationRequired",
    "unwrap",
]
