"""Service layer: validation and orchestration of gateway calls."""
from .errors import AuthenticationRequired, NotFound, RemoteCallFailed, ServiceError, ValidationFailed
from .identity_service import IdentityContext, IdentityRegistry, IdentityState
from .like_service import LikeState
from .validation import UploadedImage

__all__ = [
    "AuthenticationRequired",
    "IdentityContext",
    "IdentityRegistry",
    "IdentityState",
    "LikeState",
    "NotFound",
    "RemoteCallFailed",
    "ServiceError",
    "UploadedImage",
    "ValidationFailed",
]
