"""Convenience exports for schema layer."""
from .auth import LoginRequest, RegisterRequest, SessionResponse, SessionUser
from .characters import CharacterForm, CharacterListResponse, CharacterResponse, CharacterSearchResult
from .comments import CommentCreate, CommentResponse
from .posts import LikeStateResponse, MediaPostDetailResponse, MediaPostResponse, TagInput, TagResponse
from .profiles import AccountDeletionRequest, AvatarResponse, ProfileResponse, ProfileUpdateRequest

__all__ = [
    "AccountDeletionRequest",
    "AvatarResponse",
    "CharacterForm",
    "CharacterListResponse",
    "CharacterResponse",
    "CharacterSearchResult",
    "CommentCreate",
    "CommentResponse",
    "LikeStateResponse",
    "LoginRequest",
    "MediaPostDetailResponse",
    "MediaPostResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "SessionResponse",
    "SessionUser",
    "TagInput",
    "TagResponse",
]
