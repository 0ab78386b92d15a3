"""Project-wide constant values."""
from __future__ import annotations

# Form limits enforced before any remote call.
MAX_CHARACTERS_PER_PROFILE = 9
MIN_CHARACTER_NAME_LENGTH = 2
MAX_CHARACTER_NAME_LENGTH = 50
CHARACTER_SUBCLASSES: tuple[str, ...] = ("Barbaro", "Brujo", "Caballero", "Cazador", "Conjurador", "Tirador")
MIN_CHARACTER_SEARCH_LENGTH = 2
CHARACTER_SEARCH_LIMIT = 10

MAX_COMMENT_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 500
MIN_PASSWORD_LENGTH = 6

MAX_AVATAR_BYTES = 5 * 1024 * 1024
MAX_POST_IMAGE_BYTES = 10 * 1024 * 1024
DEFAULT_TAG_POSITION = 0.5

# Seconds the profile page waits for the identity before giving up.
PROFILE_LOADING_TIMEOUT = 5.0

# Signed-in sessions held by the identity registry.
DEFAULT_MAX_SESSIONS = 1000
DEFAULT_SESSION_IDLE_SECONDS = 12 * 60 * 60

ACCOUNT_DELETION_CONFIRMATION = "ELIMINAR"
DOWNLOAD_FILENAME_TEMPLATE = "mala-junta-{post_id}.jpg"

# Remote resources
PROFILES_TABLE = "profiles"
CHARACTERS_TABLE = "characters"
MEDIA_POSTS_TABLE = "media_posts"
MEDIA_POSTS_VIEW = "media_posts_with_stats"
COMMENTS_TABLE = "comments"
COMMENTS_VIEW = "comments_with_stats"
POST_LIKES_TABLE = "post_likes"
COMMENT_LIKES_TABLE = "comment_likes"
POST_TAGS_TABLE = "post_tags"

AVATARS_BUCKET = "avatars"
MEDIA_IMAGES_BUCKET = "media-images"

TOGGLE_POST_LIKE_RPC = "toggle_post_like"
TOGGLE_COMMENT_LIKE_RPC = "toggle_comment_like"
DELETE_USER_RPC = "delete_user"

# PostgREST reports "no rows" for .single() with this code.
NOT_FOUND_CODE = "PGRST116"

__all__ = [
    "MAX_CHARACTERS_PER_PROFILE",
    "MIN_CHARACTER_NAME_LENGTH",
    "MAX_CHARACTER_NAME_LENGTH",
    "CHARACTER_SUBCLASSES",
    "MIN_CHARACTER_SEARCH_LENGTH",
    "CHARACTER_SEARCH_LIMIT",
    "MAX_COMMENT_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "MAX_AVATAR_BYTES",
    "MAX_POST_IMAGE_BYTES",
    "DEFAULT_TAG_POSITION",
    "PROFILE_LOADING_TIMEOUT",
    "DEFAULT_MAX_SESSIONS",
    "DEFAULT_SESSION_IDLE_SECONDS",
    "ACCOUNT_DELETION_CONFIRMATION",
    "DOWNLOAD_FILENAME_TEMPLATE",
    "PROFILES_TABLE",
    "CHARACTERS_TABLE",
    "MEDIA_POSTS_TABLE",
    "MEDIA_POSTS_VIEW",
    "COMMENTS_TABLE",
    "COMMENTS_VIEW",
    "POST_LIKES_TABLE",
    "COMMENT_LIKES_TABLE",
    "POST_TAGS_TABLE",
    "AVATARS_BUCKET",
    "MEDIA_IMAGES_BUCKET",
    "TOGGLE_POST_LIKE_RPC",
    "TOGGLE_COMMENT_LIKE_RPC",
    "DELETE_USER_RPC",
    "NOT_FOUND_CODE",
]
