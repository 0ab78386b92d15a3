"""Media posts: feed, upload-then-link creation, deletion and downloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

import httpx

from ..constants import DOWNLOAD_FILENAME_TEMPLATE, MEDIA_IMAGES_BUCKET
from ..gateway import posts as posts_gateway
from ..gateway import storage as storage_gateway
from ..gateway import tags as tags_gateway
from .errors import RemoteCallFailed, unwrap
from .identity_service import IdentityContext
from .validation import UploadedImage, normalize_tags, validate_description, validate_post_image

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 30.0


@dataclass(frozen=True)
class DownloadedImage:
    filename: str
    content_type: str
    content: bytes


def list_feed(identity: IdentityContext) -> list[dict[str, Any]]:
    return unwrap(posts_gateway.list_media_posts(identity.client), "posts.load_failed")


def list_user_posts(identity: IdentityContext, user_id: str) -> list[dict[str, Any]]:
    return unwrap(posts_gateway.list_user_media_posts(identity.client, user_id), "posts.load_failed")


def get_post(identity: IdentityContext, post_id: str) -> dict[str, Any]:
    return unwrap(
        posts_gateway.get_media_post(identity.client, post_id),
        "posts.load_failed",
        not_found_key="posts.not_found",
    )


def create_post(
    identity: IdentityContext,
    upload: UploadedImage | None,
    description: str | None = "",
    tags: Iterable[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Upload the image, insert the post row, then attach tags.

    The steps are not transactional: a failed insert leaves the uploaded object
    behind, and a failed tag insert keeps the post.
    """

    user = identity.require_user()
    image = validate_post_image(upload)
    text = validate_description(description)
    cleaned_tags = normalize_tags(tags)

    path = storage_gateway.build_object_path(user.id, image.filename)
    unwrap(
        storage_gateway.upload_object(identity.client, MEDIA_IMAGES_BUCKET, path, image.data, image.content_type),
        "posts.upload_failed",
    )
    image_url = unwrap(storage_gateway.public_url(identity.client, MEDIA_IMAGES_BUCKET, path), "posts.upload_failed")

    result = posts_gateway.create_media_post(identity.client, user_id=user.id, image_url=image_url, description=text)
    if result.error is not None:
        logger.error("Post insert failed; object %s is orphaned", path)
        raise RemoteCallFailed("posts.create_failed", error=result.error)
    post = result.data

    if cleaned_tags:
        tag_result = tags_gateway.create_post_tags(identity.client, post["id"], cleaned_tags)
        if tag_result.error is not None:
            logger.warning("Post %s created without its tags", post["id"])
    logger.info("Media post %s created by %s", post["id"], user.id)
    return post


def delete_post(identity: IdentityContext, post_id: str) -> None:
    identity.require_user()
    unwrap(
        posts_gateway.delete_media_post(identity.client, post_id),
        "posts.delete_failed",
        not_found_key="posts.not_found",
    )


def list_post_tags(identity: IdentityContext, post_id: str) -> list[dict[str, Any]]:
    return unwrap(tags_gateway.get_post_tags(identity.client, post_id), "tags.load_failed")


def fetch_post_image(post: dict[str, Any], *, client: httpx.Client | None = None) -> DownloadedImage:
    """Download a post's image for saving as ``mala-junta-<post id>.jpg``."""

    url = post.get("image_url")
    if not url:
        raise RemoteCallFailed("posts.download_failed")
    http = client or httpx.Client(timeout=DOWNLOAD_TIMEOUT, follow_redirects=True)
    try:
        response = http.get(url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.error("Downloading %s failed: %s", url, exc)
        raise RemoteCallFailed("posts.download_failed") from exc
    finally:
        if client is None:
            http.close()
    return DownloadedImage(
        filename=DOWNLOAD_FILENAME_TEMPLATE.format(post_id=post["id"]),
        content_type=response.headers.get("content-type", "image/jpeg"),
        content=response.content,
    )


__all__ = [
    "DownloadedImage",
    "list_feed",
    "list_user_posts",
    "get_post",
    "create_post",
    "delete_post",
    "list_post_tags",
    "fetch_post_image",
]
