"""Object storage helpers for avatars and post images."""
from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import Iterable

from supabase import Client

from .client import GatewayResult, gateway_call

logger = logging.getLogger(__name__)


def _extension(filename: str | None) -> str:
    extension = Path(filename or "").suffix.lower().lstrip(".")
    if not re.fullmatch(r"[a-z0-9]{1,10}", extension):
        return "bin"
    return extension


def build_object_path(owner_id: str, filename: str | None, prefix: str = "", *, now_ms: int | None = None) -> str:
    """Return ``<owner>/<prefix><epoch-ms>.<ext>`` for a new object."""

    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{owner_id}/{prefix}{stamp}.{_extension(filename)}"


def object_path_from_url(owner_id: str, public_url: str) -> str:
    """Map a public URL back to ``<owner>/<basename>`` inside its bucket."""

    basename = public_url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    return f"{owner_id}/{basename}"


@gateway_call("Uploading object")
def upload_object(client: Client, bucket: str, path: str, data: bytes, content_type: str) -> GatewayResult:
    client.storage.from_(bucket).upload(
        path,
        data,
        file_options={"content-type": content_type, "cache-control": "3600", "upsert": "false"},
    )
    logger.info("Uploaded %s (%d bytes) to %s", path, len(data), bucket)
    return GatewayResult(data=path)


@gateway_call("Resolving public URL")
def public_url(client: Client, bucket: str, path: str) -> GatewayResult:
    return GatewayResult(data=client.storage.from_(bucket).get_public_url(path))


@gateway_call("Removing objects")
def remove_objects(client: Client, bucket: str, paths: Iterable[str]) -> GatewayResult:
    targets = [path for path in paths if path]
    if not targets:
        return GatewayResult(data=[])
    response = client.storage.from_(bucket).remove(targets)
    return GatewayResult(data=response)


__all__ = ["build_object_path", "object_path_from_url", "upload_object", "public_url", "remove_objects"]
