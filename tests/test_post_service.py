"""Media post creation, deletion, tags and downloads."""
from __future__ import annotations

import logging

import httpx
import pytest

from malajunta.services import NotFound, RemoteCallFailed, UploadedImage, ValidationFailed
from malajunta.services import post_service
from malajunta.services.identity_service import IdentityContext

from tests.fakes import PUBLIC_URL_ROOT, FakeBackend, FakeUser

IMAGE = UploadedImage(filename="partida.jpg", content_type="image/jpeg", data=b"\xff\xd8jpeg")


def test_create_post_uploads_then_inserts(backend: FakeBackend, signed_in: IdentityContext, user: FakeUser) -> None:
    post = post_service.create_post(signed_in, IMAGE, "  Noche de raid  ")

    (path,) = backend.buckets["media-images"]
    assert path.startswith(f"{user.id}/") and path.endswith(".jpg")
    assert post["image_url"] == f"{PUBLIC_URL_ROOT}/media-images/{path}"
    assert post["description"] == "Noche de raid"

    feed = post_service.list_feed(signed_in)
    assert feed[0]["id"] == post["id"]
    assert feed[0]["author_name"] == "Ana Torres"
    assert (feed[0]["like_count"], feed[0]["comment_count"]) == (0, 0)


def test_create_post_with_tags(backend: FakeBackend, signed_in: IdentityContext, user: FakeUser) -> None:
    character = backend.add_row("characters", user_id=user.id, name="Zorro", subclass="Tirador")

    post = post_service.create_post(
        signed_in,
        IMAGE,
        "",
        [{"character_id": character["id"], "character_name": "Zorro", "position_x": 0.2}, {"character_name": "Invitado"}],
    )

    tags = post_service.list_post_tags(signed_in, post["id"])
    assert sorted(tag["character_name"] for tag in tags) == ["Invitado", "Zorro"]


def test_invalid_image_is_rejected_before_upload(backend: FakeBackend, signed_in: IdentityContext) -> None:
    text_file = UploadedImage(filename="notas.txt", content_type="text/plain", data=b"hola")
    with pytest.raises(ValidationFailed) as excinfo:
        post_service.create_post(signed_in, text_file)

    assert excinfo.value.message_key == "posts.not_an_image"
    assert "storage:upload" not in backend.calls


def test_failed_insert_leaves_orphaned_object(
    backend: FakeBackend, signed_in: IdentityContext, caplog: pytest.LogCaptureFixture
) -> None:
    backend.fail("table:media_posts:insert")
    caplog.set_level(logging.ERROR)

    with pytest.raises(RemoteCallFailed) as excinfo:
        post_service.create_post(signed_in, IMAGE)

    assert excinfo.value.message_key == "posts.create_failed"
    assert len(backend.buckets["media-images"]) == 1
    assert backend.tables["media_posts"] == []
    assert "is orphaned" in caplog.text


def test_failed_tag_insert_keeps_post(
    backend: FakeBackend, signed_in: IdentityContext, caplog: pytest.LogCaptureFixture
) -> None:
    backend.fail("table:post_tags:insert")
    caplog.set_level(logging.WARNING)

    post = post_service.create_post(signed_in, IMAGE, "", [{"character_name": "Invitado"}])

    assert backend.tables["media_posts"][0]["id"] == post["id"]
    assert backend.tables["post_tags"] == []
    assert "created without its tags" in caplog.text


def test_upload_failure_stops_before_insert(backend: FakeBackend, signed_in: IdentityContext) -> None:
    backend.fail("storage:upload")

    with pytest.raises(RemoteCallFailed) as excinfo:
        post_service.create_post(signed_in, IMAGE)

    assert excinfo.value.message_key == "posts.upload_failed"
    assert "table:media_posts:insert" not in backend.calls


def test_get_missing_post_is_not_found(signed_in: IdentityContext) -> None:
    with pytest.raises(NotFound) as excinfo:
        post_service.get_post(signed_in, "missing")
    assert excinfo.value.message_key == "posts.not_found"


def test_delete_post_cascades(backend: FakeBackend, signed_in: IdentityContext, user: FakeUser) -> None:
    post = post_service.create_post(signed_in, IMAGE)
    backend.add_row("comments", post_id=post["id"], user_id=user.id, content="hola")

    post_service.delete_post(signed_in, post["id"])

    assert backend.tables["media_posts"] == []
    assert backend.tables["comments"] == []


def test_user_posts_are_filtered_by_owner(backend: FakeBackend, signed_in: IdentityContext, user: FakeUser) -> None:
    other = backend.create_user("otro@malajunta.com")
    backend.add_row("media_posts", user_id=other.id, image_url="otro.png")
    mine = post_service.create_post(signed_in, IMAGE)

    assert [row["id"] for row in post_service.list_user_posts(signed_in, user.id)] == [mine["id"]]


def test_fetch_post_image_names_download() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://cdn.test/p.jpg"
        return httpx.Response(200, content=b"jpeg-bytes", headers={"content-type": "image/jpeg"})

    with httpx.Client(transport=httpx.MockTransport(handler)) as http:
        image = post_service.fetch_post_image({"id": "abc", "image_url": "https://cdn.test/p.jpg"}, client=http)

    assert image.filename == "mala-junta-abc.jpg"
    assert image.content == b"jpeg-bytes"
    assert image.content_type == "image/jpeg"


def test_fetch_post_image_reports_http_failure() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    with httpx.Client(transport=transport) as http:
        with pytest.raises(RemoteCallFailed) as excinfo:
            post_service.fetch_post_image({"id": "abc", "image_url": "https://cdn.test/p.jpg"}, client=http)
    assert excinfo.value.message_key == "posts.download_failed"
