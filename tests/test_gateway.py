"""Gateway calls return ``(data, error)`` and never raise past their boundary."""
from __future__ import annotations

import logging

import pytest

from malajunta.gateway import GatewayError, characters, likes, posts, profiles, storage, tags
from malajunta.gateway.client import first_row

from tests.fakes import FakeBackend


def test_missing_single_row_is_reported_as_not_found(backend: FakeBackend, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    result = profiles.get_profile(backend.client(), "missing-user")

    assert result.data is None
    assert result.error is not None and result.error.not_found
    assert "no matching rows" in caplog.text


def test_backend_failure_becomes_error_value(backend: FakeBackend) -> None:
    backend.fail("table:media_posts_with_stats:select")
    result = posts.list_media_posts(backend.client())

    assert not result.ok
    assert result.error.code == "500"
    assert "injected failure" in result.error.message


def test_update_without_rows_is_not_found(backend: FakeBackend) -> None:
    result = characters.update_character(backend.client(), "nope", {"name": "Zorro"})
    assert result.error is not None and result.error.not_found


def test_update_profile_stamps_updated_at(backend: FakeBackend) -> None:
    user = backend.create_user()
    before = backend.profile(user.id)["updated_at"]

    result = profiles.update_profile(backend.client(), user.id, {"full_name": "Ana María"})

    assert result.data["full_name"] == "Ana María"
    assert result.data["updated_at"] != before


def test_search_with_blank_term_skips_backend(backend: FakeBackend) -> None:
    result = characters.search_characters(backend.client(), "   ")
    assert result.data == []
    assert backend.calls == []


def test_search_is_case_insensitive_and_limited(backend: FakeBackend) -> None:
    owner = backend.create_user()
    for index in range(12):
        backend.add_row("characters", user_id=owner.id, name=f"Sombra {index}", subclass="Brujo")
    backend.add_row("characters", user_id=owner.id, name="Luz", subclass="Cazador")

    result = characters.search_characters(backend.client(), "SOMB")

    assert len(result.data) == 10
    assert all("Sombra" in row["name"] for row in result.data)
    assert set(result.data[0]) == {"id", "name", "subclass", "user_id"}


def test_feed_is_newest_first_and_characters_oldest_first(backend: FakeBackend) -> None:
    owner = backend.create_user()
    first = backend.add_row("media_posts", user_id=owner.id, image_url="a.png")
    second = backend.add_row("media_posts", user_id=owner.id, image_url="b.png")
    backend.add_row("characters", user_id=owner.id, name="Uno", subclass="Brujo")
    backend.add_row("characters", user_id=owner.id, name="Dos", subclass="Brujo")
    client = backend.client()

    assert [row["id"] for row in posts.list_media_posts(client).data] == [second["id"], first["id"]]
    assert [row["name"] for row in characters.list_user_characters(client, owner.id).data] == ["Uno", "Dos"]
    assert characters.count_user_characters(client, owner.id).data == 2


def test_toggle_requires_authenticated_caller(backend: FakeBackend) -> None:
    result = likes.toggle_post_like(backend.client(), "post-1")
    assert result.error is not None
    assert result.error.code == "28000"


def test_toggle_with_unexpected_payload_is_an_error(backend: FakeBackend, monkeypatch: pytest.MonkeyPatch) -> None:
    client = backend.client()

    class _Empty:
        def execute(self):
            class _Response:
                data = []

            return _Response()

    monkeypatch.setattr(client, "rpc", lambda name, params: _Empty())
    result = likes.toggle_comment_like(client, "comment-1")

    assert isinstance(result.error, GatewayError)
    assert "toggle_comment_like" in result.error.message


def test_post_tags_include_linked_character(backend: FakeBackend) -> None:
    owner = backend.create_user()
    character = backend.add_row("characters", user_id=owner.id, name="Zorro", subclass="Tirador")
    post = backend.add_row("media_posts", user_id=owner.id, image_url="a.png")
    client = backend.client()

    created = tags.create_post_tags(
        client,
        post["id"],
        [{"character_id": character["id"], "character_name": "Zorro"}, {"character_name": "Amigo"}],
    )
    assert len(created.data) == 2

    rows = tags.get_post_tags(client, post["id"]).data
    linked = next(row for row in rows if row["character_id"] == character["id"])
    assert linked["characters"] == {"name": "Zorro", "subclass": "Tirador"}
    free = next(row for row in rows if row["character_id"] is None)
    assert free["position_x"] == 0.5 and free["characters"] is None

    assert tags.delete_post_tags(client, post["id"]).error is None
    assert tags.get_post_tags(client, post["id"]).data == []


def test_empty_tag_list_makes_no_call(backend: FakeBackend) -> None:
    assert tags.create_post_tags(backend.client(), "post-1", []).data == []
    assert backend.calls == []


def test_object_paths() -> None:
    assert storage.build_object_path("u1", "Foto.JPG", "avatar-", now_ms=42) == "u1/avatar-42.jpg"
    assert storage.build_object_path("u1", "sin-extension", now_ms=7) == "u1/7.bin"
    assert (
        storage.object_path_from_url("u1", "https://cdn.test/storage/v1/object/public/avatars/u1/avatar-42.jpg?t=1")
        == "u1/avatar-42.jpg"
    )


def test_upload_rejects_existing_object(backend: FakeBackend) -> None:
    client = backend.client()
    assert storage.upload_object(client, "avatars", "u1/1.png", b"png", "image/png").ok
    _, options = backend.buckets["avatars"]["u1/1.png"]
    assert options == {"content-type": "image/png", "cache-control": "3600", "upsert": "false"}

    again = storage.upload_object(client, "avatars", "u1/1.png", b"png", "image/png")
    assert again.error is not None and again.error.code == "409"


def test_first_row_accepts_lists_and_objects() -> None:
    assert first_row([]) is None
    assert first_row([{"id": 1}, {"id": 2}]) == {"id": 1}
    assert first_row({"id": 3}) == {"id": 3}
