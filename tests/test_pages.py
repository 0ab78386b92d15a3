"""Server-rendered pages and their post/redirect/get form handlers."""
from __future__ import annotations

from fastapi.testclient import TestClient

from malajunta.main import app

from tests.fakes import FakeBackend, FakeUser

PNG = ("foto.png", b"\x89PNG\r\n" * 4, "image/png")


def _login(client: TestClient, user: FakeUser) -> None:
    response = client.post("/login", data={"email": user.email, "password": "secreto123"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_home_greets_signed_in_user(client: TestClient, user: FakeUser) -> None:
    anonymous = client.get("/")
    assert anonymous.status_code == 200
    assert 'data-role="greeting"' not in anonymous.text

    _login(client, user)
    page = client.get("/")
    assert 'data-role="greeting"' in page.text
    assert "Ana Torres" in page.text


def test_home_previews_latest_posts(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    for index in range(4):
        backend.add_row("media_posts", user_id=user.id, image_url=f"https://cdn.test/{index}.jpg", description=f"Foto {index}")

    assert 'data-role="latest-posts"' not in client.get("/").text

    _login(client, user)
    page = client.get("/")
    assert 'data-role="latest-posts"' in page.text
    assert page.text.count("data-post-id=") == 3


def test_language_switch_sets_cookie_and_returns(client: TestClient) -> None:
    page = client.get("/media", params={"lang": "es"})
    assert "/i18n/switch/en?next=/media" in page.text

    response = client.get("/i18n/switch/en", params={"next": "/media"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/media"
    assert response.cookies.get("ui_locale") == "en"

    outside = client.get("/i18n/switch/es", params={"next": "//evil.test"}, follow_redirects=False)
    assert outside.headers["location"] == "/"
    assert client.get("/i18n/switch/fr", follow_redirects=False).status_code == 400


def test_failed_login_redirects_with_error(client: TestClient, user: FakeUser) -> None:
    response = client.post("/login", data={"email": user.email, "password": "mal"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login?error=auth.sign_in_failed"


def test_login_page_redirects_when_signed_in(client: TestClient, user: FakeUser) -> None:
    assert client.get("/login").status_code == 200
    _login(client, user)
    assert client.get("/login", follow_redirects=False).headers["location"] == "/"


def test_signup_waiting_for_confirmation_shows_notice(client: TestClient, backend: FakeBackend) -> None:
    backend.require_email_confirmation = True
    response = client.post(
        "/signup",
        data={"email": "nuevo@malajunta.com", "password": "secreto123", "full_name": "Nuevo"},
        follow_redirects=False,
    )
    assert response.headers["location"] == "/login?notice=auth.check_email"


def test_logout_clears_session(client: TestClient, user: FakeUser) -> None:
    _login(client, user)
    client.post("/logout")
    assert client.get("/api/auth/session").json()["state"] == "unauthenticated"


def test_profile_redirects_anonymous_visitors(client: TestClient) -> None:
    response = client.get("/profile", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_profile_tabs(client: TestClient, user: FakeUser) -> None:
    _login(client, user)

    info = client.get("/profile")
    assert 'action="/profile/name"' in info.text
    assert 'data-role="create-profile"' not in info.text

    chars = client.get("/profile", params={"tab": "chars"})
    assert 'data-role="roster"' in chars.text
    assert 'data-role="add-character"' in chars.text

    options = client.get("/profile", params={"tab": "options"})
    assert 'data-role="delete-account"' in options.text


def test_profile_offers_creation_when_row_missing(client: TestClient, backend: FakeBackend) -> None:
    orphan = backend.create_user("sin@malajunta.com", full_name="Sin Perfil", with_profile=False)
    _login(client, orphan)

    assert 'data-role="create-profile"' in client.get("/profile").text

    response = client.post("/profile/create", follow_redirects=False)
    assert response.headers["location"] == "/profile?tab=info&notice=profile.created"
    assert backend.profile(orphan.id)["full_name"] == "Sin Perfil"


def test_character_forms(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    _login(client, user)

    added = client.post("/profile/characters", data={"name": "Zorro", "subclass": "Tirador"}, follow_redirects=False)
    assert added.headers["location"] == "/profile?tab=chars&notice=characters.created"
    character_id = backend.tables["characters"][0]["id"]

    rejected = client.post("/profile/characters", data={"name": "Z", "subclass": "Tirador"}, follow_redirects=False)
    assert rejected.headers["location"] == "/profile?tab=chars&error=characters.name_too_short"

    client.post(f"/profile/characters/{character_id}", data={"name": "Zorra", "subclass": "Cazador"})
    assert backend.tables["characters"][0]["name"] == "Zorra"

    client.post(f"/profile/characters/{character_id}/delete")
    assert backend.tables["characters"] == []


def test_roster_hides_form_at_limit(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    for index in range(9):
        backend.add_row("characters", user_id=user.id, name=f"Heroe {index}", subclass="Brujo")
    _login(client, user)

    page = client.get("/profile", params={"tab": "chars"})
    assert 'data-role="add-character"' not in page.text
    assert "9/9" in page.text


def test_delete_account_form(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    _login(client, user)

    wrong = client.post("/profile/delete-account", data={"confirmation": "eliminar"}, follow_redirects=False)
    assert wrong.headers["location"] == "/profile?tab=options&error=account.confirmation_mismatch"

    done = client.post("/profile/delete-account", data={"confirmation": "ELIMINAR"}, follow_redirects=False)
    assert done.headers["location"] == "/?notice=account.deleted"
    assert user.email not in backend.users
    assert len(app.state.identities) == 0


def test_media_feed_upload_and_detail(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    _login(client, user)
    character = backend.add_row("characters", user_id=user.id, name="Zorro", subclass="Tirador")

    search = client.get("/media", params={"q": "zor"})
    assert 'data-role="search-results"' in search.text

    created = client.post(
        "/media/posts",
        files={"image": PNG},
        data={
            "description": "Noche de raid",
            "tag_names": "Invitado, ",
            "tag_characters": [f"{character['id']}::Zorro"],
        },
        follow_redirects=False,
    )
    assert created.headers["location"] == "/media?notice=posts.created"
    post_id = backend.tables["media_posts"][0]["id"]
    assert sorted(tag["character_name"] for tag in backend.tables["post_tags"]) == ["Invitado", "Zorro"]

    feed = client.get("/media")
    assert "Noche de raid" in feed.text

    client.post(f"/media/{post_id}/like", data={"next": "/media"})
    client.post(f"/media/{post_id}/comments", data={"content": "gran foto"})
    detail = client.get(f"/media/{post_id}")
    assert 'data-role="tags"' in detail.text
    assert "gran foto" in detail.text
    assert len(backend.tables["post_likes"]) == 1


def test_media_comment_rejection_is_flashed(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    _login(client, user)
    post = backend.add_row("media_posts", user_id=user.id, image_url="https://cdn.test/p.jpg")

    response = client.post(f"/media/{post['id']}/comments", data={"content": "x" * 501}, follow_redirects=False)
    assert response.headers["location"] == f"/media/{post['id']}?error=comments.too_long"
    assert backend.tables["comments"] == []


def test_like_redirect_ignores_external_next(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    _login(client, user)
    post = backend.add_row("media_posts", user_id=user.id, image_url="https://cdn.test/p.jpg")

    response = client.post(f"/media/{post['id']}/like", data={"next": "//evil.test"}, follow_redirects=False)
    assert response.headers["location"] == f"/media/{post['id']}"


def test_delete_post_from_page(client: TestClient, backend: FakeBackend, user: FakeUser) -> None:
    _login(client, user)
    post = backend.add_row("media_posts", user_id=user.id, image_url="https://cdn.test/p.jpg")

    backend.fail("table:media_posts:delete")
    failed = client.post(f"/media/{post['id']}/delete", follow_redirects=False)
    assert failed.headers["location"] == "/media?error=posts.delete_failed"

    backend.recover("table:media_posts:delete")
    done = client.post(f"/media/{post['id']}/delete", follow_redirects=False)
    assert done.headers["location"] == "/media?notice=posts.deleted"
    assert backend.tables["media_posts"] == []


def test_missing_post_page(client: TestClient) -> None:
    page = client.get("/media/missing")
    assert page.status_code == 200
    assert 'data-role="comments"' not in page.text
