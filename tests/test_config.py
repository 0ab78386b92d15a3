import pytest
from pydantic import ValidationError

from malajunta.config import Settings
from malajunta.security.secrets import MissingSecretError, check_project_url, redact, require_secret


def _settings(**overrides: str) -> Settings:
    values = {"SUPABASE_URL": "https://abc.supabase.co/", "SUPABASE_ANON_KEY": "eyJhbGciOi.anon.key"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_settings_normalize_url_and_blank_dsn() -> None:
    settings = _settings(DATABASE_URL="  ")
    assert settings.supabase_url == "https://abc.supabase.co"
    assert settings.database_url is None
    assert settings.allowed_origins == ["*"]
    assert _settings(CORS_ORIGINS="http://a.test, http://b.test").allowed_origins == ["http://a.test", "http://b.test"]


def test_session_limits_have_defaults_and_bounds() -> None:
    settings = _settings()
    assert settings.max_sessions == 1000
    assert settings.session_idle_seconds == 12 * 60 * 60
    assert _settings(MAX_SESSIONS="5", SESSION_IDLE_SECONDS="30").max_sessions == 5
    with pytest.raises(ValidationError):
        _settings(MAX_SESSIONS="0")


@pytest.mark.parametrize(
    "overrides",
    [
        {"SUPABASE_URL": "https://your-project.supabase.co"},
        {"SUPABASE_URL": "abc.supabase.co"},
        {"SUPABASE_ANON_KEY": "your-anon-key"},
        {"SUPABASE_ANON_KEY": ""},
    ],
)
def test_settings_reject_template_credentials(overrides: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        _settings(**overrides)


def test_project_url_requires_http_scheme() -> None:
    assert check_project_url("http://localhost:54321/") == "http://localhost:54321"
    with pytest.raises(MissingSecretError):
        check_project_url("ftp://abc.supabase.co")


def test_redact_keeps_only_the_tail() -> None:
    assert redact(None) == "<unset>"
    assert redact("abc") == "***"
    assert redact("eyJhbGciOiJIUzI1NiJ9").endswith("NiJ9")
    assert "eyJ" not in redact("eyJhbGciOiJIUzI1NiJ9")


def test_require_secret_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", " postgresql://postgres@db/postgres ")
    assert require_secret("DATABASE_URL") == "postgresql://postgres@db/postgres"
    monkeypatch.setenv("DATABASE_URL", "changeme")
    with pytest.raises(MissingSecretError):
        require_secret("DATABASE_URL")
