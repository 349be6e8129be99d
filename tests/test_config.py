import pytest

from byeolzari.core.config import load_settings


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("JWT_TOKEN_NAME", "sess")
    monkeypatch.setenv("GITHUB_CLIENT_ID", "gh-id")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "gh-secret")
    monkeypatch.setenv("OAUTH_CALLBACK_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("ALLOWED_CORS_ORIGINS", "https://a.example, https://b.example,https://a.example")
    monkeypatch.setenv("DB_RESET", "yes")

    settings = load_settings()

    assert settings.secret_key == "from-env"
    assert settings.jwt_token_name == "sess"
    assert settings.credentials_for("github").configured
    assert not settings.credentials_for("google").configured
    assert settings.oauth_callback_base_url == "https://api.example.com"
    assert settings.allowed_cors_origins == ["https://a.example", "https://b.example"]
    assert settings.db_reset is True


def test_missing_secret_is_an_error(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        load_settings()


def test_jwt_expiry_must_be_an_integer(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "s")
    monkeypatch.setenv("JWT_EXPIRES_DAYS", "seven")
    with pytest.raises(RuntimeError, match="JWT_EXPIRES_DAYS"):
        load_settings()
