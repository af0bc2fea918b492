"""Unit tests for environment-driven settings."""

from config import Settings


def test_defaults(monkeypatch):
    for var in ("MARKETCHECK_API_KEY", "PORT", "CORS_ORIGINS", "CORS_ALLOW_ALL", "CACHE_TTL_SECONDS"):
        monkeypatch.delenv(var, raising=False)

    app_settings = Settings()

    assert app_settings.port == 3001
    assert app_settings.cors_origins == ["*"]
    assert app_settings.cors_allow_all is True
    assert app_settings.cache_ttl_seconds == 1800
    assert app_settings.api_key_configured is False
    assert app_settings.validate() == ["MARKETCHECK_API_KEY"]


def test_cors_origins_listed_explicitly(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example,https://b.example")
    monkeypatch.setenv("CORS_ALLOW_ALL", "true")

    app_settings = Settings()

    assert app_settings.cors_allow_all is True
    assert app_settings.cors_origins == ["https://a.example", "https://b.example"]


def test_env_file_is_not_loaded(monkeypatch, tmp_path):
    monkeypatch.delenv("MARKETCHECK_API_KEY", raising=False)
    (tmp_path / ".env").write_text("MARKETCHECK_API_KEY=from-dotenv\n")
    monkeypatch.chdir(tmp_path)

    assert Settings().marketcheck_api_key is None
