"""
Tests for environment configuration.
"""

from api.config import Settings, get_cors_origins


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("SESSION_TIMEOUT_MINUTES", "45")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings()

    assert settings.database_url == "sqlite://"
    assert settings.session_timeout_minutes == 45
    assert settings.log_level == "INFO"


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)

    assert get_cors_origins() == ["http://localhost:3000", "http://localhost:8080"]


def test_cors_origins_from_environment(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://hub.barangay.gov.ph, http://localhost:5173,")

    assert get_cors_origins() == ["https://hub.barangay.gov.ph", "http://localhost:5173"]
