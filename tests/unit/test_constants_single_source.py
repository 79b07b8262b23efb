"""Test that client settings are accessible and not duplicated."""

import pytest

from client.app.config import Settings, get_settings


def test_settings_accessible() -> None:
    """Test that Settings can be imported and accessed."""
    settings = get_settings()
    assert settings is not None
    assert get_settings() is settings


def test_api_constants_accessible() -> None:
    """Test that API constants are accessible."""
    settings = Settings(_env_file=None)
    assert settings.api_base_url.endswith("/api")
    assert settings.api_timeout_s > 0
    assert settings.trips_page_limit > 0


def test_storage_keys_match_client_contract() -> None:
    """Test durable storage key names."""
    settings = Settings(_env_file=None)
    assert settings.selected_trip_key == "selectedTripId"
    assert settings.view_key == "currentView"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variables override defaults."""
    monkeypatch.setenv("API_BASE_URL", "https://trips.example.com/api")
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/2")
    monkeypatch.setenv("DEMO_FALLBACK", "false")

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://trips.example.com/api"
    assert settings.storage_backend == "redis"
    assert settings.redis_url == "redis://localhost:6379/2"
    assert settings.demo_fallback is False


def test_invalid_storage_backend_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test unknown backends fail validation."""
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")

    with pytest.raises(ValueError):
        Settings(_env_file=None)
