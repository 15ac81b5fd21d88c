"""
Tests for Settings
"""
import pytest
from pydantic import ValidationError

from formwizard.core.config import (DEFAULT_TEMPLATES_DIR, PROJECT_ROOT,
                                    Settings, get_settings)


def test_defaults(monkeypatch):
    for var in ("API_PORT", "API_HOST", "TEMPLATES_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings()
    assert settings.api_port == 4005
    assert settings.api_host == "0.0.0.0"
    assert settings.templates_path == DEFAULT_TEMPLATES_DIR
    assert settings.enable_metrics is True


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    settings = Settings()
    assert settings.api_port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"


def test_relative_paths_resolve_against_project_root(monkeypatch):
    monkeypatch.setenv("TEMPLATES_DIR", "custom/templates")
    monkeypatch.setenv("LOG_FILE_PATH", "var/app.log")
    settings = Settings()
    assert settings.templates_path == PROJECT_ROOT / "custom" / "templates"
    assert settings.log_file == PROJECT_ROOT / "var" / "app.log"


@pytest.mark.parametrize(
    "var, value",
    [
        ("API_PORT", "0"),
        ("API_PORT", "70000"),
        ("LOG_LEVEL", "LOUD"),
        ("LOG_FORMAT", "xml"),
    ],
)
def test_invalid_values_rejected(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
