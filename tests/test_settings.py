"""Settings - defaults, AEGIS_ environment overrides, derived layout.

Tests cover:
    - Defaults match the fixed layout and retention window
    - Environment variables override defaults
    - Invalid retention and log format are rejected
    - get_settings is cached
"""

import pytest
from pydantic import ValidationError

from aegis_config.config import Settings, get_settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.app_root == "~/.securechat"
    assert settings.themes_dir == "assets/themes"
    assert settings.config_filename == "config.ron"
    assert settings.backup_retention == 5
    assert settings.backup_on_startup is True
    assert settings.log_format == "text"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("AEGIS_APP_ROOT", str(tmp_path / "root"))
    monkeypatch.setenv("AEGIS_BACKUP_RETENTION", "3")
    monkeypatch.setenv("AEGIS_LOG_FORMAT", "JSON")
    settings = Settings(_env_file=None)
    assert settings.backup_retention == 3
    assert settings.log_format == "json"
    assert settings.layout().config_path == tmp_path / "root" / "config.ron"


def test_layout_expands_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    layout = Settings(_env_file=None).layout()
    assert layout.app_root == tmp_path / ".securechat"


@pytest.mark.parametrize("env,value", [
    ("AEGIS_BACKUP_RETENTION", "0"),
    ("AEGIS_LOG_FORMAT", "xml"),
])
def test_invalid_values_rejected(monkeypatch, env, value):
    monkeypatch.setenv(env, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
