"""Root conftest - shared fixtures for the configuration lifecycle tests.

Invariants:
    - No test touches the real home directory: every layout lives under tmp_path
    - AEGIS_* environment variables are cleared and the settings cache reset
    - FakeClock gives deterministic epoch seconds for quarantine/backup names
"""

import os

import pytest

from aegis_config.config import get_settings
from aegis_config.core.paths import ConfigLayout


class FakeClock:
    """Callable clock advancing only when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("AEGIS_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def layout(tmp_path) -> ConfigLayout:
    return ConfigLayout(
        themes_dir=tmp_path / "assets" / "themes",
        app_root=tmp_path / "app",
    )


@pytest.fixture
def provisioned_layout(layout) -> ConfigLayout:
    for directory in layout.required_directories():
        directory.mkdir(parents=True, exist_ok=True)
    return layout


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
