"""Config Manager - stage ordering, short-circuiting, non-fatal backups.

Tests cover:
    - Fresh root: all directories, both themes, one default config, one backup
    - Second run loads the config and seeds nothing
    - Directory failure stops before themes/config run
    - Theme failure stops before the config stage
    - Backup failures are recorded, not raised
    - Retention is applied at startup
"""

import json
import logging
import os

import pytest

import aegis_config.services.backup_manager as backup_module
from aegis_config.config import Settings
from aegis_config.core.config_codec import decode_config
from aegis_config.core.domain_types import RepairOutcome
from aegis_config.core.errors import ConfigIOError, ConfigValidationError
from aegis_config.core.paths import ConfigLayout
from aegis_config.schemas.app_config import AppConfig
from aegis_config.services.config_manager import ConfigManager
from aegis_config.services.theme_seeder import ThemeSeeder


def test_fresh_initialization(layout, clock):
    report = ConfigManager(layout, clock=clock).initialize()

    for directory in layout.required_directories():
        assert directory.is_dir()
    assert report.themes_seeded == ["dark", "light"]
    assert report.repair.outcome == RepairOutcome.CREATED_DEFAULT
    assert report.config == AppConfig.default()
    assert [p.name for p in layout.app_root.iterdir() if p.is_file()] == ["config.ron"]
    assert decode_config(layout.config_path.read_text()) == AppConfig.default()
    assert report.backup_path == layout.backups_dir / "config_1700000000.ron.bak"
    assert report.backup_error is None


def test_second_run_loads_existing(layout, clock):
    ConfigManager(layout, clock=clock).initialize()
    clock.advance(5)
    report = ConfigManager(layout, clock=clock).initialize()

    assert report.themes_seeded == []
    assert report.repair.outcome == RepairOutcome.LOADED
    assert len(list(layout.backups_dir.iterdir())) == 2


def test_directory_failure_short_circuits(tmp_path, clock):
    blocker = tmp_path / "app"
    blocker.write_text("not a directory")
    layout = ConfigLayout(themes_dir=tmp_path / "themes", app_root=blocker)

    with pytest.raises(ConfigIOError) as exc:
        ConfigManager(layout, clock=clock).initialize()
    assert exc.value.context.stage == "create_directories"
    assert not (tmp_path / "themes" / "dark.json").exists()


def test_theme_failure_skips_config_stage(layout, clock):
    bad = ThemeSeeder(layout, themes={"dark": json.dumps({"text": "x"})})
    manager = ConfigManager(layout, clock=clock, theme_seeder=bad)

    with pytest.raises(ConfigValidationError):
        manager.initialize()
    assert not layout.config_path.exists()


def test_backup_failure_is_not_fatal(layout, clock, monkeypatch, caplog):
    def fail_copy(src, dst):
        raise ConfigIOError("Failed to copy file: Read-only file system")

    monkeypatch.setattr(backup_module, "copy_file", fail_copy)
    with caplog.at_level(logging.WARNING):
        report = ConfigManager(layout, clock=clock).initialize()

    assert report.repair.outcome == RepairOutcome.CREATED_DEFAULT
    assert report.backup_path is None
    assert report.backup_error.context.stage == "rotate_backups"
    warning = next(r for r in caplog.records if r.levelno == logging.WARNING)
    assert warning.error["code"] == "CONFIG_IO_ERROR"
    assert warning.error["context"]["stage"] == "rotate_backups"


def test_startup_enforces_retention(layout, clock):
    layout.backups_dir.mkdir(parents=True)
    for i in range(7):
        path = layout.backups_dir / f"config_{i}.ron.bak"
        path.write_text("old")
        os.utime(path, (1_000_000 + i, 1_000_000 + i))

    report = ConfigManager(layout, clock=clock).initialize()

    remaining = list(layout.backups_dir.iterdir())
    assert len(remaining) == 5
    assert report.backup_path in remaining
    assert len(report.backups_removed) == 3


def test_backup_on_startup_disabled(layout, clock):
    report = ConfigManager(layout, backup_on_startup=False, clock=clock).initialize()
    assert report.backup_path is None
    assert list(layout.backups_dir.iterdir()) == []


def test_from_settings(tmp_path):
    settings = Settings(
        _env_file=None,
        app_root=str(tmp_path / "root"),
        themes_dir=str(tmp_path / "themes"),
        backup_retention=2,
        backup_on_startup=False,
    )
    manager = ConfigManager.from_settings(settings)
    assert manager.layout.config_path == tmp_path / "root" / "config.ron"
    assert manager.backups.retention == 2
    assert manager.backup_on_startup is False
