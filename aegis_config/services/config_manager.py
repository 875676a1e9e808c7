"""Config Manager - single startup entry point sequencing the configuration lifecycle.

Invariants:
    - Stage order is fixed: create_directories -> setup_themes -> setup_config -> rotate_backups
    - The first failing critical stage (directories, themes, config) raises and
      later stages do not run
    - Backup stage failures are logged and recorded in the report, never raised
    - Every component receives the same injected ConfigLayout

Design Decisions:
    - Returns an InitializationReport instead of None: the host gets the effective
      AppConfig plus what was touched, without re-reading the disk
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from aegis_config.config import Settings
from aegis_config.core.domain_types import DEFAULT_BACKUP_RETENTION, LifecycleStage
from aegis_config.core.errors import ConfigError
from aegis_config.core.paths import ConfigLayout
from aegis_config.infrastructure.filesystem import ensure_directory
from aegis_config.schemas.app_config import AppConfig
from aegis_config.services.backup_manager import BackupManager
from aegis_config.services.config_repair import ConfigRepairPipeline, RepairReport
from aegis_config.services.theme_seeder import ThemeSeeder

logger = logging.getLogger(__name__)


@dataclass
class InitializationReport:
    directories: list[Path] = field(default_factory=list)
    themes_seeded: list[str] = field(default_factory=list)
    repair: RepairReport | None = None
    backup_path: Path | None = None
    backups_removed: list[Path] = field(default_factory=list)
    backup_error: ConfigError | None = None

    @property
    def config(self) -> AppConfig | None:
        return self.repair.config if self.repair else None


class ConfigManager:
    """Runs directory provisioning, theme seeding, config repair and backup rotation."""

    def __init__(
        self,
        layout: ConfigLayout,
        backup_retention: int = DEFAULT_BACKUP_RETENTION,
        backup_on_startup: bool = True,
        clock: Callable[[], float] = time.time,
        theme_seeder: ThemeSeeder | None = None,
    ):
        self.layout = layout
        self.backup_on_startup = backup_on_startup
        self.theme_seeder = theme_seeder or ThemeSeeder(layout)
        self.pipeline = ConfigRepairPipeline(layout, clock=clock)
        self.backups = BackupManager(layout, retention=backup_retention, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfigManager":
        return cls(
            settings.layout(),
            backup_retention=settings.backup_retention,
            backup_on_startup=settings.backup_on_startup,
        )

    def initialize(self) -> InitializationReport:
        """Raises ConfigError from the first failing critical stage."""
        report = InitializationReport()
        report.directories = self.create_directories()
        report.themes_seeded = self.setup_themes()
        report.repair = self.setup_config()
        self.rotate_backups(report)
        logger.info(
            "Configuration initialized",
            extra={"outcome": report.repair.outcome.value},
        )
        return report

    def create_directories(self) -> list[Path]:
        dirs = list(self.layout.required_directories())
        for directory in dirs:
            try:
                ensure_directory(directory)
            except ConfigError as e:
                e.context.stage = LifecycleStage.DIRECTORIES.value
                raise
        return dirs

    def setup_themes(self) -> list[str]:
        return self.theme_seeder.seed()

    def setup_config(self) -> RepairReport:
        return self.pipeline.run()

    def rotate_backups(self, report: InitializationReport) -> None:
        try:
            if self.backup_on_startup:
                report.backup_path = self.backups.snapshot()
            report.backups_removed = self.backups.rotate()
        except ConfigError as e:
            e.context.stage = LifecycleStage.BACKUPS.value
            report.backup_error = e
            logger.warning(
                f"Backup rotation failed, continuing: {e}",
                extra={"error_code": e.code, "error": e.to_dict()["error"]},
            )
