"""Config Repair Pipeline - load, validate, and on failure quarantine + salvage + recreate.

States:
    ABSENT             -> write hardcoded default                 (CREATED_DEFAULT)
    PRESENT & VALID    -> no-op                                   (LOADED)
    PRESENT & INVALID  -> quarantine -> salvage -> recreate       (REPAIRED)

Invariants:
    - The broken file is MOVED into quarantine before anything else happens;
      its bytes are never modified or deleted
    - Salvage reads the QUARANTINED copy (the original path is vacated by then)
    - Any load failure (Io, Parse, Validation) routes to repair; only failures
      inside repair itself (quarantine move, serialize, write) propagate
    - Recreate writes the salvaged record when there is one, else the default
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from aegis_config.core.config_codec import encode_config
from aegis_config.core.domain_types import LifecycleStage, RepairOutcome, SalvageStatus
from aegis_config.core.errors import ConfigError, ConfigIOError
from aegis_config.core.paths import ConfigLayout
from aegis_config.core.validation import (
    SalvageResult, load_config_text, salvage_config_text,
)
from aegis_config.infrastructure.filesystem import (
    ensure_directory, move_file, read_text, write_text_atomic,
)
from aegis_config.schemas.app_config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    outcome: RepairOutcome
    config: AppConfig
    quarantine_path: Path | None = None
    salvage: SalvageResult | None = None
    load_error: ConfigError | None = None


class ConfigRepairPipeline:
    """Guarantees a loadable config file at layout.config_path."""

    def __init__(self, layout: ConfigLayout, clock: Callable[[], float] = time.time):
        self.layout = layout
        self._clock = clock

    def run(self) -> RepairReport:
        path = self.layout.config_path
        if not path.exists():
            config = AppConfig.default()
            self.write_config(path, config)
            logger.info(
                "Created default config",
                extra={"path": str(path), "outcome": RepairOutcome.CREATED_DEFAULT.value},
            )
            return RepairReport(RepairOutcome.CREATED_DEFAULT, config)

        try:
            config = self.try_load(path)
        except ConfigError as e:
            logger.warning(
                f"Config repair needed: {e}",
                extra={"path": str(path), "error_code": e.code},
            )
            return self.repair(e)
        return RepairReport(RepairOutcome.LOADED, config)

    def try_load(self, path: Path) -> AppConfig:
        """Strict load. Raises ConfigIOError, ConfigParseError or ConfigValidationError."""
        try:
            return load_config_text(read_text(path))
        except ConfigError as e:
            e.context.path = e.context.path or str(path)
            e.context.stage = LifecycleStage.CONFIG.value
            raise

    def repair(self, load_error: ConfigError | None = None) -> RepairReport:
        path = self.layout.config_path
        quarantined = self.quarantine(path)
        salvage = self.salvage(quarantined)
        config = salvage.config if salvage.salvaged else AppConfig.default()
        self.write_config(path, config)
        logger.warning(
            f"Config recreated from {salvage.status.value} content",
            extra={
                "path": str(path),
                "outcome": RepairOutcome.REPAIRED.value,
                "stage": LifecycleStage.CONFIG.value,
            },
        )
        return RepairReport(
            RepairOutcome.REPAIRED, config,
            quarantine_path=quarantined, salvage=salvage, load_error=load_error,
        )

    def quarantine(self, path: Path) -> Path:
        """Move the broken file aside as config_<epoch>.ron.broken."""
        ensure_directory(self.layout.quarantine_dir)
        target = move_file(path, self.layout.quarantine_path(int(self._clock())))
        logger.warning("Broken config quarantined", extra={"path": str(target)})
        return target

    def salvage(self, quarantined: Path) -> SalvageResult:
        try:
            text = read_text(quarantined)
        except ConfigIOError as e:
            logger.warning(f"Quarantined config unreadable: {e}")
            return SalvageResult(SalvageStatus.UNREADABLE, reason=e.message)
        result = salvage_config_text(text)
        if not result.salvaged:
            logger.info(f"Nothing to salvage: {result.reason}")
        return result

    def write_config(self, path: Path, config: AppConfig) -> None:
        write_text_atomic(path, encode_config(config))
