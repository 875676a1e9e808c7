"""Backup Manager - timestamped config snapshots with bounded retention.

Invariants:
    - Snapshots are named config_<epoch>.ron.bak; a second snapshot within the
      same second overwrites the first (best-effort, not a durability guarantee)
    - After rotate(), at most `retention` files remain: the most recently modified
    - Entries whose metadata cannot be read sort as OLDEST and are pruned first;
      they never crash the sort
"""

import logging
import time
from pathlib import Path
from typing import Callable

from aegis_config.core.domain_types import DEFAULT_BACKUP_RETENTION
from aegis_config.core.paths import ConfigLayout
from aegis_config.infrastructure.filesystem import (
    copy_file, list_files, modified_time, remove_file,
)

logger = logging.getLogger(__name__)


class BackupManager:
    """Snapshots layout.config_path into layout.backups_dir and prunes old copies."""

    def __init__(
        self,
        layout: ConfigLayout,
        retention: int = DEFAULT_BACKUP_RETENTION,
        clock: Callable[[], float] = time.time,
    ):
        if retention < 1:
            raise ValueError("retention must be >= 1")
        self.layout = layout
        self.retention = retention
        self._clock = clock

    def snapshot(self) -> Path | None:
        """Copy the current config into the backups directory. None if no config."""
        source = self.layout.config_path
        if not source.exists():
            logger.debug("No config to back up", extra={"path": str(source)})
            return None
        target = self.layout.backup_path(int(self._clock()))
        copy_file(source, target)
        logger.info("Config backed up", extra={"path": str(target)})
        return target

    def rotate(self) -> list[Path]:
        """Delete the oldest backups until `retention` remain. Returns removed paths."""
        entries = list_files(self.layout.backups_dir)
        excess = len(entries) - self.retention
        if excess <= 0:
            return []

        entries.sort(key=_age_key)
        removed: list[Path] = []
        for old in entries[:excess]:
            remove_file(old)
            removed.append(old)
        logger.info(
            f"Pruned {len(removed)} backup(s), kept {self.retention}",
            extra={"removed": [p.name for p in removed]},
        )
        return removed


def _age_key(path: Path) -> tuple[float, str]:
    mtime = modified_time(path)
    return (float("-inf") if mtime is None else mtime, path.name)
