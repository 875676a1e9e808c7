"""Path Resolution - logical paths to real paths, and the fixed on-disk layout.

Invariants:
    - expand_path is PURE apart from reading the home directory; it never fails
      (an unmatched "~user" prefix is returned literally)
    - ConfigLayout is the single injected root: no component hardcodes a path
    - Quarantine and backup names embed whole epoch seconds

Design Decisions:
    - Frozen dataclass over module constants: tests build a layout on tmp_path
"""

import os
from dataclasses import dataclass
from pathlib import Path


QUARANTINE_SUFFIX = ".broken"
BACKUP_SUFFIX = ".bak"


def expand_path(logical: str) -> str:
    """Expand a leading "~" or "~user" into the home directory."""
    return os.path.expanduser(logical)


@dataclass(frozen=True)
class ConfigLayout:
    """Every directory and file the lifecycle touches, derived from two roots."""
    themes_dir: Path
    app_root: Path
    config_filename: str = "config.ron"

    @classmethod
    def from_logical(
        cls, themes_dir: str, app_root: str, config_filename: str = "config.ron",
    ) -> "ConfigLayout":
        return cls(
            themes_dir=Path(expand_path(themes_dir)),
            app_root=Path(expand_path(app_root)),
            config_filename=config_filename,
        )

    @property
    def config_path(self) -> Path:
        return self.app_root / self.config_filename

    @property
    def keys_dir(self) -> Path:
        return self.app_root / "keys"

    @property
    def history_dir(self) -> Path:
        return self.app_root / "history"

    @property
    def backups_dir(self) -> Path:
        return self.app_root / "backups"

    @property
    def quarantine_dir(self) -> Path:
        return self.app_root / "quarantine"

    def required_directories(self) -> tuple[Path, ...]:
        return (
            self.themes_dir,
            self.keys_dir,
            self.history_dir,
            self.backups_dir,
            self.quarantine_dir,
        )

    def theme_path(self, name: str) -> Path:
        return self.themes_dir / f"{name}.json"

    def quarantine_path(self, epoch_seconds: int) -> Path:
        """config_<epoch>.ron.broken inside the quarantine directory."""
        return self.quarantine_dir / _stamped(self.config_filename, epoch_seconds, QUARANTINE_SUFFIX)

    def backup_path(self, epoch_seconds: int) -> Path:
        """config_<epoch>.ron.bak inside the backups directory."""
        return self.backups_dir / _stamped(self.config_filename, epoch_seconds, BACKUP_SUFFIX)


def _stamped(filename: str, epoch_seconds: int, suffix: str) -> str:
    stem, dot, ext = filename.partition(".")
    return f"{stem}_{epoch_seconds}{dot}{ext}{suffix}"
