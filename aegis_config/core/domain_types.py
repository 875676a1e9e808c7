"""Domain Types - enums and constants shared across the lifecycle.

Invariants:
    - All lifecycle states encoded as Enums, no raw string matching
    - DEFAULT_KEY_ROTATION_SECONDS and DEFAULT_THEME are the single source of truth
      for both the hardcoded default config and salvage repairs
"""

from enum import Enum


# ─── Constants ───────────────────────────────────────────────────

BUILTIN_THEMES: tuple[str, ...] = ("dark", "light")
DEFAULT_THEME: str = "dark"
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_AUTO_CONNECT: bool = True
DEFAULT_KEY_ROTATION_SECONDS: int = 86_400
MAX_KEY_ROTATION_SECONDS: int = 2**64 - 1  # u64
DEFAULT_BACKUP_RETENTION: int = 5


# ─── Enums ───────────────────────────────────────────────────────

class RepairOutcome(str, Enum):
    """Terminal success states of the repair pipeline."""
    LOADED = "loaded"
    CREATED_DEFAULT = "created_default"
    REPAIRED = "repaired"


class SalvageStatus(str, Enum):
    """Salvage result tag: only SALVAGED carries a record."""
    SALVAGED = "salvaged"
    UNDECODABLE = "undecodable"
    UNREADABLE = "unreadable"


class LifecycleStage(str, Enum):
    """Orchestrator stages, in execution order."""
    DIRECTORIES = "create_directories"
    THEMES = "setup_themes"
    CONFIG = "setup_config"
    BACKUPS = "rotate_backups"
