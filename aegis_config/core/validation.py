"""Type Validation & Salvage - theme schema, config invariants, salvage repairs.

Invariants:
    - validate_theme raises ConfigValidationError for malformed JSON too, not Parse
    - check_config_invariants enforces exactly one rule: key_rotation > 0
    - salvage only rewrites fields that violate invariants; every other field is kept
    - All functions are PURE: return values, never touch the filesystem

Design Decisions:
    - SalvageResult as a tagged value: "nothing to salvage" (UNDECODABLE) stays
      distinct from "could not even read" (UNREADABLE, built by the shell)
"""

from dataclasses import dataclass

from pydantic import ValidationError

from aegis_config.core.config_codec import decode_config
from aegis_config.core.domain_types import (
    DEFAULT_KEY_ROTATION_SECONDS,
    DEFAULT_THEME,
    SalvageStatus,
)
from aegis_config.core.errors import ConfigParseError, ConfigValidationError
from aegis_config.schemas.app_config import AppConfig, Theme


@dataclass(frozen=True)
class SalvageResult:
    status: SalvageStatus
    config: AppConfig | None = None
    reason: str | None = None

    @property
    def salvaged(self) -> bool:
        return self.status == SalvageStatus.SALVAGED


# ─── Theme schema ────────────────────────────────────────────────

def validate_theme(content: str) -> Theme:
    """Decode theme JSON into Theme; any failure is a Validation error."""
    try:
        return Theme.model_validate_json(content)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        field = ".".join(str(loc) for loc in first.get("loc", ())) or None
        raise ConfigValidationError(
            f"Invalid theme: {first.get('msg', str(e))}", field=field,
        ) from e


# ─── Config invariants ───────────────────────────────────────────

def check_config_invariants(config: AppConfig) -> AppConfig:
    if config.key_rotation == 0:
        raise ConfigValidationError(
            "Key rotation must be > 0", field="key_rotation",
        )
    return config


def load_config_text(text: str) -> AppConfig:
    """Strict load: decode (Parse errors) then invariant check (Validation errors)."""
    return check_config_invariants(decode_config(text))


# ─── Salvage ─────────────────────────────────────────────────────

def repair_invariants(config: AppConfig) -> AppConfig:
    """Replace invalid fields with defaults, keep the rest as-is."""
    fixes: dict[str, object] = {}
    if config.key_rotation == 0:
        fixes["key_rotation"] = DEFAULT_KEY_ROTATION_SECONDS
    if not config.theme:
        fixes["theme"] = DEFAULT_THEME
    return config.model_copy(update=fixes) if fixes else config


def salvage_config_text(text: str) -> SalvageResult:
    """Best-effort decode of quarantined content. Never raises."""
    try:
        decoded = decode_config(text)
    except ConfigParseError as e:
        return SalvageResult(SalvageStatus.UNDECODABLE, reason=e.message)
    return SalvageResult(SalvageStatus.SALVAGED, config=repair_invariants(decoded))
