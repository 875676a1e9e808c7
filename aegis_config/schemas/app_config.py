"""Configuration Schemas - Pydantic models for the persisted config and theme assets.

Invariants:
    - AppConfig is structural only: 0 <= key_rotation <= 2**64 - 1 (u64), any string theme
    - The key_rotation > 0 invariant lives in core/validation.py, NOT here, so that
      a zero value still decodes and can be salvaged
    - Strict mode: no coercion from strings or bools ("true" is not a bool)
    - Unknown keys are ignored on decode

Design Decisions:
    - Pydantic over hand-written checks: type errors come back as structured
      e.errors() entries that map onto ConfigParseError/ConfigValidationError
"""

from pydantic import BaseModel, ConfigDict, Field

from aegis_config.core.domain_types import (
    DEFAULT_AUTO_CONNECT,
    DEFAULT_KEY_ROTATION_SECONDS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_THEME,
    MAX_KEY_ROTATION_SECONDS,
)


class AppConfig(BaseModel):
    """Persisted application configuration (config.ron)."""

    model_config = ConfigDict(strict=True, extra="ignore")

    theme: str
    log_level: str
    auto_connect: bool
    key_rotation: int = Field(ge=0, le=MAX_KEY_ROTATION_SECONDS)  # seconds

    @classmethod
    def default(cls) -> "AppConfig":
        """Hardcoded default written when nothing can be loaded or salvaged."""
        return cls(
            theme=DEFAULT_THEME,
            log_level=DEFAULT_LOG_LEVEL,
            auto_connect=DEFAULT_AUTO_CONNECT,
            key_rotation=DEFAULT_KEY_ROTATION_SECONDS,
        )


class Theme(BaseModel):
    """Display styling record: four required string fields, never interpreted."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    text: str
    background: str
    accent: str
    borders: str
