"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), single instance per process
    - Paths stay logical here ("~/..."); expansion happens in core/paths.py
    - backup_retention >= 1

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - AEGIS_ prefix keeps the host's own environment variables out of the way
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aegis_config.core.domain_types import DEFAULT_BACKUP_RETENTION
from aegis_config.core.paths import ConfigLayout


class Settings(BaseSettings):
    """Lifecycle settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AEGIS_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Layout
    app_root: str = "~/.securechat"
    themes_dir: str = "assets/themes"
    config_filename: str = "config.ron"

    # Backups
    backup_retention: int = Field(default=DEFAULT_BACKUP_RETENTION, ge=1)
    backup_on_startup: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    def layout(self) -> ConfigLayout:
        return ConfigLayout.from_logical(
            self.themes_dir, self.app_root, self.config_filename,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
