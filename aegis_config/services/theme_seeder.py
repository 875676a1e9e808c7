"""Theme Seeder - writes the built-in theme assets exactly once.

Invariants:
    - An existing file at a theme path is NEVER overwritten (user edits survive)
    - Embedded content is validated BEFORE it is written; an invalid asset raises
      ConfigValidationError and nothing is written for that theme
    - Idempotent: a second run over the same layout writes nothing
"""

import logging
from importlib import resources

from aegis_config.core.domain_types import BUILTIN_THEMES, LifecycleStage
from aegis_config.core.errors import ConfigError, ConfigIOError, ErrorContext
from aegis_config.core.paths import ConfigLayout
from aegis_config.core.validation import validate_theme
from aegis_config.infrastructure.filesystem import write_text_atomic

logger = logging.getLogger(__name__)

_ASSET_PACKAGE = "aegis_config.assets.default_themes"


def load_default_themes() -> dict[str, str]:
    """Read the embedded theme JSON shipped as package data."""
    themes: dict[str, str] = {}
    for name in BUILTIN_THEMES:
        try:
            themes[name] = (
                resources.files(_ASSET_PACKAGE)
                .joinpath(f"{name}.json")
                .read_text(encoding="utf-8")
            )
        except OSError as e:
            raise ConfigIOError(
                f"Embedded theme asset '{name}' is missing", os_error=e,
                context=ErrorContext(stage=LifecycleStage.THEMES.value),
            ) from e
    return themes


class ThemeSeeder:
    """Seeds missing theme files under layout.themes_dir."""

    def __init__(self, layout: ConfigLayout, themes: dict[str, str] | None = None):
        self.layout = layout
        self._themes = themes

    @property
    def themes(self) -> dict[str, str]:
        if self._themes is None:
            self._themes = load_default_themes()
        return self._themes

    def seed(self) -> list[str]:
        """Write every missing theme. Returns the names actually written."""
        seeded: list[str] = []
        for name, content in self.themes.items():
            path = self.layout.theme_path(name)
            if path.exists():
                logger.debug(f"Theme '{name}' present, skipping", extra={"path": str(path)})
                continue
            try:
                validate_theme(content)
                write_text_atomic(path, content)
            except ConfigError as e:
                e.context.path = e.context.path or str(path)
                e.context.stage = LifecycleStage.THEMES.value
                raise
            logger.info(f"Seeded theme '{name}'", extra={"path": str(path)})
            seeded.append(name)
        return seeded
