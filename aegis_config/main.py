"""Host Bootstrap - initialize configuration at process startup.

Invariants:
    - bootstrap() NEVER raises ConfigError: on failure it logs and returns the
      in-memory default AppConfig so the host always starts
    - Logging is configured from Settings before any stage runs
"""

import logging

from aegis_config.config import Settings, get_settings
from aegis_config.core.errors import ConfigError
from aegis_config.infrastructure.observability import setup_logging
from aegis_config.schemas.app_config import AppConfig
from aegis_config.services.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def initialize_configuration(settings: Settings | None = None) -> AppConfig:
    """Run the lifecycle; fall back to the in-memory default on ConfigError."""
    settings = settings or get_settings()
    try:
        report = ConfigManager.from_settings(settings).initialize()
    except ConfigError as e:
        logger.error(
            f"Failed to initialize config: {e}",
            extra={"error_code": e.code, "error": e.to_dict()["error"]},
        )
        return AppConfig.default()
    return report.config


def bootstrap(settings: Settings | None = None) -> AppConfig:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    return initialize_configuration(settings)


def main() -> int:
    config = bootstrap()
    logger.info(
        f"theme={config.theme} log_level={config.log_level} "
        f"auto_connect={config.auto_connect} key_rotation={config.key_rotation}s",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
