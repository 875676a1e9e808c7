"""Config Codec - AppConfig to and from its on-disk text form.

Invariants:
    - encode_config -> decode_config round-trips every AppConfig unchanged
    - decode_config raises ConfigParseError for ANY structural failure
      (YAML syntax, non-mapping root, missing field, wrong type, negative int)
    - decode_config never checks semantic invariants (see core/validation.py)

Design Decisions:
    - YAML via PyYAML safe_load/safe_dump: human-editable, no arbitrary object tags
    - Block style, field order preserved (sort_keys=False) so diffs stay readable
"""

import yaml
from pydantic import ValidationError

from aegis_config.core.errors import ConfigParseError
from aegis_config.schemas.app_config import AppConfig


def encode_config(config: AppConfig) -> str:
    """Serialize to YAML text. Pure, no IO."""
    try:
        return yaml.safe_dump(
            config.model_dump(), default_flow_style=False, sort_keys=False,
        )
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to serialize config: {e}") from e


def decode_config(text: str) -> AppConfig:
    """Decode YAML text into AppConfig. Pure, no IO."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Config is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Config root must be a mapping, got {type(data).__name__}",
        )

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(
            f"Config does not match schema: {_describe(e)}",
        ) from e


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    )
