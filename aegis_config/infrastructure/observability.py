"""Structured Logging - one root handler, JSON or text, for startup diagnostics.

Invariants:
    - setup_logging owns at most ONE root handler (named HANDLER_NAME); repeated
      calls reconfigure it in place instead of stacking duplicates
    - JSON records carry the record's own creation time, level, logger, message
    - Lifecycle extras (path, stage, error_code, error, outcome, removed) are
      surfaced only when set; the "error" extra is a ConfigError.to_dict() envelope
"""

import json
import logging
from datetime import datetime, timezone

HANDLER_NAME = "aegis_config"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
LIFECYCLE_EXTRAS = ("path", "stage", "error_code", "error", "outcome", "removed")


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, record.__dict__[key])
            for key in LIFECYCLE_EXTRAS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _installed_handler() -> logging.Handler | None:
    return next(
        (h for h in logging.root.handlers if h.get_name() == HANDLER_NAME), None,
    )


def setup_logging(level: str = "INFO", fmt: str = "text") -> logging.Handler:
    """Install (or reconfigure) the package's root handler. Returns it."""
    handler = _installed_handler()
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        logging.root.addHandler(handler)
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
