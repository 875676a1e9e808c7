"""Error Hierarchy - typed, categorized exceptions for configuration lifecycle failures.

Invariants:
    - Every error has a code (str), kind (ConfigErrorKind), severity (ErrorSeverity)
    - kind is exactly one of io / parse / validation
    - ConfigIOError always chains the originating OSError (raise ... from)
    - to_dict() produces the envelope surfaced in logs

Design Decisions:
    - Single hierarchy with ConfigError base: callers catch one type, branch on kind
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ConfigErrorKind(str, Enum):
    """The three failure families of the configuration lifecycle."""
    IO = "io"
    PARSE = "parse"
    VALIDATION = "validation"


@dataclass
class ErrorContext:
    """Where an error happened: file path and lifecycle stage."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    stage: str | None = None


class ConfigError(Exception):
    """Base exception for all configuration lifecycle errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ConfigErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        if self.context.path:
            return f"{self.message} ({self.context.path})"
        return self.message

    def to_dict(self) -> dict:
        """Structured envelope for logging and host reporting."""
        return {
            "error": {
                "code": self.code,
                "kind": self.kind.value,
                "message": self.message,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "path": self.context.path,
                    "stage": self.context.stage,
                },
            }
        }


class ConfigIOError(ConfigError):
    """Filesystem failure: permissions, missing parent, disk full."""
    def __init__(
        self,
        message: str,
        os_error: OSError | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFIG_IO_ERROR", ConfigErrorKind.IO,
            ErrorSeverity.CRITICAL, context,
        )
        self.os_error = os_error


class ConfigParseError(ConfigError):
    """Content does not decode as the expected structured format."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIG_PARSE_ERROR", ConfigErrorKind.PARSE,
            ErrorSeverity.ERROR, context,
        )


class ConfigValidationError(ConfigError):
    """Content decodes but violates a semantic or schema invariant."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFIG_VALIDATION_ERROR", ConfigErrorKind.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field
