"""
Logging configuration for HTTP Resolver.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional, Mapping, Any

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB

# Fields the resolver attaches to its own records
RESOLVER_FIELDS = frozenset({
    "method",
    "url",
    "status",
    "classification",
    "attempt",
    "max_attempts",
    "elapsed_ms",
    "error_code",
    "error_message",
    "request_id",
    "delay_s",
    "correlation_id",
})


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings of one ResponseResolver.

    At INFO every attempt produces "Response received" and every retry
    "Retrying request"; DEBUG adds delayed-delivery and cancellation
    lines.

    Attributes:
        level: Minimum level
        format: json, text or colored
        enable_console: Write to stdout
        enable_file: Write to a rotating file at ``file_path``
        max_bytes / backup_count: Rotation settings
        enable_correlation_id: Tag lines with the request id being resolved
        extra_fields: Static fields for every line (service, environment).
            Must not reuse the names in RESOLVER_FIELDS.

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json",
        ...                               extra_fields={"service": "mobile-api"})
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = 5
    enable_correlation_id: bool = True
    extra_fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(f"backup_count must be >= 0, got {self.backup_count}")

        clashing = RESOLVER_FIELDS.intersection(self.extra_fields)
        if clashing:
            raise ValueError(f"extra_fields would shadow resolver fields: {sorted(clashing)}")

        object.__setattr__(self, 'extra_fields', MappingProxyType(dict(self.extra_fields)))

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = 5,
        enable_correlation_id: bool = True,
        extra_fields: Optional[Mapping[str, Any]] = None
    ) -> "LoggingConfig":
        """
        Create LoggingConfig from plain strings (case-insensitive).

        Raises:
            ValueError: Unknown level or format
        """
        try:
            log_level = LogLevel(level.upper())
        except ValueError:
            allowed = ", ".join(l.value for l in LogLevel)
            raise ValueError(f"Unknown log level {level!r}, expected one of: {allowed}") from None

        try:
            log_format = LogFormat(format.lower())
        except ValueError:
            allowed = ", ".join(f.value for f in LogFormat)
            raise ValueError(f"Unknown log format {format!r}, expected one of: {allowed}") from None

        return cls(
            level=log_level,
            format=log_format,
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            enable_correlation_id=enable_correlation_id,
            extra_fields=extra_fields or {}
        )
