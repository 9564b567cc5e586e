"""
Logging system for HTTP Resolver.

Each ResponseResolver built with ``ResolverContext(logging=...)`` owns its
ResolverLogger; there is no process-wide logger.

Example:
    >>> from http_resolver.core.logging import LoggingConfig, ResolverLogger
    >>>
    >>> config = LoggingConfig.create(level="DEBUG", format="json")
    >>> with ResolverLogger(config) as logger:
    ...     logger.info("Response received", method="GET", status=200)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ResolverLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ResolverLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
