"""
Structured logger for HTTP Resolver.
"""

import logging
from typing import List, Optional, Any

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class ResolverLogger:
    """
    Logger with structured keyword fields.

    Sensitive values in keyword fields are masked before they reach a
    handler. The instance owns only the handlers it attaches: ``close()``
    detaches them and restores the level and ``propagate`` flag the
    underlying logger had before, so other instances sharing the name
    keep logging.

    Example:
        >>> logger = ResolverLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Response received", method="GET", status=200)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "http_resolver"):
        """
        Initialize logger.

        Args:
            config: Logging configuration (uses defaults if None)
            name: Logger name
        """
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False
        self._handlers: List[logging.Handler] = []

        level = self._get_level(self.config.level)

        self._logger = logging.getLogger(name)
        self._saved_level = self._logger.level
        self._saved_propagate = self._logger.propagate

        self._logger.setLevel(level)
        self._logger.propagate = False

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._attach(create_console_handler(
                level=level,
                formatter=formatter,
                filters=filters
            ))

        if self.config.enable_file and self.config.file_path:
            self._attach(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    def _attach(self, handler: logging.Handler) -> None:
        self._handlers.append(handler)
        self._logger.addHandler(handler)

    @property
    def handlers(self) -> List[logging.Handler]:
        """Handlers attached by this instance."""
        return list(self._handlers)

    def _get_level(self, level: LogLevel) -> int:
        """Convert LogLevel enum to logging level int."""
        return getattr(logging, level.value)

    def log(self, level: int, message: str, **kwargs: Any) -> None:
        """
        Log message with extra fields at a numeric level.

        Example:
            >>> logger.log(logging.INFO, "Retrying", attempt=2)
        """
        self._logger.log(level, message, extra=mask_sensitive_data(kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """
        Log error with traceback. Call from an exception handler.
        """
        self._logger.exception(message, extra=mask_sensitive_data(kwargs))

    def close(self) -> None:
        """
        Flush and close own handlers, restore level and propagate. Idempotent.

        Example:
            >>> logger.close()
            >>> logger.close()  # Safe to call again
        """
        if self._closed:
            return

        for handler in self._handlers:
            self._logger.removeHandler(handler)
            try:
                handler.flush()
                handler.close()
            except Exception:
                # Ignore cleanup errors
                pass
        self._handlers.clear()

        self._logger.setLevel(self._saved_level)
        self._logger.propagate = self._saved_propagate
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
