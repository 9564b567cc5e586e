"""
Pydantic validators for environment configuration.
"""

from typing import FrozenSet, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..status import StatusCode, StatusKind


def parse_retry_on(value: str) -> FrozenSet[StatusCode]:
    """
    Parse a comma-separated list of classifications.

    Items are either numeric HTTP statuses or category names.

    Example:
        >>> sorted(str(s) for s in parse_retry_on("503, timed_out"))
        ['other(503)', 'timed_out']
    """
    codes = set()
    for item in value.split(','):
        item = item.strip()
        if not item:
            continue
        if item.isdigit():
            codes.add(StatusCode.from_raw(int(item)))
            continue
        try:
            kind = StatusKind(item.lower())
        except ValueError:
            raise ValueError(f"unknown status classification: {item!r}") from None
        if kind is StatusKind.OTHER:
            raise ValueError("'other' requires a numeric status")
        codes.add(getattr(StatusCode, kind.name))
    return frozenset(codes)


class RetrySettings(BaseModel):
    """Retry configuration from environment."""

    max_attempts: int = Field(default=0, ge=0, le=10, description="Maximum restarts")
    retry_on: str = Field(default="", description="Comma-separated statuses or categories")

    @field_validator('retry_on')
    @classmethod
    def validate_retry_on(cls, v: str) -> str:
        parse_retry_on(v)
        return v


class LoggingSettings(BaseModel):
    """Logging configuration from environment."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    format: Literal["json", "text", "colored"] = Field(default="text")
    enable_console: bool = Field(default=True)
    enable_file: bool = Field(default=False)
    file_path: Optional[str] = None
    max_bytes: int = Field(default=10 * 1024 * 1024, gt=0, description="10MB")
    backup_count: int = Field(default=5, ge=0)
    enable_correlation_id: bool = Field(default=True)

    @field_validator('file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        """Validate file_path is required when enable_file=True."""
        if info.data.get('enable_file') and not v:
            raise ValueError("file_path is required when enable_file=True")
        return v


class ResolverSettings(BaseSettings):
    """
    Resolver configuration from environment variables.

    Reads from:
    1. Environment variables (HTTP_RESOLVER_*)
    2. .env file
    3. Defaults

    Example .env file:
        HTTP_RESOLVER_DATE_STRATEGY=seconds_since_1970
        HTTP_RESOLVER_RETRY_MAX_ATTEMPTS=2
        HTTP_RESOLVER_RETRY_ON=timed_out,request_timeout,503
        HTTP_RESOLVER_LOG_ENABLED=true
        HTTP_RESOLVER_LOG_FORMAT=json

    Usage:
        >>> settings = ResolverSettings()
        >>> settings.date_strategy
        'iso8601'
    """

    model_config = SettingsConfigDict(
        env_prefix='HTTP_RESOLVER_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Decoding
    date_strategy: Literal[
        "iso8601", "seconds_since_1970", "milliseconds_since_1970", "formatted"
    ] = Field(default="iso8601")
    date_format: Optional[str] = Field(
        default=None, validate_default=True, description="strptime pattern for 'formatted'"
    )

    # Retry
    retry_max_attempts: int = Field(default=0, ge=0, le=10)
    retry_on: str = Field(default="")

    # Logging (disabled by default: library stays silent)
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = None
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)
    log_enable_correlation_id: bool = Field(default=True)

    @field_validator('date_format')
    @classmethod
    def validate_date_format(cls, v: Optional[str], info) -> Optional[str]:
        """Validate date_format is given for the 'formatted' strategy."""
        if info.data.get('date_strategy') == 'formatted' and not v:
            raise ValueError("date_format is required when date_strategy=formatted")
        return v

    @field_validator('retry_on')
    @classmethod
    def validate_retry_on(cls, v: str) -> str:
        parse_retry_on(v)
        return v

    def to_retry_settings(self) -> RetrySettings:
        """Convert to RetrySettings."""
        return RetrySettings(
            max_attempts=self.retry_max_attempts,
            retry_on=self.retry_on,
        )

    def to_logging_settings(self) -> Optional[LoggingSettings]:
        """Convert to LoggingSettings if logging enabled."""
        if not self.log_enabled:
            return None
        if not self.log_enable_file and not self.log_enable_console:
            return None

        return LoggingSettings(
            level=self.log_level,
            format=self.log_format,
            enable_console=self.log_enable_console,
            enable_file=self.log_enable_file,
            file_path=self.log_file_path,
            max_bytes=self.log_max_bytes,
            backup_count=self.log_backup_count,
            enable_correlation_id=self.log_enable_correlation_id,
        )
