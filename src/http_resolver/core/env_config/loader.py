"""
Configuration loader from environment variables and .env files.
"""

from typing import Optional

from pydantic import ValidationError

from ..config import RetryConfig, ResolverContext
from ..dates import DateDecodingStrategy
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from .validator import ResolverSettings, parse_retry_on
from .profiles import ProfileType, get_env_file_path


def _load_settings(profile: Optional[ProfileType], env_file: Optional[str]) -> ResolverSettings:
    if env_file is None:
        env_file = get_env_file_path(profile)
    try:
        return ResolverSettings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def load_from_env(
    profile: Optional[ProfileType] = None,
    env_file: Optional[str] = None,
    **overrides
) -> ResolverContext:
    """
    Load ResolverContext from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (hooks, date_strategy, logging)
    2. Environment variables (HTTP_RESOLVER_*)
    3. .env file (profile-specific or default)
    4. Defaults

    Args:
        profile: Profile to load (development/staging/production)
        env_file: Custom .env file path (overrides profile)
        **overrides: ResolverContext fields to set explicitly

    Returns:
        ResolverContext instance

    Example:
        >>> context = load_from_env(profile="production", unauthorized_hook=session.logout)
    """
    settings = _load_settings(profile, env_file)

    date_strategy = DateDecodingStrategy.from_name(settings.date_strategy, settings.date_format)

    logging_config = None
    logging_settings = settings.to_logging_settings()
    if logging_settings:
        logging_config = LoggingConfig.create(
            level=logging_settings.level,
            format=logging_settings.format,
            enable_console=logging_settings.enable_console,
            enable_file=logging_settings.enable_file,
            file_path=logging_settings.file_path,
            max_bytes=logging_settings.max_bytes,
            backup_count=logging_settings.backup_count,
            enable_correlation_id=logging_settings.enable_correlation_id,
        )

    return ResolverContext(
        unauthorized_hook=overrides.get('unauthorized_hook'),
        success_observer=overrides.get('success_observer'),
        date_strategy=overrides.get('date_strategy', date_strategy),
        logging=overrides.get('logging', logging_config),
    )


def load_retry_config_from_env(
    profile: Optional[ProfileType] = None,
    env_file: Optional[str] = None,
    **overrides
) -> RetryConfig:
    """
    Load the default RetryConfig from environment variables.

    Example:
        >>> # HTTP_RESOLVER_RETRY_MAX_ATTEMPTS=2 HTTP_RESOLVER_RETRY_ON=timed_out
        >>> load_retry_config_from_env()
        RetryConfig(max_attempts=2, retry_on=frozenset({StatusCode(kind=<StatusKind.TIMED_OUT: 'timed_out'>, raw=None)}))
    """
    retry = _load_settings(profile, env_file).to_retry_settings()

    return RetryConfig(
        max_attempts=overrides.get('max_attempts', retry.max_attempts),
        retry_on=overrides.get('retry_on', parse_retry_on(retry.retry_on)),
    )
