"""
Environment configuration for HTTP Resolver.

Example:
    >>> from http_resolver.core.env_config import load_from_env
    >>>
    >>> context = load_from_env(profile="production")
    >>> resolver = ResponseResolver(RequestsTransport(), context=context)
"""

from .loader import load_from_env, load_retry_config_from_env
from .validator import ResolverSettings, RetrySettings, LoggingSettings, parse_retry_on
from .profiles import ProfileType, PROFILE_ENV_VAR, get_env_file_path

__all__ = [
    "load_from_env",
    "load_retry_config_from_env",
    "ResolverSettings",
    "RetrySettings",
    "LoggingSettings",
    "parse_retry_on",
    "ProfileType",
    "PROFILE_ENV_VAR",
    "get_env_file_path",
]
