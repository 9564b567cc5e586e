"""
Profile management for different environments.
"""

import os
from typing import Optional, Literal

ProfileType = Literal["development", "staging", "production"]

PROFILE_ENV_VAR = "HTTP_RESOLVER_ENV"


def get_env_file_path(profile: Optional[ProfileType] = None) -> str:
    """
    Get .env file path for profile.

    Without an explicit profile, ``HTTP_RESOLVER_ENV`` is consulted.

    Example:
        >>> get_env_file_path("production")
        '.env.production'
        >>> get_env_file_path(None)
        '.env'
    """
    if profile is None:
        profile = os.getenv(PROFILE_ENV_VAR)

    if not profile:
        return ".env"

    return f".env.{profile}"
