"""
Utility functions for HTTP resolver.

Includes:
- URL sanitization for safe logging
- Server error message extraction
"""

import json
from typing import Optional, Set
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

GENERIC_ERROR_MESSAGE = "Something went wrong..."

# Default sensitive parameter names that should be masked in logs
DEFAULT_SENSITIVE_PARAMS = {
    'api_key',
    'apikey',
    'api-key',
    'token',
    'access_token',
    'refresh_token',
    'key',
    'secret',
    'password',
    'auth',
    'authorization',
    'client_secret',
    'session',
    'session_id',
}


def sanitize_url(
    url: str,
    extra_params: Optional[Set[str]] = None,
    mask: str = 'REDACTED'
) -> str:
    """
    Mask sensitive query parameters in URL for safe logging.

    Args:
        url: The URL to sanitize
        extra_params: Additional parameter names to mask (case-insensitive)
        mask: The string to use for masking (default: 'REDACTED')

    Returns:
        Sanitized URL with sensitive parameters masked

    Examples:
        >>> sanitize_url('https://api.example.com/data?api_key=secret123')
        'https://api.example.com/data?api_key=REDACTED'

        >>> sanitize_url('https://api.example.com/data?user=john&token=abc123')
        'https://api.example.com/data?user=john&token=REDACTED'
    """
    if not url:
        return url

    try:
        sensitive_params = DEFAULT_SENSITIVE_PARAMS | (
            {p.lower() for p in extra_params} if extra_params else set()
        )

        parsed = urlparse(url)

        if not parsed.query:
            return url

        params = parse_qs(parsed.query, keep_blank_values=True)

        sanitized_params = {}
        for param_name, param_values in params.items():
            if param_name.lower() in sensitive_params:
                sanitized_params[param_name] = [mask] * len(param_values)
            else:
                sanitized_params[param_name] = param_values

        new_query = urlencode(sanitized_params, doseq=True)

        return urlunparse(parsed._replace(query=new_query))

    except Exception:
        # Never fall back to the original URL
        return '<URL sanitization failed>'


def extract_error_message(body: Optional[bytes], default: str = GENERIC_ERROR_MESSAGE) -> str:
    """
    Best-effort human-readable message from an error response body.

    Looks for a string ``message`` field in a JSON object, then for a
    single-element JSON array holding one string.

    Examples:
        >>> extract_error_message(b'{"message": "User not found"}')
        'User not found'
        >>> extract_error_message(b'["Database unavailable"]')
        'Database unavailable'
        >>> extract_error_message(b'<html>502</html>')
        'Something went wrong...'
    """
    if not body:
        return default

    try:
        parsed = json.loads(body)
    except ValueError:
        return default

    if isinstance(parsed, dict):
        message = parsed.get('message')
        if isinstance(message, str):
            return message
    elif isinstance(parsed, list) and len(parsed) == 1 and isinstance(parsed[0], str):
        return parsed[0]

    return default
