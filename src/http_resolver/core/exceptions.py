"""
Иерархия исключений HTTP Resolver.

Резолвер не выбрасывает исключения наружу: ошибки ответа доставляются
через callback как значения (StatusCode + сообщение). Исключения
используются для ошибок конфигурации и внутри стратегий декодирования.
Решение о повторе принимает только RetryPolicy.
"""

from typing import Optional

import httpx
import requests

from .envelope import TransportError, TransportErrorCode

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPResolverException(Exception):
    """Базовое исключение HTTP Resolver."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ КОНФИГУРАЦИИ И ДЕКОДИРОВАНИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(HTTPResolverException):
    """Ошибка конфигурации."""


class DecodingError(HTTPResolverException):
    """
    Тело ответа не соответствует ожидаемой форме.

    Args:
        message: Сообщение
        expected: Ожидаемый тип (для диагностики)
        body: Сырые байты тела (обрезаются в сообщении)
    """

    def __init__(
        self,
        message: str,
        expected: Optional[type] = None,
        body: Optional[bytes] = None
    ):
        self.expected = expected
        self.body = body

        msg = message
        if expected is not None:
            msg += f" (expected: {getattr(expected, '__name__', expected)})"
        if body:
            preview = body[:100].decode('utf-8', errors='replace')
            msg += f": {preview!r}"

        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def transport_error_from_exception(exc: Exception) -> TransportError:
    """
    Конвертировать исключения requests/httpx в TransportError.

    Args:
        exc: Исключение транспорта

    Returns:
        TransportError с правильным кодом

    Examples:
        >>> err = transport_error_from_exception(requests.exceptions.ReadTimeout())
        >>> assert err.code is TransportErrorCode.TIMED_OUT
    """
    if isinstance(exc, (requests.exceptions.Timeout, httpx.TimeoutException)):
        code = TransportErrorCode.TIMED_OUT

    elif isinstance(exc, (requests.exceptions.ProxyError, httpx.ProxyError)):
        code = TransportErrorCode.PROXY

    elif isinstance(exc, requests.exceptions.SSLError):
        code = TransportErrorCode.SSL

    elif isinstance(exc, (requests.exceptions.ConnectionError, httpx.ConnectError,
                          httpx.NetworkError)):
        code = TransportErrorCode.CANNOT_CONNECT

    else:
        # Неизвестная ошибка
        code = TransportErrorCode.UNKNOWN

    return TransportError(code=code, message=str(exc), cause=exc)
