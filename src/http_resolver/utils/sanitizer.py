# src/http_resolver/utils/sanitizer.py
"""
Маскирование чувствительных данных в полях логов.

Резолвер логирует заголовки, URL и фрагменты тел ответов; токены и
пароли не должны попадать в логи.
"""

import re
from typing import Any, Dict


# Чувствительные ключи (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    # Пароли
    'password', 'passwd', 'pwd',
    # Токены
    'token', 'access_token', 'refresh_token', 'id_token', 'jwt',
    # Секреты и ключи
    'secret', 'client_secret', 'api_key', 'apikey', 'private_key',
    # Аутентификация
    'authorization', 'auth', 'credentials',
    # Сессии и куки
    'cookie', 'session', 'csrf_token', 'xsrf_token',
    # Платежи
    'card_number', 'cvv', 'cvc',
}

# Паттерны sensitive данных внутри строк
SENSITIVE_PATTERNS = [
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(api[_-]?key[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(token[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(password[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1***REDACTED***'),
]


def mask_sensitive_data(data: Any, mask: str = "***REDACTED***") -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными полями (другие типы - как есть)

    Examples:
        >>> mask_sensitive_data({"Authorization": "Bearer abc", "Accept": "*/*"})
        {'Authorization': '***REDACTED***', 'Accept': '*/*'}
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return _mask_string(data)

    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    # Объекты (StatusCode, bytes, ...) не трогаем
    return data


def _mask_dict(data: Dict[Any, Any], mask: str) -> Dict[Any, Any]:
    result = {}
    for key, value in data.items():
        if _is_sensitive_key(str(key).lower()):
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)
    return result


def _mask_string(text: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _is_sensitive_key(key: str) -> bool:
    return any(sensitive_key in key for sensitive_key in SENSITIVE_KEYS)


def mask_headers(headers: Dict[str, str], mask: str = "***REDACTED***") -> Dict[str, str]:
    """
    Маскирует чувствительные HTTP заголовки.

    Examples:
        >>> mask_headers({"Set-Cookie": "sid=1", "Content-Type": "application/json"})
        {'Set-Cookie': '***REDACTED***', 'Content-Type': 'application/json'}
    """
    return _mask_dict(dict(headers), mask)


def add_sensitive_keys(*keys: str) -> None:
    """
    Добавляет ключи в глобальный набор SENSITIVE_KEYS.

    Examples:
        >>> add_sensitive_keys('device_id')
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())


def remove_sensitive_keys(*keys: str) -> None:
    """Удаляет ключи из глобального набора SENSITIVE_KEYS."""
    for key in keys:
        SENSITIVE_KEYS.discard(key.lower())


def get_sensitive_keys() -> set:
    """Копия текущего набора чувствительных ключей."""
    return SENSITIVE_KEYS.copy()
