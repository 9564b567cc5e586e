"""Тесты исключений и маппинга ошибок транспорта."""

import httpx
import pytest
import requests

from http_resolver.core.envelope import TransportErrorCode
from http_resolver.core.exceptions import (
    HTTPResolverException,
    ConfigurationError,
    DecodingError,
    transport_error_from_exception,
)


def test_hierarchy():
    assert issubclass(ConfigurationError, HTTPResolverException)
    assert issubclass(DecodingError, HTTPResolverException)


def test_message_attribute():
    err = ConfigurationError("date_format is required")
    assert err.message == "date_format is required"
    assert str(err) == "date_format is required"
    assert not hasattr(err, "retryable")


def test_decoding_error_message():
    err = DecodingError("Unexpected body", int, b'{"a": 1}')
    assert "expected: int" in str(err)
    assert '{"a": 1}' in str(err)
    assert err.body == b'{"a": 1}'


def test_decoding_error_preview_is_truncated():
    err = DecodingError("Too long", body=b"x" * 500)
    assert "x" * 100 in str(err)
    assert "x" * 101 not in str(err)


@pytest.mark.parametrize("exc,code", [
    (requests.exceptions.ReadTimeout("read"), TransportErrorCode.TIMED_OUT),
    (requests.exceptions.ConnectTimeout("connect"), TransportErrorCode.TIMED_OUT),
    (requests.exceptions.ProxyError("proxy"), TransportErrorCode.PROXY),
    (requests.exceptions.SSLError("ssl"), TransportErrorCode.SSL),
    (requests.exceptions.ConnectionError("refused"), TransportErrorCode.CANNOT_CONNECT),
    (requests.exceptions.InvalidURL("bad"), TransportErrorCode.UNKNOWN),
    (httpx.ReadTimeout("read"), TransportErrorCode.TIMED_OUT),
    (httpx.ConnectError("refused"), TransportErrorCode.CANNOT_CONNECT),
    (httpx.ProxyError("proxy"), TransportErrorCode.PROXY),
])
def test_transport_error_from_exception(exc, code):
    error = transport_error_from_exception(exc)
    assert error.code is code
    assert error.cause is exc
    assert error.is_timeout is (code is TransportErrorCode.TIMED_OUT)
