"""Tests for utility functions."""

import pytest

from http_resolver.core.utils import GENERIC_ERROR_MESSAGE, extract_error_message, sanitize_url


class TestSanitizeUrl:
    """Tests for sanitize_url function."""

    def test_sanitize_api_key(self):
        url = "https://api.example.com/data?api_key=secret123"
        result = sanitize_url(url)

        assert "secret123" not in result
        assert "api_key=REDACTED" in result
        assert "https://api.example.com/data" in result

    def test_keeps_other_params(self):
        url = "https://api.example.com/login?user=john&password=secret&remember=true"
        result = sanitize_url(url)

        assert "secret" not in result
        assert "user=john" in result
        assert "remember=true" in result

    def test_case_insensitive(self):
        assert "abc" not in sanitize_url("https://api.example.com/?TOKEN=abc")

    def test_extra_params(self):
        result = sanitize_url("https://api.example.com/?signature=xyz", extra_params={"Signature"})
        assert "xyz" not in result

    def test_custom_mask(self):
        assert sanitize_url("https://x.io/?token=abc", mask="HIDDEN") == "https://x.io/?token=HIDDEN"

    @pytest.mark.parametrize("url", ["", "https://api.example.com/users"])
    def test_untouched(self, url):
        assert sanitize_url(url) == url


class TestExtractErrorMessage:
    """Tests for extract_error_message function."""

    def test_message_field(self):
        assert extract_error_message(b'{"message": "User not found", "code": 7}') == "User not found"

    def test_single_string_array(self):
        assert extract_error_message(b'["Database unavailable"]') == "Database unavailable"

    @pytest.mark.parametrize("body", [
        None,
        b'',
        b'<html>502 Bad Gateway</html>',
        b'{"error": "no message field"}',
        b'{"message": 42}',
        b'["a", "b"]',
        b'[42]',
        b'"plain string"',
    ])
    def test_falls_back_to_generic(self, body):
        assert extract_error_message(body) == GENERIC_ERROR_MESSAGE

    def test_custom_default(self):
        assert extract_error_message(None, default="Oops") == "Oops"
