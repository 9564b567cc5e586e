"""Tests for ResponseEnvelope and TransportError."""

import pytest

from http_resolver.core.envelope import ResponseEnvelope, TransportError, TransportErrorCode


def test_received_with_any_status():
    assert ResponseEnvelope(status=200).received is True
    assert ResponseEnvelope(status=503).received is True


def test_failed_envelope_has_no_status():
    error = TransportError(TransportErrorCode.CANNOT_CONNECT, "refused")
    envelope = ResponseEnvelope.failed(error, elapsed=0.5)

    assert envelope.received is False
    assert envelope.status is None
    assert envelope.error is error
    assert envelope.elapsed == 0.5


def test_headers_are_read_only():
    headers = {"Content-Type": "application/json"}
    envelope = ResponseEnvelope(status=200, headers=headers)
    headers["X-Later"] = "1"

    assert "X-Later" not in envelope.headers
    with pytest.raises(TypeError):
        envelope.headers["X-New"] = "1"


def test_negative_elapsed_rejected():
    with pytest.raises(ValueError, match="elapsed"):
        ResponseEnvelope(status=200, elapsed=-1.0)


def test_is_timeout():
    assert TransportError(TransportErrorCode.TIMED_OUT).is_timeout is True
    assert TransportError(TransportErrorCode.SSL).is_timeout is False


def test_cause_ignored_in_equality():
    first = TransportError(TransportErrorCode.PROXY, "bad proxy", cause=OSError("a"))
    second = TransportError(TransportErrorCode.PROXY, "bad proxy", cause=OSError("b"))
    assert first == second
