"""Тесты классификации статусов."""

import pytest

from http_resolver.core.envelope import TransportErrorCode
from http_resolver.core.status import StatusCode, StatusKind, classify


@pytest.mark.parametrize("raw,kind", [
    (200, StatusKind.OK),
    (201, StatusKind.CREATED),
    (204, StatusKind.NO_CONTENT),
    (400, StatusKind.BAD_REQUEST),
    (401, StatusKind.UNAUTHORIZED),
    (403, StatusKind.FORBIDDEN),
    (404, StatusKind.NOT_FOUND),
    (408, StatusKind.REQUEST_TIMEOUT),
    (409, StatusKind.CONFLICT),
    (429, StatusKind.TOO_MANY_REQUESTS),
])
def test_named_statuses(raw, kind):
    status = classify(raw)
    assert status.kind is kind
    assert status.raw == raw


@pytest.mark.parametrize("raw", [418, 500, 502, 503, 599])
def test_unmapped_statuses_degrade_to_other(raw):
    status = classify(raw)
    assert status.kind is StatusKind.OTHER
    assert status == StatusCode.other(raw)
    assert str(status) == f"other({raw})"


def test_other_normalises_named_codes():
    """other(401) - это тот же UNAUTHORIZED."""
    assert StatusCode.other(401) == StatusCode.UNAUTHORIZED


def test_class_constants_match_from_raw():
    assert StatusCode.from_raw(200) == StatusCode.OK
    assert StatusCode.from_raw(408) == StatusCode.REQUEST_TIMEOUT
    assert StatusCode.TIMED_OUT.raw is None
    assert StatusCode.UNDECODABLE.raw is None


def test_timeout_error_wins_over_partial_status():
    status = classify(200, TransportErrorCode.TIMED_OUT)
    assert status == StatusCode.TIMED_OUT


def test_status_governs_when_error_is_not_timeout():
    assert classify(502, TransportErrorCode.CANNOT_CONNECT) == StatusCode.other(502)


def test_transport_failure_without_status():
    assert classify(None, TransportErrorCode.CANNOT_CONNECT) == StatusCode.CANNOT_CONNECT_TO_HOST
    assert classify(None, TransportErrorCode.SSL) == StatusCode.CANNOT_CONNECT_TO_HOST


def test_nothing_to_classify():
    assert classify() == StatusCode.UNDECODABLE


def test_is_timeout():
    assert StatusCode.TIMED_OUT.is_timeout
    assert StatusCode.REQUEST_TIMEOUT.is_timeout
    assert not StatusCode.other(504).is_timeout
    assert not StatusCode.OK.is_timeout


def test_str():
    assert str(StatusCode.TIMED_OUT) == "timed_out"
    assert str(StatusCode.UNAUTHORIZED) == "unauthorized(401)"


def test_status_is_hashable():
    assert {StatusCode.other(503), classify(503)} == {StatusCode.other(503)}
