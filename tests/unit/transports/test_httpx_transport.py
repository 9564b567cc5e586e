"""Tests for HttpxTransport (mocked with httpx.MockTransport)."""

import json

import httpx

from http_resolver.core.config import RequestDescriptor
from http_resolver.core.envelope import TransportErrorCode
from http_resolver.transports.httpx_transport import HttpxTransport

URL = "https://api.example.com/users"


def _transport(handler):
    return HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))


def test_success_envelope():
    transport = _transport(lambda request: httpx.Response(200, json={"id": 1}, headers={"X-Request-Id": "abc"}))

    envelope = transport.perform(RequestDescriptor(url=URL))

    assert envelope.status == 200
    assert json.loads(envelope.body) == {"id": 1}
    assert envelope.headers["x-request-id"] == "abc"


def test_request_parameters():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201)

    _transport(handler).perform(RequestDescriptor(
        url=URL, method="PUT", params={"page": "2"}, headers={"X-Trace": "1"}, data=b"payload"
    ))

    assert seen[0].method == "PUT"
    assert seen[0].url.params["page"] == "2"
    assert seen[0].headers["X-Trace"] == "1"
    assert seen[0].content == b"payload"


def test_timeout_becomes_envelope():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    envelope = _transport(handler).perform(RequestDescriptor(url=URL))

    assert envelope.status is None
    assert envelope.error.code is TransportErrorCode.TIMED_OUT


def test_connect_error_becomes_envelope():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    envelope = _transport(handler).perform(RequestDescriptor(url=URL))

    assert envelope.error.code is TransportErrorCode.CANNOT_CONNECT


def test_send():
    received = []
    _transport(lambda request: httpx.Response(404)).send(RequestDescriptor(url=URL), received.append)
    assert received[0].status == 404


def test_external_client_is_not_closed():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    HttpxTransport(client).close()
    assert not client.is_closed
    client.close()


def test_own_client_is_closed():
    transport = HttpxTransport()
    transport.close()
    assert transport._client.is_closed
