"""Tests for RequestsTransport (mocked with responses)."""

import threading

import requests
import responses

from http_resolver.core.config import RequestDescriptor
from http_resolver.core.envelope import TransportErrorCode
from http_resolver.transports.requests_transport import RequestsTransport, ThreadLocalSessions

URL = "https://api.example.com/users"


@responses.activate
def test_success_envelope():
    responses.add(responses.GET, URL, json={"id": 1}, status=200, headers={"X-Request-Id": "abc"})

    envelope = RequestsTransport().perform(RequestDescriptor(url=URL))

    assert envelope.status == 200
    assert envelope.body == b'{"id": 1}'
    assert envelope.headers["X-Request-Id"] == "abc"
    assert envelope.error is None
    assert envelope.elapsed >= 0


@responses.activate
def test_error_status_is_still_received():
    responses.add(responses.GET, URL, json=["Database unavailable"], status=500)

    envelope = RequestsTransport().perform(RequestDescriptor(url=URL))

    assert envelope.received
    assert envelope.status == 500


@responses.activate
def test_request_parameters():
    responses.add(responses.POST, URL, status=201)

    descriptor = RequestDescriptor(
        url=URL,
        method="post",
        headers={"Content-Type": "application/json"},
        params={"page": 2},
        data=b'{"name": "Ann"}',
    )
    RequestsTransport().perform(descriptor)

    sent = responses.calls[0].request
    assert sent.method == "POST"
    assert sent.url == URL + "?page=2"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.body == b'{"name": "Ann"}'


@responses.activate
def test_timeout_becomes_envelope():
    responses.add(responses.GET, URL, body=requests.exceptions.ReadTimeout("read timed out"))

    envelope = RequestsTransport().perform(RequestDescriptor(url=URL))

    assert envelope.status is None
    assert envelope.error.code is TransportErrorCode.TIMED_OUT
    assert envelope.error.is_timeout


@responses.activate
def test_connection_error_becomes_envelope():
    responses.add(responses.GET, URL, body=requests.exceptions.ConnectionError("refused"))

    envelope = RequestsTransport().perform(RequestDescriptor(url=URL))

    assert envelope.error.code is TransportErrorCode.CANNOT_CONNECT


@responses.activate
def test_send_calls_completion_once():
    responses.add(responses.GET, URL, status=204)
    received = []

    RequestsTransport().send(RequestDescriptor(url=URL), received.append)

    assert [e.status for e in received] == [204]


class TestThreadLocalSessions:
    def test_one_session_per_thread(self):
        sessions = ThreadLocalSessions(requests.Session)
        main = sessions.get()
        assert sessions.get() is main

        other = []
        thread = threading.Thread(target=lambda: other.append(sessions.get()))
        thread.start()
        thread.join()

        assert other[0] is not main
        sessions.close_all()

    def test_close_all(self):
        sessions = ThreadLocalSessions(requests.Session)
        first = sessions.get()
        sessions.close_all()

        assert sessions.get() is not first
        sessions.close_all()


def test_close_is_repeatable():
    transport = RequestsTransport()
    transport.close()
    transport.close()
