"""
Integration tests: ResponseResolver + RequestsTransport + responses.

Real requests stack, mocked network.
"""

import threading
from typing import List
from unittest.mock import Mock

import pytest
import requests
import responses
from pydantic import BaseModel

from http_resolver import (
    BlockingScheduler,
    CallbackSink,
    RequestDescriptor,
    RequestsTransport,
    ResolverContext,
    ResponseResolver,
    RetryConfig,
    StatusCode,
    ThreadingScheduler,
)

BASE_URL = "https://api.example.com"


class User(BaseModel):
    id: int
    name: str


@pytest.fixture
def resolver():
    with ResponseResolver(RequestsTransport(), scheduler=BlockingScheduler()) as resolver:
        yield resolver


@responses.activate
def test_list_of_models(resolver, sink):
    responses.add(responses.GET, f"{BASE_URL}/users", json=[{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bob"}])

    resolver.submit(RequestDescriptor.create(f"{BASE_URL}/users", result_type=List[User]), sink)

    users = sink.on_success.call_args[0][0]
    assert [u.name for u in users] == ["Ann", "Bob"]
    sink.on_error.assert_not_called()


@responses.activate
def test_retry_on_503_then_success(resolver, sink):
    url = f"{BASE_URL}/count"
    responses.add(responses.GET, url, status=503)
    responses.add(responses.GET, url, json={"value": 42})

    descriptor = RequestDescriptor.create(url, result_type=int, max_retries=2, retry_on=[503])
    resolver.submit(descriptor, sink)

    assert len(responses.calls) == 2
    sink.on_success.assert_called_once_with(42)


@responses.activate
def test_timeout_retry_then_success(resolver, sink):
    url = f"{BASE_URL}/slow"
    on_timeout = Mock()
    responses.add(responses.GET, url, body=requests.exceptions.ReadTimeout("read timed out"))
    responses.add(responses.GET, url, body="true")

    descriptor = RequestDescriptor(url=url, result_shape=bool, retry=RetryConfig.on_timeout(2), on_timeout=on_timeout)
    resolver.submit(descriptor, sink)

    on_timeout.assert_called_once_with()
    sink.on_success.assert_called_once_with(True)


@responses.activate
def test_unauthorized_hook(sink):
    responses.add(responses.GET, f"{BASE_URL}/me", status=401)
    hook = Mock()

    with ResponseResolver(RequestsTransport(), BlockingScheduler(), ResolverContext(unauthorized_hook=hook)) as resolver:
        resolver.submit(RequestDescriptor.create(f"{BASE_URL}/me", result_type=User), sink)

    hook.assert_called_once_with()
    assert sink.on_error.call_args[0][:2] == (StatusCode.UNAUTHORIZED, "Not authorized")


@responses.activate
def test_server_message(resolver, sink):
    responses.add(responses.DELETE, f"{BASE_URL}/users/1", json={"message": "User is locked"}, status=409)

    resolver.submit(RequestDescriptor.create(f"{BASE_URL}/users/1", method="DELETE"), sink)

    sink.on_error.assert_called_once()
    assert sink.on_error.call_args[0][:2] == (StatusCode.CONFLICT, "User is locked")


@responses.activate
def test_delayed_delivery_on_timer_thread(sink):
    responses.add(responses.GET, f"{BASE_URL}/ping", status=200)
    delivered = threading.Event()
    sink.on_completed.side_effect = lambda: delivered.set()

    with ResponseResolver(RequestsTransport(), ThreadingScheduler()) as resolver:
        resolver.submit(RequestDescriptor.create(f"{BASE_URL}/ping", additional_timeout=0.2), sink)
        sink.on_success.assert_not_called()
        assert delivered.wait(2.0)

    sink.on_success.assert_called_once_with(None)
