"""
Pytest configuration and fixtures for http-resolver-core tests.
"""

import logging
from typing import Callable, List, Tuple
from unittest.mock import Mock

import pytest
import responses as responses_lib

from http_resolver.core.callbacks import CallbackSink
from http_resolver.core.envelope import ResponseEnvelope, TransportError, TransportErrorCode
from http_resolver.core.logging.filters import clear_correlation_id
from http_resolver.core.scheduler import Scheduler
from http_resolver.transports.base import Transport


class ScriptedTransport(Transport):
    """
    Transport that replays prepared envelopes, one per attempt.

    The last envelope is repeated when the script runs out.
    """

    def __init__(self, *envelopes: ResponseEnvelope):
        self.envelopes = list(envelopes)
        self.sent = []
        self.closed = False

    def send(self, descriptor, on_complete):
        self.sent.append(descriptor)
        index = min(len(self.sent), len(self.envelopes)) - 1
        on_complete(self.envelopes[index])

    def close(self):
        self.closed = True


class RecordingScheduler(Scheduler):
    """Runs deliveries immediately and remembers the requested delays."""

    def __init__(self):
        self.delays: List[float] = []
        self.closed = False

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self.delays.append(delay)
        callback()

    def close(self) -> None:
        self.closed = True


class DeferredScheduler(Scheduler):
    """Holds deliveries until run_all() is called."""

    def __init__(self):
        self.pending: List[Tuple[float, Callable[[], None]]] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay, callback))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


def timeout_envelope(elapsed: float = 15.0) -> ResponseEnvelope:
    return ResponseEnvelope.failed(
        TransportError(TransportErrorCode.TIMED_OUT, "Read timed out"),
        elapsed=elapsed
    )


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def sink():
    """CallbackSink with every channel mocked."""
    return CallbackSink(
        on_success=Mock(),
        on_error=Mock(),
        on_success_extended=Mock(),
        on_completed=Mock(),
    )


@pytest.fixture(autouse=True)
def reset_correlation_id():
    clear_correlation_id()
    yield
    clear_correlation_id()


@pytest.fixture
def scripted_transport():
    """Factory: scripted_transport(env1, env2, ...) -> ScriptedTransport."""
    return ScriptedTransport


@pytest.fixture
def deferred_scheduler():
    return DeferredScheduler()


@pytest.fixture
def timeout():
    """Factory for timed-out envelopes."""
    return timeout_envelope


@pytest.fixture(autouse=True)
def restore_package_logger():
    """ResolverLogger reconfigures the 'http_resolver' logger; undo it after each test."""
    package_logger = logging.getLogger("http_resolver")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
