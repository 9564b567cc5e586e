"""
Retry, timeouts and minimum perceived latency.
"""

import threading

from http_resolver import (
    CallbackSink,
    RequestDescriptor,
    ResolverContext,
    ResponseResolver,
    RetryConfig,
    StatusCode,
    ThreadingScheduler,
)
from http_resolver.transports import HttpxTransport


def retry_server_errors(resolver: ResponseResolver):
    """Restart on 502/503 up to 3 times."""
    print("\n=== Retry on 503 ===")

    descriptor = RequestDescriptor.create(
        "https://httpbin.org/status/503",
        max_retries=3,
        retry_on=[502, 503],
    )
    done = threading.Event()
    resolver.submit(descriptor, CallbackSink(
        on_error=lambda status, message, body: (print(f"Gave up: {status}"), done.set()),
    ))
    done.wait(60)


def retry_timeouts(resolver: ResponseResolver):
    """A timeout notifies on every attempt and restarts while attempts remain."""
    print("\n=== Retry on timeout ===")

    descriptor = RequestDescriptor(
        url="https://httpbin.org/delay/5",
        timeout=1.0,
        retry=RetryConfig.on_timeout(max_attempts=2),
        on_timeout=lambda: print("Timed out"),
    )
    resolver.submit(descriptor)


def minimum_latency(resolver: ResponseResolver):
    """A fast response is delivered no earlier than 2 seconds after start."""
    print("\n=== Additional timeout ===")

    done = threading.Event()
    resolver.submit(
        RequestDescriptor.create("https://httpbin.org/get", additional_timeout=2.0),
        CallbackSink(on_completed=lambda: (print("Delivered"), done.set()))
    )
    done.wait(10)


if __name__ == "__main__":
    context = ResolverContext(
        unauthorized_hook=lambda: print("Session expired"),
        success_observer=lambda method, url: print(f"[metrics] {method} {url}"),
    )
    with ResponseResolver(HttpxTransport(), ThreadingScheduler(), context) as resolver:
        retry_server_errors(resolver)
        retry_timeouts(resolver)
        minimum_latency(resolver)
        print(f"Timeout categories: {StatusCode.TIMED_OUT}, {StatusCode.REQUEST_TIMEOUT}")
