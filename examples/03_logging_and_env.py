"""
Structured logging and configuration from environment.

.env.development:
    HTTP_RESOLVER_DATE_STRATEGY=seconds_since_1970
    HTTP_RESOLVER_RETRY_MAX_ATTEMPTS=2
    HTTP_RESOLVER_RETRY_ON=timed_out,503
    HTTP_RESOLVER_LOG_ENABLED=true
    HTTP_RESOLVER_LOG_FORMAT=colored
    HTTP_RESOLVER_LOG_LEVEL=DEBUG
"""

import dataclasses

from http_resolver import (
    BlockingScheduler,
    CallbackSink,
    RequestDescriptor,
    RequestsTransport,
    ResolverContext,
    ResponseResolver,
    load_from_env,
    load_retry_config_from_env,
)
from http_resolver.core.logging import LoggingConfig


def json_logging():
    """Every attempt produces a JSON line with method, url, status and classification."""
    print("\n=== JSON logging ===")

    context = ResolverContext(logging=LoggingConfig.create(
        level="DEBUG",
        format="json",
        extra_fields={"service": "example"},
    ))
    with ResponseResolver(RequestsTransport(), BlockingScheduler(), context) as resolver:
        resolver.submit(
            RequestDescriptor.create("https://httpbin.org/status/418"),
            CallbackSink(on_error=lambda status, message, body: print(f"-> {status}"))
        )


def from_environment():
    """Context and retry defaults from HTTP_RESOLVER_* variables."""
    print("\n=== Environment ===")

    context = load_from_env(profile="development")
    retry = load_retry_config_from_env(profile="development")

    descriptor = dataclasses.replace(
        RequestDescriptor.create("https://httpbin.org/get"),
        retry=retry,
    )
    with ResponseResolver(RequestsTransport(), BlockingScheduler(), context) as resolver:
        resolver.submit(descriptor, CallbackSink(on_completed=lambda: print("OK")))


if __name__ == "__main__":
    json_logging()
    from_environment()
