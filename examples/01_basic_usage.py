"""
Basic HTTP Resolver Usage Examples

Demonstrates primitive, structured and empty results.
"""

from typing import List

from pydantic import BaseModel

from http_resolver import (
    BlockingScheduler,
    CallbackSink,
    RequestDescriptor,
    RequestsTransport,
    ResponseResolver,
)


class Post(BaseModel):
    id: int
    title: str


def print_error(status, message, body):
    print(f"Error: {status} - {message}")


def structured_result(resolver: ResponseResolver):
    """List of models."""
    print("\n=== Structured Result ===")

    resolver.submit(
        RequestDescriptor.create("https://jsonplaceholder.typicode.com/posts", result_type=List[Post]),
        CallbackSink(
            on_success=lambda posts: print(f"Loaded {len(posts)} posts, first: {posts[0].title}"),
            on_error=print_error,
        )
    )


def extended_result(resolver: ResponseResolver):
    """Headers and raw body next to the decoded value."""
    print("\n=== Extended Result ===")

    resolver.submit(
        RequestDescriptor.create("https://jsonplaceholder.typicode.com/posts/1", result_type=Post),
        CallbackSink(
            on_success_extended=lambda r: print(f"{r.status}: {r.value.title} ({r.headers.get('Content-Type')})"),
            on_error=print_error,
        )
    )


def empty_result(resolver: ResponseResolver):
    """DELETE without a body."""
    print("\n=== Empty Result ===")

    resolver.submit(
        RequestDescriptor.create("https://jsonplaceholder.typicode.com/posts/1", method="DELETE"),
        CallbackSink(on_completed=lambda: print("Deleted"), on_error=print_error)
    )


def not_found(resolver: ResponseResolver):
    """Error status goes to on_error."""
    print("\n=== Not Found ===")

    resolver.submit(
        RequestDescriptor.create("https://jsonplaceholder.typicode.com/posts/99999", result_type=Post),
        CallbackSink(on_success=print, on_error=print_error)
    )


if __name__ == "__main__":
    with ResponseResolver(RequestsTransport(), scheduler=BlockingScheduler()) as resolver:
        structured_result(resolver)
        extended_result(resolver)
        empty_result(resolver)
        not_found(resolver)
