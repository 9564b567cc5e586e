"""Transport adapters producing ResponseEnvelope values."""

from .base import Transport, CompletionHandler
from .requests_transport import RequestsTransport, ThreadLocalSessions
from .httpx_transport import HttpxTransport

__all__ = [
    "Transport",
    "CompletionHandler",
    "RequestsTransport",
    "ThreadLocalSessions",
    "HttpxTransport",
]
