"""Core HTTP Resolver модули."""

from .status import StatusCode, StatusKind, classify
from .envelope import ResponseEnvelope, TransportError, TransportErrorCode
from .dates import DateDecodingStrategy, DateStrategyKind, resolve_strategy
from .decoder import (
    NoContent,
    ResultShape,
    ShapeKind,
    ResultDecoder,
    Empty,
    Primitive,
    Structured,
    DecodeFailure,
    DecodedOutcome,
    decode_primitive,
)
from .config import RetryConfig, RequestDescriptor, ResolverContext
from .retry_policy import RetryPolicy, RetryState
from .callbacks import CallbackSink, ExtendedResponse
from .request import LogicalRequest
from .scheduler import Scheduler, BlockingScheduler, ThreadingScheduler, AsyncioScheduler
from .resolver import ResponseResolver
from .exceptions import (
    HTTPResolverException,
    ConfigurationError,
    DecodingError,
    transport_error_from_exception,
)

__all__ = [
    # Classification
    "StatusCode",
    "StatusKind",
    "classify",
    # Envelope
    "ResponseEnvelope",
    "TransportError",
    "TransportErrorCode",
    # Decoding
    "DateDecodingStrategy",
    "DateStrategyKind",
    "resolve_strategy",
    "NoContent",
    "ResultShape",
    "ShapeKind",
    "ResultDecoder",
    "Empty",
    "Primitive",
    "Structured",
    "DecodeFailure",
    "DecodedOutcome",
    "decode_primitive",
    # Config
    "RetryConfig",
    "RequestDescriptor",
    "ResolverContext",
    # Retry
    "RetryPolicy",
    "RetryState",
    # Resolution
    "CallbackSink",
    "ExtendedResponse",
    "LogicalRequest",
    "Scheduler",
    "BlockingScheduler",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "ResponseResolver",
    # Exceptions
    "HTTPResolverException",
    "ConfigurationError",
    "DecodingError",
    "transport_error_from_exception",
]
