"""HTTP Resolver - response resolution pipeline: classify, retry, decode, deliver."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.resolver import ResponseResolver
from .core.config import RetryConfig, RequestDescriptor, ResolverContext
from .core.status import StatusCode, StatusKind, classify
from .core.envelope import ResponseEnvelope, TransportError, TransportErrorCode
from .core.decoder import NoContent, ResultShape, ResultDecoder
from .core.dates import DateDecodingStrategy
from .core.callbacks import CallbackSink, ExtendedResponse
from .core.request import LogicalRequest
from .core.scheduler import BlockingScheduler, ThreadingScheduler, AsyncioScheduler
from .core.exceptions import HTTPResolverException, ConfigurationError, DecodingError
from .core.env_config import load_from_env, load_retry_config_from_env
from .transports import Transport, RequestsTransport, HttpxTransport

# Set up logging - add NullHandler to prevent "No handler found" warnings
logging.getLogger('http_resolver').addHandler(logging.NullHandler())

try:
    __version__ = version("http-resolver-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "ResponseResolver",
    "LogicalRequest",
    "CallbackSink",
    "ExtendedResponse",

    # Config
    "RetryConfig",
    "RequestDescriptor",
    "ResolverContext",
    "load_from_env",
    "load_retry_config_from_env",

    # Classification
    "StatusCode",
    "StatusKind",
    "classify",
    "ResponseEnvelope",
    "TransportError",
    "TransportErrorCode",

    # Decoding
    "NoContent",
    "ResultShape",
    "ResultDecoder",
    "DateDecodingStrategy",

    # Scheduling
    "BlockingScheduler",
    "ThreadingScheduler",
    "AsyncioScheduler",

    # Transports
    "Transport",
    "RequestsTransport",
    "HttpxTransport",

    # Exceptions
    "HTTPResolverException",
    "ConfigurationError",
    "DecodingError",

    # Version
    "__version__",
]
