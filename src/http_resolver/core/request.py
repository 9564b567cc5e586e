"""In-flight state of one logical request."""

import threading
import uuid
from typing import Optional

from .callbacks import CallbackSink
from .config import RequestDescriptor
from .retry_policy import RetryPolicy, RetryState


class LogicalRequest:
    """
    One caller-initiated operation, possibly spanning several attempts.

    Owns the retry counter exclusively; a new LogicalRequest always starts
    from zero attempts. Cancellation is advisory: it is checked once when a
    response arrives and never interrupts a delivery already scheduled.

    Attributes:
        descriptor: Immutable request description
        sink: Delivery channels
        request_id: Correlation id used in logs
        retry_state: Attempt counter
        retry_policy: Retry decisions for this descriptor

    Example:
        >>> request = LogicalRequest(descriptor, CallbackSink(on_success=print))
        >>> resolver.start(request)
        >>> request.cancel()
    """

    def __init__(
        self,
        descriptor: RequestDescriptor,
        sink: Optional[CallbackSink] = None,
        request_id: Optional[str] = None
    ):
        self.descriptor = descriptor
        self.sink = sink or CallbackSink()
        self.request_id = request_id or str(uuid.uuid4())
        self.retry_state = RetryState()
        self.retry_policy = RetryPolicy(descriptor.retry)
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Mark the request cancelled; pending responses are then dropped silently."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def attempt(self) -> int:
        """1-based number of the current attempt."""
        return self.retry_state.attempts_made + 1

    def __repr__(self) -> str:
        return (
            f"LogicalRequest({self.descriptor.method} {self.descriptor.url}, "
            f"id={self.request_id}, attempt={self.attempt})"
        )
