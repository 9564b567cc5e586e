"""Delivery channels for resolved requests."""

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, List, Mapping, Optional

from .status import StatusCode

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[StatusCode, str, Optional[bytes]], None]


@dataclass(frozen=True)
class ExtendedResponse:
    """
    Full view of a successful response.

    Attributes:
        headers: Response headers
        status: Classified status
        body: Raw body bytes
        value: Decoded result
    """
    headers: Mapping[str, str]
    status: StatusCode
    body: Optional[bytes]
    value: Any


@dataclass
class CallbackSink:
    """
    Terminal delivery channels of one logical request.

    Each channel is optional and invoked at most once per terminal
    resolution. None of them fires for an attempt that is retried.

    Attributes:
        on_success: Receives the decoded value
        on_error: Receives (status, message, raw body)
        on_success_extended: Receives an ExtendedResponse
        on_completed: No-argument signal after a successful delivery

    Example:
        >>> sink = CallbackSink(
        ...     on_success=lambda user: print(user.name),
        ...     on_error=lambda status, message, body: print(status, message),
        ... )
    """
    on_success: Optional[SuccessCallback] = None
    on_error: Optional[ErrorCallback] = None
    on_success_extended: Optional[Callable[[ExtendedResponse], None]] = None
    on_completed: Optional[Callable[[], None]] = None

    def success_sinks(
        self,
        value: Any,
        extended: ExtendedResponse,
        observer: Optional[Callable[[], None]] = None
    ) -> List[Callable[[], None]]:
        """
        Zero-argument calls for a successful delivery, in delivery order.

        Order: process-wide observer, on_success, on_success_extended,
        on_completed. Channels that are not set are skipped.
        """
        ordered = [
            observer,
            partial(self.on_success, value) if self.on_success else None,
            partial(self.on_success_extended, extended) if self.on_success_extended else None,
            self.on_completed,
        ]
        return [sink for sink in ordered if sink is not None]
