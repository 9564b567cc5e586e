"""
Semantic classification of HTTP statuses and transport failures.

Maps a raw numeric status (or a transport error code) to a closed
``StatusCode`` category. Unknown statuses degrade to ``StatusCode.other(raw)``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .envelope import TransportErrorCode


class StatusKind(str, Enum):
    """Closed set of status categories."""
    OK = "ok"
    CREATED = "created"
    ACCEPTED = "accepted"
    NO_CONTENT = "no_content"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    REQUEST_TIMEOUT = "request_timeout"
    CONFLICT = "conflict"
    TOO_MANY_REQUESTS = "too_many_requests"
    # Synthetic categories, never sent by a server
    TIMED_OUT = "timed_out"
    CANNOT_CONNECT_TO_HOST = "cannot_connect_to_host"
    UNDECODABLE = "undecodable"
    OTHER = "other"


_RAW_TO_KIND: Dict[int, StatusKind] = {
    200: StatusKind.OK,
    201: StatusKind.CREATED,
    202: StatusKind.ACCEPTED,
    204: StatusKind.NO_CONTENT,
    400: StatusKind.BAD_REQUEST,
    401: StatusKind.UNAUTHORIZED,
    403: StatusKind.FORBIDDEN,
    404: StatusKind.NOT_FOUND,
    408: StatusKind.REQUEST_TIMEOUT,
    409: StatusKind.CONFLICT,
    429: StatusKind.TOO_MANY_REQUESTS,
}

_KIND_TO_RAW: Dict[StatusKind, int] = {kind: raw for raw, kind in _RAW_TO_KIND.items()}


@dataclass(frozen=True)
class StatusCode:
    """
    Semantic status category.

    ``raw`` holds the numeric HTTP status when there is one. Synthetic
    categories (``TIMED_OUT``, ``CANNOT_CONNECT_TO_HOST``, ``UNDECODABLE``)
    have ``raw=None``.

    Examples:
        >>> StatusCode.from_raw(200) == StatusCode.OK
        True
        >>> StatusCode.from_raw(503)
        StatusCode(kind=<StatusKind.OTHER: 'other'>, raw=503)
    """
    kind: StatusKind
    raw: Optional[int] = None

    # Populated below the class body
    OK = None  # type: StatusCode
    CREATED = None  # type: StatusCode
    ACCEPTED = None  # type: StatusCode
    NO_CONTENT = None  # type: StatusCode
    BAD_REQUEST = None  # type: StatusCode
    UNAUTHORIZED = None  # type: StatusCode
    FORBIDDEN = None  # type: StatusCode
    NOT_FOUND = None  # type: StatusCode
    REQUEST_TIMEOUT = None  # type: StatusCode
    CONFLICT = None  # type: StatusCode
    TOO_MANY_REQUESTS = None  # type: StatusCode
    TIMED_OUT = None  # type: StatusCode
    CANNOT_CONNECT_TO_HOST = None  # type: StatusCode
    UNDECODABLE = None  # type: StatusCode

    @classmethod
    def from_raw(cls, raw: int) -> "StatusCode":
        """Classify a numeric HTTP status."""
        kind = _RAW_TO_KIND.get(raw)
        if kind is None:
            return cls(StatusKind.OTHER, raw)
        return cls(kind, raw)

    @classmethod
    def other(cls, raw: int) -> "StatusCode":
        """
        Category for a status without a named kind.

        Named statuses are normalised, so ``StatusCode.other(401)`` is
        ``StatusCode.UNAUTHORIZED``.
        """
        return cls.from_raw(raw)

    @property
    def is_timeout(self) -> bool:
        return self.kind in (StatusKind.TIMED_OUT, StatusKind.REQUEST_TIMEOUT)

    def __str__(self) -> str:
        if self.raw is None:
            return self.kind.value
        if self.kind is StatusKind.OTHER:
            return f"other({self.raw})"
        return f"{self.kind.value}({self.raw})"


for _kind in StatusKind:
    if _kind is not StatusKind.OTHER:
        setattr(StatusCode, _kind.name, StatusCode(_kind, _KIND_TO_RAW.get(_kind)))
del _kind


def classify(
    raw_status: Optional[int] = None,
    error_code: Optional[TransportErrorCode] = None
) -> StatusCode:
    """
    Derive the semantic category of one attempt.

    A timeout reported by the transport wins over a partial HTTP status.
    Otherwise the HTTP status governs; a transport failure without status is
    ``CANNOT_CONNECT_TO_HOST``.

    Args:
        raw_status: Numeric HTTP status, if a response arrived
        error_code: Transport failure code, if the transport failed

    Returns:
        StatusCode

    Examples:
        >>> classify(401)
        StatusCode(kind=<StatusKind.UNAUTHORIZED: 'unauthorized'>, raw=401)
        >>> classify(None, TransportErrorCode.TIMED_OUT) == StatusCode.TIMED_OUT
        True
    """
    if error_code is TransportErrorCode.TIMED_OUT:
        return StatusCode.TIMED_OUT
    if raw_status is not None:
        return StatusCode.from_raw(raw_status)
    if error_code is not None:
        return StatusCode.CANNOT_CONNECT_TO_HOST
    return StatusCode.UNDECODABLE
