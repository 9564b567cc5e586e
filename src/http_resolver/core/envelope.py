"""Result of one transport attempt."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class TransportErrorCode(str, Enum):
    """Transport-level failure codes."""
    TIMED_OUT = "timed_out"
    CANNOT_CONNECT = "cannot_connect"
    PROXY = "proxy"
    SSL = "ssl"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TransportError:
    """
    Ошибка транспорта (ответ не получен или получен частично).

    Args:
        code: Код ошибки
        message: Описание от транспорта
        cause: Исходное исключение (для диагностики)
    """
    code: TransportErrorCode
    message: str = ""
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @property
    def is_timeout(self) -> bool:
        return self.code is TransportErrorCode.TIMED_OUT


@dataclass(frozen=True)
class ResponseEnvelope:
    """
    Everything the transport observed for one attempt.

    ``status`` is None when no HTTP response arrived (pure transport
    failure). ``elapsed`` is wall-clock seconds spent on the attempt.

    Example:
        >>> ResponseEnvelope(status=200, body=b'{"id": 1}', elapsed=0.12)
    """
    status: Optional[int] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: Optional[bytes] = None
    error: Optional[TransportError] = None
    elapsed: float = 0.0

    def __post_init__(self):
        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))
        if self.elapsed < 0:
            raise ValueError("elapsed must be non-negative")

    @property
    def received(self) -> bool:
        """True if an HTTP response (any status) arrived."""
        return self.status is not None

    @classmethod
    def failed(cls, error: TransportError, elapsed: float = 0.0) -> "ResponseEnvelope":
        """Envelope for a transport failure."""
        return cls(error=error, elapsed=elapsed)
