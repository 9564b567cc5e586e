"""
Система конфигурации для HTTP Resolver.

Все конфиги immutable (frozen dataclasses): дескриптор не меняется после
старта запроса, а процессные хуки передаются резолверу явно через
ResolverContext вместо глобального состояния.
"""

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Union, TYPE_CHECKING
)

from .dates import DateDecodingStrategy
from .decoder import NoContent, ResultShape
from .status import StatusCode

if TYPE_CHECKING:
    from .logging import LoggingConfig


def _to_status_set(codes: Iterable[Union[int, StatusCode]]) -> FrozenSet[StatusCode]:
    """Normalize raw ints and StatusCode values to a frozenset of StatusCode."""
    return frozenset(
        code if isinstance(code, StatusCode) else StatusCode.from_raw(code)
        for code in codes
    )


def _freeze_dict(d: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """
    Convert dict to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"X-API-Key": "secret"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryConfig:
    """
    Конфигурация retry стратегии.

    Args:
        max_attempts: Максимум повторов (не включая первую попытку)
        retry_on: Классификации, при которых запрос перезапускается
            (можно передавать int - они будут классифицированы)

    Examples:
        >>> RetryConfig(max_attempts=3, retry_on={502, 503})
        >>> RetryConfig.on_timeout(max_attempts=2)
    """
    max_attempts: int = 0
    retry_on: FrozenSet[StatusCode] = field(default_factory=frozenset)

    def __post_init__(self):
        """Валидация."""
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be non-negative")
        object.__setattr__(self, 'retry_on', _to_status_set(self.retry_on))

    @classmethod
    def on_timeout(cls, max_attempts: int) -> 'RetryConfig':
        """Retry только при таймаутах (транспорта и 408)."""
        return cls(
            max_attempts=max_attempts,
            retry_on={StatusCode.TIMED_OUT, StatusCode.REQUEST_TIMEOUT}
        )

    @property
    def enabled(self) -> bool:
        return self.max_attempts > 0 and bool(self.retry_on)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REQUEST DESCRIPTOR
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RequestDescriptor:
    """
    Описание логического запроса.

    Args:
        url: Полный URL
        method: HTTP метод
        timeout: Бюджет транспорта на одну попытку (сек)
        additional_timeout: Минимальная воспринимаемая длительность ответа (сек)
        retry: Конфигурация retry
        success_codes: Статус коды, считающиеся успешными
        result_shape: Ожидаемая форма результата (тип или ResultShape)
        date_strategy: Стратегия разбора дат (переопределяет ResolverContext)
        headers: Заголовки запроса
        params: Query параметры
        data: Уже сериализованное тело запроса
        on_unauthorized: Вызывается вместо on_error при 401
        on_timeout: Вызывается вместо on_error при таймауте

    Examples:
        >>> RequestDescriptor(url="https://api.example.com/users", result_shape=list[User])
        >>> RequestDescriptor.create("https://api.example.com/ping", result_type=bool,
        ...                          max_retries=2, retry_on=[503])
    """
    url: str
    method: str = "GET"
    timeout: float = 15.0
    additional_timeout: float = 0.0
    retry: RetryConfig = field(default_factory=RetryConfig)
    success_codes: FrozenSet[int] = field(default_factory=lambda: frozenset({200}))
    result_shape: Any = NoContent
    date_strategy: Optional[DateDecodingStrategy] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    data: Optional[bytes] = None
    on_unauthorized: Optional[Callable[[], None]] = field(default=None, compare=False)
    on_timeout: Optional[Callable[[], None]] = field(default=None, compare=False)

    def __post_init__(self):
        """Валидация и нормализация."""
        if not self.url:
            raise ValueError("url must not be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.additional_timeout < 0:
            raise ValueError("additional_timeout must be non-negative")
        if not self.success_codes:
            raise ValueError("success_codes must not be empty")
        for code in self.success_codes:
            if not 100 <= code <= 599:
                raise ValueError(f"invalid success status code: {code}")

        object.__setattr__(self, 'method', self.method.upper())
        object.__setattr__(self, 'success_codes', frozenset(self.success_codes))
        object.__setattr__(self, 'result_shape', ResultShape.of(self.result_shape))
        object.__setattr__(self, 'headers', _freeze_dict(self.headers))
        object.__setattr__(self, 'params', _freeze_dict(self.params))

    @classmethod
    def create(
        cls,
        url: str,
        method: str = "GET",
        result_type: Any = NoContent,
        timeout: float = 15.0,
        additional_timeout: float = 0.0,
        max_retries: int = 0,
        retry_on: Optional[Iterable[Union[int, StatusCode]]] = None,
        success_codes: Optional[Iterable[int]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> 'RequestDescriptor':
        """
        Удобный конструктор дескриптора.

        Args:
            url: URL запроса
            method: HTTP метод
            result_type: Ожидаемый тип результата
            timeout: Таймаут попытки
            additional_timeout: Минимальная воспринимаемая длительность
            max_retries: Количество повторов
            retry_on: Статусы для retry (int или StatusCode)
            success_codes: Успешные статус коды (по умолчанию {200})
            headers: Заголовки

        Returns:
            RequestDescriptor instance
        """
        retry_cfg = RetryConfig(max_attempts=max_retries, retry_on=frozenset(retry_on or ()))

        return cls(
            url=url,
            method=method,
            result_shape=result_type,
            timeout=timeout,
            additional_timeout=additional_timeout,
            retry=retry_cfg,
            success_codes=frozenset(success_codes) if success_codes else frozenset({200}),
            headers=headers or {},
            **kwargs
        )

    def with_retries(
        self,
        max_attempts: int,
        retry_on: Optional[Iterable[Union[int, StatusCode]]] = None
    ) -> 'RequestDescriptor':
        """
        Создать новый дескриптор с изменённым retry.

        Args:
            max_attempts: Максимум повторов
            retry_on: Классификации для retry (по умолчанию - текущие)

        Example:
            >>> new_descriptor = descriptor.with_retries(3, retry_on=[503])
        """
        retry_cfg = RetryConfig(
            max_attempts=max_attempts,
            retry_on=frozenset(retry_on) if retry_on is not None else self.retry.retry_on
        )
        return dataclasses.replace(self, retry=retry_cfg)

    def with_additional_timeout(self, seconds: float) -> 'RequestDescriptor':
        """Создать новый дескриптор с изменённым additional_timeout."""
        return dataclasses.replace(self, additional_timeout=seconds)

    def with_success_codes(self, *codes: int) -> 'RequestDescriptor':
        """Создать новый дескриптор с другим набором успешных статусов."""
        return dataclasses.replace(self, success_codes=frozenset(codes))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RESOLVER CONTEXT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ResolverContext:
    """
    Процессные хуки и настройки по умолчанию.

    Передаётся в ResponseResolver явно; живёт столько же, сколько резолвер.

    Args:
        unauthorized_hook: Вызывается при каждом 401 (до per-request callback)
        success_observer: Вызывается первым при каждой успешной доставке
            с (method, url) - для метрик
        date_strategy: Стратегия дат по умолчанию
        logging: Конфигурация логирования (None = только NullHandler)

    Examples:
        >>> context = ResolverContext(unauthorized_hook=session.logout)
        >>> context = ResolverContext(
        ...     date_strategy=DateDecodingStrategy.SECONDS_SINCE_1970,
        ...     logging=LoggingConfig.create(level="DEBUG", format="json"),
        ... )
    """
    unauthorized_hook: Optional[Callable[[], None]] = field(default=None, compare=False)
    success_observer: Optional[Callable[[str, str], None]] = field(default=None, compare=False)
    date_strategy: Optional[DateDecodingStrategy] = None
    logging: Optional['LoggingConfig'] = None
