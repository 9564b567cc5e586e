"""
Date decoding strategies for structured response bodies.

A strategy is resolved per request in this order: descriptor override,
``ResolverContext.date_strategy``, ``DateDecodingStrategy.ISO8601``.
"""

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel


class DateStrategyKind(str, Enum):
    """Supported date encodings."""
    ISO8601 = "iso8601"
    SECONDS_SINCE_1970 = "seconds_since_1970"
    MILLISECONDS_SINCE_1970 = "milliseconds_since_1970"
    FORMATTED = "formatted"


@dataclass(frozen=True)
class DateDecodingStrategy:
    """
    How date values are encoded in response bodies.

    Examples:
        >>> DateDecodingStrategy.ISO8601
        >>> DateDecodingStrategy.SECONDS_SINCE_1970
        >>> DateDecodingStrategy.formatted("%d.%m.%Y %H:%M")
    """
    kind: DateStrategyKind = DateStrategyKind.ISO8601
    format: Optional[str] = None

    ISO8601 = None  # type: DateDecodingStrategy
    SECONDS_SINCE_1970 = None  # type: DateDecodingStrategy
    MILLISECONDS_SINCE_1970 = None  # type: DateDecodingStrategy

    def __post_init__(self):
        if self.kind is DateStrategyKind.FORMATTED and not self.format:
            raise ValueError("formatted date strategy requires a format")

    @classmethod
    def formatted(cls, fmt: str) -> "DateDecodingStrategy":
        """Strategy using a ``strptime`` pattern."""
        return cls(DateStrategyKind.FORMATTED, fmt)

    @classmethod
    def from_name(cls, name: str, fmt: Optional[str] = None) -> "DateDecodingStrategy":
        """Build from a config string (``iso8601``, ``seconds_since_1970``, ...)."""
        kind = DateStrategyKind(name.lower())
        if kind is DateStrategyKind.FORMATTED:
            return cls.formatted(fmt or "")
        return cls(kind)

    def parse(self, value: Any) -> datetime:
        """
        Convert one encoded value to ``datetime``.

        Raises:
            ValueError, TypeError: value does not match the strategy
        """
        if isinstance(value, datetime):
            return value

        if self.kind is DateStrategyKind.ISO8601:
            if not isinstance(value, str):
                raise TypeError(f"ISO 8601 date must be a string, got {type(value).__name__}")
            return datetime.fromisoformat(value.replace("Z", "+00:00"))

        if self.kind is DateStrategyKind.FORMATTED:
            if not isinstance(value, str):
                raise TypeError(f"formatted date must be a string, got {type(value).__name__}")
            return datetime.strptime(value, self.format)

        if isinstance(value, bool):
            raise TypeError("boolean is not a timestamp")
        seconds = float(value)
        if self.kind is DateStrategyKind.MILLISECONDS_SINCE_1970:
            seconds = seconds / 1000.0
        return datetime.fromtimestamp(seconds, tz=timezone.utc)


DateDecodingStrategy.ISO8601 = DateDecodingStrategy(DateStrategyKind.ISO8601)
DateDecodingStrategy.SECONDS_SINCE_1970 = DateDecodingStrategy(DateStrategyKind.SECONDS_SINCE_1970)
DateDecodingStrategy.MILLISECONDS_SINCE_1970 = DateDecodingStrategy(
    DateStrategyKind.MILLISECONDS_SINCE_1970
)


def resolve_strategy(*candidates: Optional[DateDecodingStrategy]) -> DateDecodingStrategy:
    """First non-None strategy, falling back to ISO 8601."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return DateDecodingStrategy.ISO8601


_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)
_SEQUENCE_ORIGINS = (list, set, frozenset, collections.abc.Sequence, collections.abc.Iterable)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping)


def coerce_dates(value: Any, annotation: Any, strategy: DateDecodingStrategy) -> Any:
    """
    Replace encoded dates in ``value`` wherever ``annotation`` expects one.

    Walks pydantic models, dataclasses, sequences, tuples, dict values,
    ``Optional`` and ``Annotated``. Values at other positions are returned
    untouched so the schema validator still sees them.

    Example:
        >>> class Event(BaseModel):
        ...     at: datetime
        >>> coerce_dates({"at": 0}, Event, DateDecodingStrategy.SECONDS_SINCE_1970)
        {'at': datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)}
    """
    if value is None:
        return None

    if annotation is datetime:
        return strategy.parse(value)
    if annotation is date:
        return strategy.parse(value).date()

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return coerce_dates(value, args[0], strategy)

    if origin in _UNION_TYPES:
        options = [arg for arg in args if arg is not type(None)]
        if len(options) == 1:
            return coerce_dates(value, options[0], strategy)
        return value

    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        if not isinstance(value, dict):
            return value
        result = dict(value)
        for name, info in annotation.model_fields.items():
            key = info.alias or name
            if key in result:
                result[key] = coerce_dates(result[key], info.annotation, strategy)
        return result

    if dataclasses.is_dataclass(annotation) and isinstance(annotation, type):
        if not isinstance(value, dict):
            return value
        hints = typing.get_type_hints(annotation)
        result = dict(value)
        for f in dataclasses.fields(annotation):
            if f.name in result:
                result[f.name] = coerce_dates(result[f.name], hints.get(f.name), strategy)
        return result

    if origin in _SEQUENCE_ORIGINS and isinstance(value, list) and args:
        return [coerce_dates(item, args[0], strategy) for item in value]

    if origin is tuple and isinstance(value, list) and args:
        if len(args) == 2 and args[1] is Ellipsis:
            return [coerce_dates(item, args[0], strategy) for item in value]
        positional = [coerce_dates(item, arg, strategy) for item, arg in zip(value, args)]
        return positional + value[len(args):]

    if origin in _MAPPING_ORIGINS and isinstance(value, dict) and len(args) == 2:
        return {key: coerce_dates(item, args[1], strategy) for key, item in value.items()}

    return value
