"""
Decoding of response bodies into the result shape declared by the caller.

The expected shape is resolved once per request into a ``ResultShape``:

- EMPTY: the caller wants no content (``NoContent`` marker or ``None``)
- RAW: the caller wants the raw ``bytes``
- PRIMITIVE: ``bool``, ``int``, ``float`` or ``str``
- STRUCTURED: anything pydantic can validate (models, dataclasses, ``list[...]``)

``ResultDecoder.decode`` never raises; every failure becomes ``DecodeFailure``.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Union

from pydantic import TypeAdapter

from .dates import DateDecodingStrategy, DateStrategyKind, coerce_dates, resolve_strategy
from .exceptions import DecodingError

logger = logging.getLogger(__name__)


class NoContent:
    """Marker result type for endpoints whose body is ignored."""

    def __repr__(self) -> str:
        return "NoContent()"


PRIMITIVE_TYPES = (bool, int, float, str)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RESULT SHAPE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ShapeKind(str, Enum):
    EMPTY = "empty"
    RAW = "raw"
    PRIMITIVE = "primitive"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class ResultShape:
    """
    Expected result of a request.

    Examples:
        >>> ResultShape.of(NoContent).kind
        <ShapeKind.EMPTY: 'empty'>
        >>> ResultShape.of(int).kind
        <ShapeKind.PRIMITIVE: 'primitive'>
        >>> ResultShape.of(list[User]).kind
        <ShapeKind.STRUCTURED: 'structured'>
    """
    kind: ShapeKind
    target: Any = None

    @classmethod
    def of(cls, target: Any) -> "ResultShape":
        """Resolve a Python type into its shape."""
        if isinstance(target, ResultShape):
            return target
        if target is None or target is type(None) or target is NoContent:
            return cls.empty()
        if target is bytes:
            return cls.raw()
        if target in PRIMITIVE_TYPES:
            return cls.primitive(target)
        return cls.structured(target)

    @classmethod
    def empty(cls) -> "ResultShape":
        return cls(ShapeKind.EMPTY)

    @classmethod
    def raw(cls) -> "ResultShape":
        return cls(ShapeKind.RAW, bytes)

    @classmethod
    def primitive(cls, target: type) -> "ResultShape":
        if target not in PRIMITIVE_TYPES:
            raise ValueError(f"{target!r} is not a primitive type")
        return cls(ShapeKind.PRIMITIVE, target)

    @classmethod
    def structured(cls, target: Any) -> "ResultShape":
        return cls(ShapeKind.STRUCTURED, target)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# OUTCOMES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class Empty:
    """Body ignored."""
    value: None = None


@dataclass(frozen=True)
class Primitive:
    value: Union[bool, int, float, str]


@dataclass(frozen=True)
class Structured:
    value: Any


@dataclass(frozen=True)
class DecodeFailure:
    """Decoding failed; ``cause`` keeps the underlying exception for diagnostics."""
    cause: Optional[BaseException] = field(default=None, compare=False)

    @property
    def value(self) -> None:
        return None


DecodedOutcome = Union[Empty, Primitive, Structured, DecodeFailure]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# DECODER
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@lru_cache(maxsize=256)
def _type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


class ResultDecoder:
    """
    Polymorphic body decoder.

    Args:
        default_date_strategy: Strategy used when a request has no override

    Example:
        >>> decoder = ResultDecoder()
        >>> decoder.decode(ResultShape.of(int), b'["42"]')
        Primitive(value=42)
    """

    def __init__(self, default_date_strategy: Optional[DateDecodingStrategy] = None):
        self.default_date_strategy = default_date_strategy

    def decode(
        self,
        shape: ResultShape,
        body: Optional[bytes],
        date_strategy: Optional[DateDecodingStrategy] = None
    ) -> DecodedOutcome:
        """
        Decode ``body`` according to ``shape``.

        Args:
            shape: Expected result shape
            body: Raw body bytes (None if the transport returned none)
            date_strategy: Per-request override of the date strategy

        Returns:
            Empty, Primitive, Structured or DecodeFailure
        """
        if shape.kind is ShapeKind.EMPTY:
            return Empty()

        if body is None:
            return DecodeFailure(DecodingError("Response has no body", shape.target))

        if shape.kind is ShapeKind.RAW:
            return Structured(body)

        try:
            if shape.kind is ShapeKind.PRIMITIVE:
                return Primitive(decode_primitive(shape.target, body))

            strategy = resolve_strategy(date_strategy, self.default_date_strategy)
            return Structured(self._decode_structured(shape.target, body, strategy))
        except Exception as e:
            logger.error(
                "Unable to decode response as %s: %s",
                getattr(shape.target, '__name__', shape.target), e
            )
            return DecodeFailure(e)

    def _decode_structured(self, target: Any, body: bytes, strategy: DateDecodingStrategy) -> Any:
        adapter = _type_adapter(target)

        # pydantic parses ISO 8601 natively
        if strategy.kind is DateStrategyKind.ISO8601:
            return adapter.validate_json(body)

        data = json.loads(body)
        return adapter.validate_python(coerce_dates(data, target, strategy))


def decode_primitive(target: type, body: bytes) -> Union[bool, int, float, str]:
    """
    Parse a scalar from a body.

    Accepted forms: ``42``, ``"42"``, ``[42]``, ``["42"]`` and a single-entry
    object such as ``{"value": 42}``. A body that is not JSON is taken as a
    bare literal.

    Raises:
        DecodingError: the body does not hold exactly one scalar of ``target``
    """
    text = body.decode('utf-8').strip()

    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = text

    if isinstance(parsed, list):
        if len(parsed) != 1:
            raise DecodingError("Expected a single-element array", target, body)
        parsed = parsed[0]
    elif isinstance(parsed, dict):
        if len(parsed) != 1:
            raise DecodingError("Expected a single-entry object", target, body)
        parsed = next(iter(parsed.values()))

    if parsed is None or isinstance(parsed, (list, dict)):
        raise DecodingError("Expected a scalar", target, body)

    try:
        return _coerce_scalar(target, parsed)
    except (TypeError, ValueError) as e:
        raise DecodingError(str(e), target, body) from e


def _coerce_scalar(target: type, value: Any) -> Union[bool, int, float, str]:
    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValueError(f"not a boolean: {value!r}")

    if target is int:
        if isinstance(value, bool):
            raise TypeError("boolean is not an integer")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"not an integer: {value!r}")
            return int(value)
        return int(value)

    if target is float:
        if isinstance(value, bool):
            raise TypeError("boolean is not a float")
        return float(value)

    # str
    if isinstance(value, str):
        return value
    return json.dumps(value)
