from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from boto3.dynamodb.types import (
    BINARY,
    BINARY_SET,
    NUMBER,
    NUMBER_SET,
    STRING,
    STRING_SET,
    Binary,
)

from .errors import (
    EmptySetError,
    EmptyStringError,
    HeterogeneousSetError,
    UnsupportedTypeError,
    ValidationError,
)

type WireValue = dict[str, Any]

_SET_TAGS = {STRING: STRING_SET, NUMBER: NUMBER_SET, BINARY: BINARY_SET}


def _scalar_kind(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return STRING
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, (bytes, bytearray, Binary)):
        return BINARY
    return None


def number_text(value: int | float) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedTypeError(value)
    if isinstance(value, int):
        return str(int(value))
    if not math.isfinite(value):
        raise UnsupportedTypeError(value)

    text = repr(float(value))
    if "." in text:
        return text
    # exponent form, e.g. 1e+20
    mantissa, _, exponent = text.partition("e")
    if exponent:
        return f"{mantissa}.0e{exponent}"
    return f"{text}.0"


def _number_from_text(text: Any) -> int | float:
    if not isinstance(text, str) or not text:
        raise ValidationError("N value must be a non-empty string")
    try:
        if "." in text:
            return float(text)
        d = Decimal(text)
        if not d.is_finite() or d != d.to_integral_value():
            raise ValidationError(f"invalid number: {text!r}")
        return int(d)
    except (ValueError, InvalidOperation, OverflowError) as err:
        raise ValidationError(f"invalid number: {text!r}") from err


def _binary_bytes(value: Any) -> bytes:
    if isinstance(value, Binary):
        return bytes(value.value)
    return bytes(value)


def _encode_scalar(kind: str, value: Any) -> Any:
    if kind == STRING:
        if not value:
            raise EmptyStringError(value)
        return value
    if kind == NUMBER:
        return number_text(value)
    return _binary_bytes(value)


def _encode_set(values: set[Any] | frozenset[Any]) -> WireValue:
    if not values:
        raise EmptySetError(values)

    kinds = {_scalar_kind(v) for v in values}
    if None in kinds:
        raise UnsupportedTypeError(next(v for v in values if _scalar_kind(v) is None))
    if len(kinds) != 1:
        raise HeterogeneousSetError(values)
    (kind,) = kinds

    if kind == NUMBER:
        members = [number_text(v) for v in sorted(values)]
    elif kind == BINARY:
        members = sorted(_binary_bytes(v) for v in values)
    else:
        members = [_encode_scalar(STRING, v) for v in sorted(values)]
    return {_SET_TAGS[kind]: members}


def encode(value: Any) -> WireValue:
    if isinstance(value, (set, frozenset)):
        return _encode_set(value)

    kind = _scalar_kind(value)
    if kind is None:
        raise UnsupportedTypeError(value)
    return {kind: _encode_scalar(kind, value)}


def decode(wire: Mapping[str, Any]) -> Any:
    if not isinstance(wire, Mapping) or len(wire) != 1:
        raise ValidationError("attribute value must be a single-key map")
    (kind, value), *_ = wire.items()

    if kind == STRING:
        if not isinstance(value, str):
            raise ValidationError("S value must be a string")
        return value
    if kind == NUMBER:
        return _number_from_text(value)
    if kind == BINARY:
        return _binary_bytes(value)

    if kind in {STRING_SET, NUMBER_SET, BINARY_SET}:
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValidationError(f"{kind} value must be a list")
        if kind == STRING_SET:
            return {str(v) for v in value}
        if kind == NUMBER_SET:
            return {_number_from_text(v) for v in value}
        return {_binary_bytes(v) for v in value}

    raise ValidationError(f"unsupported attribute value type: {kind}")
