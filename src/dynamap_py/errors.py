from __future__ import annotations

from enum import StrEnum
from typing import Any


class DynamapError(Exception):
    pass


class ValidationError(DynamapError):
    pass


class EncodeErrorKind(StrEnum):
    EMPTY_STRING = "EmptyString"
    EMPTY_SET = "EmptySet"
    HETEROGENEOUS_SET = "HeterogeneousSet"
    UNSUPPORTED_TYPE = "UnsupportedType"


class EncodeError(ValidationError):
    kind: EncodeErrorKind

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(f"{self.kind}: {message}")
        self.value = value


class EmptyStringError(EncodeError):
    kind = EncodeErrorKind.EMPTY_STRING

    def __init__(self, value: Any = "") -> None:
        super().__init__("empty string is not a legal attribute value", value=value)


class EmptySetError(EncodeError):
    kind = EncodeErrorKind.EMPTY_SET

    def __init__(self, value: Any = None) -> None:
        super().__init__("sets must be non-empty", value=value)


class HeterogeneousSetError(EncodeError):
    kind = EncodeErrorKind.HETEROGENEOUS_SET

    def __init__(self, value: Any = None) -> None:
        super().__init__("set members must all be strings, numbers or bytes", value=value)


class UnsupportedTypeError(EncodeError):
    kind = EncodeErrorKind.UNSUPPORTED_TYPE

    def __init__(self, value: Any = None) -> None:
        super().__init__(f"unsupported value type: {type(value).__name__}", value=value)
