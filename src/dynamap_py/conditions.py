from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .codec import WireValue, encode
from .errors import ValidationError
from .items import attribute_name

_OPERATORS = {">": "GT", ">=": "GE", "<": "LT", "<=": "LE", "=": "EQ"}


@dataclass(frozen=True)
class KeyCondition:
    comparator: str
    values: tuple[WireValue, ...]

    def to_wire(self) -> dict[str, Any]:
        return {"ComparisonOperator": self.comparator, "AttributeValueList": list(self.values)}


type Conditions = dict[str, KeyCondition]


@dataclass(frozen=True)
class RangeClause:
    attribute: str
    op: str
    value: Any
    end: Any | None = None

    @staticmethod
    def eq(attribute: str, value: Any) -> RangeClause:
        return RangeClause(attribute=attribute, op="=", value=value)

    @staticmethod
    def lt(attribute: str, value: Any) -> RangeClause:
        return RangeClause(attribute=attribute, op="<", value=value)

    @staticmethod
    def lte(attribute: str, value: Any) -> RangeClause:
        return RangeClause(attribute=attribute, op="<=", value=value)

    @staticmethod
    def gt(attribute: str, value: Any) -> RangeClause:
        return RangeClause(attribute=attribute, op=">", value=value)

    @staticmethod
    def gte(attribute: str, value: Any) -> RangeClause:
        return RangeClause(attribute=attribute, op=">=", value=value)

    @staticmethod
    def begins_with(attribute: str, prefix: str) -> RangeClause:
        return RangeClause(attribute=attribute, op="begins_with", value=prefix)

    def to_condition(self) -> Conditions:
        return range_condition(self.attribute, self.op, self.value, self.end)


def normalize_operator(symbol: str) -> str:
    op = str(symbol or "").strip()
    if not op:
        raise ValidationError("operator is required")
    return _OPERATORS.get(op, op.upper())


def hash_condition(attribute: str, value: Any) -> Conditions:
    return {attribute_name(attribute): KeyCondition(comparator="EQ", values=(encode(value),))}


def range_condition(attribute: str, op: str, value: Any, end: Any | None = None) -> Conditions:
    comparator = normalize_operator(op)
    if comparator == "BETWEEN":
        raise ValidationError("BETWEEN range conditions are not supported")
    if end is not None:
        raise ValidationError(f"{comparator} takes a single value; got an end value as well")
    return {attribute_name(attribute): KeyCondition(comparator=comparator, values=(encode(value),))}


def merge(hash_cond: Conditions, range_cond: Conditions | None = None) -> Conditions:
    if not range_cond:
        return dict(hash_cond)

    overlap = set(hash_cond).intersection(range_cond)
    if overlap:
        raise ValidationError(f"hash and range conditions share attributes: {sorted(overlap)}")
    return {**hash_cond, **range_cond}


def conditions_to_wire(conditions: Mapping[str, KeyCondition]) -> dict[str, Any]:
    return {name: cond.to_wire() for name, cond in conditions.items()}
