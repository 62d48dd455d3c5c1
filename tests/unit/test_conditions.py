from __future__ import annotations

import pytest

from dynamap_py import (
    KeyCondition,
    RangeClause,
    ValidationError,
    conditions_to_wire,
    hash_condition,
    merge,
    normalize_operator,
    range_condition,
)


@pytest.mark.parametrize(
    ("symbol", "expected"),
    [(">", "GT"), (">=", "GE"), ("<", "LT"), ("<=", "LE"), ("=", "EQ")],
)
def test_normalize_operator_symbols(symbol: str, expected: str) -> None:
    assert normalize_operator(symbol) == expected


def test_normalize_operator_passes_unknown_through_upper_cased() -> None:
    assert normalize_operator("begins_with") == "BEGINS_WITH"
    assert normalize_operator("gt") == "GT"


def test_normalize_operator_rejects_empty() -> None:
    with pytest.raises(ValidationError):
        normalize_operator("")


def test_hash_condition_is_single_eq_entry() -> None:
    cond = hash_condition("id", 1)
    assert cond == {"id": KeyCondition(comparator="EQ", values=({"N": "1"},))}


def test_merge_without_range_returns_hash_alone() -> None:
    cond = hash_condition("id", 1)
    assert merge(cond) == cond
    assert merge(cond, None) == cond


def test_merge_with_range_yields_both_entries() -> None:
    merged = merge(hash_condition("id", 1), range_condition("ts", ">=", 100))
    assert merged == {
        "id": KeyCondition(comparator="EQ", values=({"N": "1"},)),
        "ts": KeyCondition(comparator="GE", values=({"N": "100"},)),
    }


def test_merge_rejects_shared_attribute() -> None:
    with pytest.raises(ValidationError, match="share attributes"):
        merge(hash_condition("id", 1), range_condition("id", ">", 2))


def test_range_condition_begins_with_passes_through() -> None:
    assert range_condition("name", "begins_with", "ab") == {
        "name": KeyCondition(comparator="BEGINS_WITH", values=({"S": "ab"},))
    }


def test_range_condition_rejects_end_value() -> None:
    with pytest.raises(ValidationError, match="single value"):
        range_condition("ts", "=", 1, 5)


def test_range_condition_rejects_between() -> None:
    with pytest.raises(ValidationError, match="BETWEEN"):
        range_condition("ts", "between", 1)


def test_range_clause_constructors() -> None:
    assert RangeClause.eq("ts", 1) == RangeClause(attribute="ts", op="=", value=1)
    assert RangeClause.lt("ts", 1) == RangeClause(attribute="ts", op="<", value=1)
    assert RangeClause.lte("ts", 1) == RangeClause(attribute="ts", op="<=", value=1)
    assert RangeClause.gt("ts", 1) == RangeClause(attribute="ts", op=">", value=1)
    assert RangeClause.gte("ts", 1) == RangeClause(attribute="ts", op=">=", value=1)
    assert RangeClause.begins_with("ts", "a") == RangeClause(attribute="ts", op="begins_with", value="a")
    assert RangeClause.gte("ts", 7).to_condition() == range_condition("ts", ">=", 7)


def test_conditions_to_wire_shape() -> None:
    wire = conditions_to_wire(merge(hash_condition("id", "a"), range_condition("ts", "<", 3.5)))
    assert wire == {
        "id": {"ComparisonOperator": "EQ", "AttributeValueList": [{"S": "a"}]},
        "ts": {"ComparisonOperator": "LT", "AttributeValueList": [{"N": "3.5"}]},
    }


def test_condition_attribute_names_follow_item_name_rules() -> None:
    assert list(hash_condition(0, 1)) == ["0"]  # type: ignore[arg-type]
    assert list(range_condition(0, "<", 5)) == ["0"]  # type: ignore[arg-type]
    with pytest.raises(ValidationError, match="attribute name"):
        hash_condition("", 1)
