from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from .codec import encode
from .conditions import RangeClause, conditions_to_wire, hash_condition, merge
from .errors import ValidationError
from .items import WireItem, item_to_wire, key_to_wire
from .writes import Delete, Put, WriteOp, group_writes

type Order = Literal["asc", "desc"]


@dataclass(frozen=True)
class BatchGetSpec:
    keys: Sequence[Any]
    key_name: str | None = None
    attrs: Sequence[str] | None = None
    consistent: bool | None = None


def _table(name: str) -> str:
    if not name:
        raise ValidationError("table name is required")
    return str(name)


def _limit(limit: int | None) -> int | None:
    if limit is not None and limit <= 0:
        raise ValidationError("limit must be > 0")
    return limit


def _expected(expected: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, value in expected.items():
        if value is False:
            out[str(name)] = {"Exists": False}
        else:
            out[str(name)] = {"Value": encode(value)}
    return out


def build_put_item(
    table: str,
    item: Mapping[str, Any],
    *,
    expected: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    req: dict[str, Any] = {"TableName": _table(table), "Item": item_to_wire(item)}
    if expected:
        req["Expected"] = _expected(expected)
    return req


def build_get_item(table: str, key: Mapping[str, Any]) -> dict[str, Any]:
    return {"TableName": _table(table), "Key": key_to_wire(key)}


def build_delete_item(table: str, key: Mapping[str, Any]) -> dict[str, Any]:
    return {"TableName": _table(table), "Key": key_to_wire(key)}


def build_scan(
    table: str,
    *,
    limit: int | None = None,
    cursor: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    req: dict[str, Any] = {"TableName": _table(table)}
    if _limit(limit) is not None:
        req["Limit"] = limit
    if cursor:
        req["ExclusiveStartKey"] = key_to_wire(cursor)
    return req


def build_query(
    table: str,
    hash_key: Mapping[str, Any],
    range_clause: RangeClause | None = None,
    *,
    order: Order | None = None,
    limit: int | None = None,
    consistent: bool = False,
    attrs: Sequence[str] | None = None,
    index: str | None = None,
    cursor: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    if not isinstance(hash_key, Mapping) or len(hash_key) != 1:
        raise ValidationError("hash_key must be a single {attribute: value} mapping")
    if order is not None and order not in {"asc", "desc"}:
        raise ValidationError(f"order must be 'asc' or 'desc': {order!r}")

    ((hash_attr, hash_value),) = hash_key.items()
    conditions = merge(
        hash_condition(hash_attr, hash_value),
        range_clause.to_condition() if range_clause is not None else None,
    )

    req: dict[str, Any] = {
        "TableName": _table(table),
        "KeyConditions": conditions_to_wire(conditions),
        "ScanIndexForward": order != "desc",
    }
    if _limit(limit) is not None:
        req["Limit"] = limit
    if consistent:
        req["ConsistentRead"] = True
    if attrs:
        req["AttributesToGet"] = [str(a) for a in attrs]
    if index is not None:
        req["IndexName"] = index
    if cursor:
        req["ExclusiveStartKey"] = key_to_wire(cursor)
    return req


def _batch_keys(table: str, spec: BatchGetSpec) -> list[WireItem]:
    keys: list[WireItem] = []
    for key in spec.keys:
        if isinstance(key, Mapping):
            keys.append(key_to_wire(key))
            continue
        if not spec.key_name:
            raise ValidationError(f"{table}: key_name is required for bare key values")
        keys.append(key_to_wire({spec.key_name: key}))
    if not keys:
        raise ValidationError(f"{table}: at least one key is required")
    return keys


def build_batch_get(requests: Mapping[str, BatchGetSpec | Sequence[Mapping[str, Any]]]) -> dict[str, Any]:
    if not requests:
        raise ValidationError("requests is required")

    request_items: dict[str, Any] = {}
    for table, spec in requests.items():
        name = _table(table)
        if not isinstance(spec, BatchGetSpec):
            spec = BatchGetSpec(keys=list(spec))

        entry: dict[str, Any] = {"Keys": _batch_keys(name, spec)}
        if spec.attrs:
            entry["AttributesToGet"] = [str(a) for a in spec.attrs]
        if spec.consistent:
            entry["ConsistentRead"] = True
        request_items[name] = entry

    return {"RequestItems": request_items}


def write_request(op: WriteOp) -> dict[str, Any]:
    if isinstance(op, Put):
        return {"PutRequest": {"Item": item_to_wire(op.item)}}
    if isinstance(op, Delete):
        return {"DeleteRequest": {"Key": key_to_wire(op.key)}}
    raise ValidationError(f"unsupported write op: {type(op).__name__}")


def build_batch_write(ops: Sequence[tuple[str, WriteOp]]) -> dict[str, Any]:
    if not ops:
        raise ValidationError("ops is required")

    grouped = group_writes(ops)
    return {"RequestItems": {table: [write_request(op) for op in table_ops] for table, table_ops in grouped.items()}}
