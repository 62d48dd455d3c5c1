from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from .builders import BatchGetSpec
from .errors import ValidationError
from .items import Item, wire_to_item
from .writes import Delete, Put, WriteOp


class ResultKind(StrEnum):
    GET_ITEM = "get_item"
    QUERY = "query"
    SCAN = "scan"
    BATCH_GET = "batch_get_item"
    BATCH_WRITE = "batch_write_item"
    DESCRIBE_TABLE = "describe_table"


@dataclass(frozen=True)
class Page:
    items: list[Item]
    count: int
    last_key: Item | None = None


@dataclass(frozen=True)
class BatchGetResult:
    responses: dict[str, list[Item]]
    unprocessed: dict[str, BatchGetSpec] = field(default_factory=dict)


@dataclass(frozen=True)
class BatchWriteResult:
    unprocessed: dict[str, list[WriteOp]] = field(default_factory=dict)

    def pending(self) -> list[tuple[str, WriteOp]]:
        return [(table, op) for table, ops in self.unprocessed.items() for op in ops]


@dataclass(frozen=True)
class KeySchemaElement:
    name: str
    key_type: str


@dataclass(frozen=True)
class Throughput:
    read: int | None
    write: int | None
    last_decrease: datetime | None = None
    last_increase: datetime | None = None


@dataclass(frozen=True)
class TableDescription:
    name: str
    creation_date: datetime | None
    item_count: int | None
    key_schema: list[KeySchemaElement]
    throughput: Throughput
    status: str


type Result = Item | None | Page | BatchGetResult | BatchWriteResult | TableDescription


def map_get_item(resp: Mapping[str, Any]) -> Item | None:
    item = resp.get("Item")
    if not item:
        return None
    return wire_to_item(item)


def map_page(resp: Mapping[str, Any]) -> Page:
    items = [wire_to_item(item) for item in resp.get("Items") or []]
    count = resp.get("Count")
    last = resp.get("LastEvaluatedKey")
    return Page(
        items=items,
        count=int(count) if count is not None else len(items),
        last_key=wire_to_item(last) if last else None,
    )


def _unprocessed_keys(entry: Mapping[str, Any]) -> BatchGetSpec:
    attrs = entry.get("AttributesToGet")
    consistent = entry.get("ConsistentRead")
    return BatchGetSpec(
        keys=[wire_to_item(k) for k in entry.get("Keys") or []],
        attrs=list(attrs) if attrs else None,
        consistent=consistent if consistent is not None else None,
    )


def map_batch_get(resp: Mapping[str, Any]) -> BatchGetResult:
    responses = {
        str(table): [wire_to_item(item) for item in items or []]
        for table, items in (resp.get("Responses") or {}).items()
    }
    unprocessed = {
        str(table): _unprocessed_keys(entry)
        for table, entry in (resp.get("UnprocessedKeys") or {}).items()
        if entry and entry.get("Keys")
    }
    return BatchGetResult(responses=responses, unprocessed=unprocessed)


def _write_op(request: Mapping[str, Any]) -> WriteOp:
    if "PutRequest" in request:
        return Put(item=wire_to_item(request["PutRequest"].get("Item")))
    if "DeleteRequest" in request:
        return Delete(key=wire_to_item(request["DeleteRequest"].get("Key")))
    raise ValidationError(f"unsupported write request: {sorted(request)}")


def map_batch_write(resp: Mapping[str, Any]) -> BatchWriteResult:
    unprocessed = {
        str(table): [_write_op(r) for r in requests]
        for table, requests in (resp.get("UnprocessedItems") or {}).items()
        if requests
    }
    return BatchWriteResult(unprocessed=unprocessed)


def map_table_description(resp: Mapping[str, Any]) -> TableDescription:
    table = resp.get("Table")
    if not isinstance(table, Mapping):
        raise ValidationError("describe_table response has no Table")

    throughput = table.get("ProvisionedThroughput") or {}
    return TableDescription(
        name=str(table.get("TableName", "")),
        creation_date=table.get("CreationDateTime"),
        item_count=table.get("ItemCount"),
        key_schema=[
            KeySchemaElement(name=str(el.get("AttributeName", "")), key_type=str(el.get("KeyType", "")))
            for el in table.get("KeySchema") or []
        ],
        throughput=Throughput(
            read=throughput.get("ReadCapacityUnits"),
            write=throughput.get("WriteCapacityUnits"),
            last_decrease=throughput.get("LastDecreaseDateTime"),
            last_increase=throughput.get("LastIncreaseDateTime"),
        ),
        status=str(table.get("TableStatus", "")).lower(),
    )


def map_result(kind: ResultKind | str, resp: Mapping[str, Any]) -> Result:
    try:
        kind = ResultKind(kind)
    except ValueError as err:
        raise ValidationError(f"unsupported result kind: {kind!r}") from err

    if kind is ResultKind.GET_ITEM:
        return map_get_item(resp)
    if kind is ResultKind.QUERY or kind is ResultKind.SCAN:
        return map_page(resp)
    if kind is ResultKind.BATCH_GET:
        return map_batch_get(resp)
    if kind is ResultKind.BATCH_WRITE:
        return map_batch_write(resp)
    if kind is ResultKind.DESCRIBE_TABLE:
        return map_table_description(resp)
    raise ValidationError(f"unsupported result kind: {kind!r}")
