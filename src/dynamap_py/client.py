from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from . import schema
from .builders import (
    BatchGetSpec,
    Order,
    build_batch_get,
    build_batch_write,
    build_delete_item,
    build_get_item,
    build_put_item,
    build_query,
    build_scan,
)
from .conditions import RangeClause
from .items import Item
from .results import (
    BatchGetResult,
    BatchWriteResult,
    Page,
    TableDescription,
    map_batch_get,
    map_batch_write,
    map_get_item,
    map_page,
)
from .runtime import AwsCallMetric, ClientConfig, create_dynamodb_client, instrument_dynamodb_client
from .schema import TableSpec, ThroughputSpec
from .writes import WriteOp

logger = logging.getLogger(__name__)


class Client:
    def __init__(
        self,
        client: Any | None = None,
        *,
        config: ClientConfig | None = None,
        metrics: Callable[[AwsCallMetric], None] | None = None,
    ) -> None:
        if client is not None and config is not None:
            raise ValueError("pass either client or config, not both")
        if client is None:
            client = create_dynamodb_client(config, metrics=metrics)
        elif metrics is not None:
            client = instrument_dynamodb_client(client, on_call=metrics)
        self._client: Any = client

    @property
    def raw(self) -> Any:
        return self._client

    def put_item(
        self,
        table: str,
        item: Mapping[str, Any],
        *,
        expected: Mapping[str, Any] | None = None,
    ) -> None:
        req = build_put_item(table, item, expected=expected)
        logger.debug("put_item %s", table)
        self._client.put_item(**req)

    def get_item(self, table: str, key: Mapping[str, Any]) -> Item | None:
        req = build_get_item(table, key)
        logger.debug("get_item %s", table)
        return map_get_item(self._client.get_item(**req))

    def delete_item(self, table: str, key: Mapping[str, Any]) -> None:
        req = build_delete_item(table, key)
        logger.debug("delete_item %s", table)
        self._client.delete_item(**req)

    def scan(
        self,
        table: str,
        *,
        limit: int | None = None,
        cursor: Mapping[str, Any] | None = None,
    ) -> Page:
        req = build_scan(table, limit=limit, cursor=cursor)
        logger.debug("scan %s (limit=%s, cursor=%s)", table, limit, cursor is not None)
        return map_page(self._client.scan(**req))

    def query(
        self,
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
    ) -> Page:
        req = build_query(
            table,
            hash_key,
            range_clause,
            order=order,
            limit=limit,
            consistent=consistent,
            attrs=attrs,
            index=index,
            cursor=cursor,
        )
        logger.debug("query %s (index=%s, limit=%s)", table, index, limit)
        return map_page(self._client.query(**req))

    def batch_get_item(
        self, requests: Mapping[str, BatchGetSpec | Sequence[Mapping[str, Any]]]
    ) -> BatchGetResult:
        req = build_batch_get(requests)
        logger.debug("batch_get_item %s", sorted(req["RequestItems"]))
        return map_batch_get(self._client.batch_get_item(**req))

    def batch_write_item(self, ops: Sequence[tuple[str, WriteOp]]) -> BatchWriteResult:
        req = build_batch_write(ops)
        logger.debug("batch_write_item %s", sorted(req["RequestItems"]))
        return map_batch_write(self._client.batch_write_item(**req))

    def describe_table(self, table: str) -> TableDescription | None:
        return schema.describe_table(self._client, table)

    def list_tables(self) -> list[str]:
        return schema.list_tables(self._client)

    def create_table(self, spec: TableSpec) -> None:
        schema.create_table(self._client, spec)

    def update_table(self, table: str, throughput: ThroughputSpec) -> None:
        schema.update_table(self._client, table, throughput)

    def ensure_table(self, spec: TableSpec) -> bool:
        return schema.ensure_table(self._client, spec)

    def delete_table(self, table: str) -> None:
        schema.delete_table(self._client, table)
