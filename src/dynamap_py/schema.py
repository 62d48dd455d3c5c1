from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

from .aws_errors import is_not_found
from .errors import ValidationError
from .results import TableDescription, map_table_description

logger = logging.getLogger(__name__)

_KEY_TYPES = {"S", "N", "B"}
_PROJECTIONS = {"ALL", "KEYS_ONLY", "INCLUDE"}


@dataclass(frozen=True)
class KeyAttr:
    name: str
    type: str


@dataclass(frozen=True)
class ThroughputSpec:
    read: int
    write: int


@dataclass(frozen=True)
class LocalIndex:
    name: str
    range_key: KeyAttr
    projection: str = "all"
    included_attrs: tuple[str, ...] = ()


@dataclass(frozen=True)
class TableSpec:
    name: str
    hash_key: KeyAttr
    throughput: ThroughputSpec
    range_key: KeyAttr | None = None
    indexes: tuple[LocalIndex, ...] = ()


def _key_type(attr: KeyAttr) -> str:
    key_type = str(attr.type or "").upper()
    if key_type not in _KEY_TYPES:
        raise ValidationError(f"key attribute must be S/N/B: {attr.name} (got {attr.type!r})")
    return key_type


def _key_schema(hash_key: KeyAttr, range_key: KeyAttr | None) -> list[dict[str, str]]:
    schema = [{"AttributeName": hash_key.name, "KeyType": "HASH"}]
    if range_key is not None:
        schema.append({"AttributeName": range_key.name, "KeyType": "RANGE"})
    return schema


def _provisioned_throughput(throughput: ThroughputSpec) -> dict[str, int]:
    if throughput.read <= 0 or throughput.write <= 0:
        raise ValidationError("throughput read/write must be > 0")
    return {"ReadCapacityUnits": int(throughput.read), "WriteCapacityUnits": int(throughput.write)}


def build_create_table_request(spec: TableSpec) -> dict[str, Any]:
    if not spec.name:
        raise ValidationError("table name is required")

    attr_types: dict[str, str] = {}
    for attr in [spec.hash_key, spec.range_key, *(idx.range_key for idx in spec.indexes)]:
        if attr is None:
            continue
        key_type = _key_type(attr)
        existing = attr_types.get(attr.name)
        if existing is not None and existing != key_type:
            raise ValidationError(f"conflicting types for key attribute: {attr.name}")
        attr_types[attr.name] = key_type

    lsis: list[dict[str, Any]] = []
    for idx in spec.indexes:
        projection_type = str(idx.projection or "").upper()
        if projection_type not in _PROJECTIONS:
            raise ValidationError(f"unsupported projection: {idx.projection!r}")
        proj: dict[str, Any] = {"ProjectionType": projection_type}
        if projection_type == "INCLUDE" and idx.included_attrs:
            proj["NonKeyAttributes"] = list(idx.included_attrs)
        lsis.append(
            {
                "IndexName": idx.name,
                "KeySchema": _key_schema(spec.hash_key, idx.range_key),
                "Projection": proj,
            }
        )

    req: dict[str, Any] = {
        "TableName": spec.name,
        "KeySchema": _key_schema(spec.hash_key, spec.range_key),
        "AttributeDefinitions": [
            {"AttributeName": name, "AttributeType": key_type} for name, key_type in attr_types.items()
        ],
        "ProvisionedThroughput": _provisioned_throughput(spec.throughput),
    }
    if lsis:
        req["LocalSecondaryIndexes"] = lsis
    return req


def build_update_table_request(name: str, throughput: ThroughputSpec) -> dict[str, Any]:
    if not name:
        raise ValidationError("table name is required")
    return {"TableName": name, "ProvisionedThroughput": _provisioned_throughput(throughput)}


def create_table(client: Any, spec: TableSpec) -> None:
    logger.debug("create_table %s", spec.name)
    client.create_table(**build_create_table_request(spec))


def update_table(client: Any, name: str, throughput: ThroughputSpec) -> None:
    logger.debug("update_table %s", name)
    client.update_table(**build_update_table_request(name, throughput))


def delete_table(client: Any, name: str) -> None:
    logger.debug("delete_table %s", name)
    client.delete_table(TableName=name)


def list_tables(client: Any) -> list[str]:
    resp = client.list_tables()
    return [str(name) for name in resp.get("TableNames") or []]


def describe_table(client: Any, name: str) -> TableDescription | None:
    try:
        resp = client.describe_table(TableName=name)
    except ClientError as err:
        if is_not_found(err):
            logger.debug("describe_table %s: not found", name)
            return None
        raise
    return map_table_description(resp)


def ensure_table(client: Any, spec: TableSpec) -> bool:
    if describe_table(client, spec.name) is not None:
        logger.debug("ensure_table %s: already exists", spec.name)
        return False
    create_table(client, spec)
    return True
