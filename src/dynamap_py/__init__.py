from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .builders import (
    BatchGetSpec,
    build_batch_get,
    build_batch_write,
    build_delete_item,
    build_get_item,
    build_put_item,
    build_query,
    build_scan,
)
from .codec import decode, encode, number_text
from .conditions import (
    KeyCondition,
    RangeClause,
    conditions_to_wire,
    hash_condition,
    merge,
    normalize_operator,
    range_condition,
)
from .errors import (
    DynamapError,
    EmptySetError,
    EmptyStringError,
    EncodeError,
    EncodeErrorKind,
    HeterogeneousSetError,
    UnsupportedTypeError,
    ValidationError,
)
from .items import item_to_wire, key_to_wire, wire_to_item
from .results import (
    BatchGetResult,
    BatchWriteResult,
    KeySchemaElement,
    Page,
    ResultKind,
    TableDescription,
    Throughput,
    map_result,
)
from .writes import Delete, Put, WriteOp, group_writes

if TYPE_CHECKING:
    from .client import Client
    from .runtime import AwsCallMetric, ClientConfig, create_dynamodb_client, instrument_dynamodb_client
    from .schema import KeyAttr, LocalIndex, TableSpec, ThroughputSpec


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except Exception:
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name == "Client":
        from .client import Client

        return Client
    if name in {"AwsCallMetric", "ClientConfig", "create_dynamodb_client", "instrument_dynamodb_client"}:
        from . import runtime

        return getattr(runtime, name)
    if name in {"KeyAttr", "LocalIndex", "TableSpec", "ThroughputSpec"}:
        from . import schema

        return getattr(schema, name)
    raise AttributeError(name)


__all__ = [
    "AwsCallMetric",
    "BatchGetResult",
    "BatchGetSpec",
    "BatchWriteResult",
    "Client",
    "ClientConfig",
    "Delete",
    "DynamapError",
    "EmptySetError",
    "EmptyStringError",
    "EncodeError",
    "EncodeErrorKind",
    "HeterogeneousSetError",
    "KeyAttr",
    "KeyCondition",
    "KeySchemaElement",
    "LocalIndex",
    "Page",
    "Put",
    "RangeClause",
    "ResultKind",
    "TableDescription",
    "TableSpec",
    "Throughput",
    "ThroughputSpec",
    "UnsupportedTypeError",
    "ValidationError",
    "WriteOp",
    "__repo_version__",
    "__version__",
    "build_batch_get",
    "build_batch_write",
    "build_delete_item",
    "build_get_item",
    "build_put_item",
    "build_query",
    "build_scan",
    "conditions_to_wire",
    "create_dynamodb_client",
    "decode",
    "encode",
    "group_writes",
    "hash_condition",
    "instrument_dynamodb_client",
    "item_to_wire",
    "key_to_wire",
    "map_result",
    "merge",
    "normalize_operator",
    "number_text",
    "range_condition",
    "wire_to_item",
]
