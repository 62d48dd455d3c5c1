from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import ValidationError


@dataclass(frozen=True)
class Put:
    item: Mapping[str, Any]


@dataclass(frozen=True)
class Delete:
    key: Mapping[str, Any]


type WriteOp = Put | Delete


def group_writes(ops: Sequence[tuple[str, WriteOp]]) -> dict[str, list[WriteOp]]:
    grouped: dict[str, list[WriteOp]] = {}
    for entry in ops:
        if not isinstance(entry, tuple) or len(entry) != 2:
            raise ValidationError("expected (table, write op) pairs")
        table, op = entry
        if not table:
            raise ValidationError("table name is required")
        if not isinstance(op, (Put, Delete)):
            raise ValidationError(f"unsupported write op: {type(op).__name__}")
        grouped.setdefault(str(table), []).append(op)
    return grouped
