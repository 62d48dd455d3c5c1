from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .codec import WireValue, decode, encode
from .errors import ValidationError

type Item = dict[str, Any]
type WireItem = dict[str, WireValue]


def attribute_name(name: Any) -> str:
    out = name if isinstance(name, str) else str(name)
    if not out:
        raise ValidationError("attribute name must be non-empty")
    return out


def item_to_wire(item: Mapping[Any, Any]) -> WireItem:
    if not isinstance(item, Mapping):
        raise ValidationError("item must be a mapping")
    return {attribute_name(k): encode(v) for k, v in item.items()}


def wire_to_item(wire: Mapping[str, Any] | None) -> Item:
    if not wire:
        return {}
    return {str(k): decode(v) for k, v in wire.items()}


def key_to_wire(key: Mapping[Any, Any]) -> WireItem:
    if not isinstance(key, Mapping) or not key:
        raise ValidationError("key must be a non-empty mapping")
    return item_to_wire(key)
