"""Relation encodings returned by the content store.

The same relation may arrive in any of three shapes, and different fields
of one record may use different shapes::

    Bare            [{"Title": "Climate"}, ...]
    Wrapped         {"data": [{"id": 1, "attributes": {"Title": "Climate"}}, ...]}
    WrappedSingle   {"data": {"id": 1, "attributes": {"url": "/uploads/a.jpg"}}}

``related_items`` reduces all of them to a flat list of attribute dicts.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Bare:
    """Related objects given directly as a list (or a lone object)."""

    items: tuple[Any, ...]


@dataclass(frozen=True)
class Wrapped:
    """Related objects under a ``data`` list."""

    items: tuple[Any, ...]


@dataclass(frozen=True)
class WrappedSingle:
    """One related object under ``data``."""

    item: Any


RelationEncoding = Bare | Wrapped | WrappedSingle


def classify(value: Any) -> RelationEncoding | None:
    """Identify the encoding of a relation value.

    Returns:
        The encoding, or None when the relation is absent (missing, null,
        ``{"data": null}`` or a scalar).
    """
    if isinstance(value, list):
        return Bare(tuple(value))
    if not isinstance(value, dict):
        return None
    if "data" in value:
        data = value["data"]
        if isinstance(data, list):
            return Wrapped(tuple(data))
        if isinstance(data, dict):
            return WrappedSingle(data)
        return None
    return Bare((value,))


def unwrap_attributes(item: Any) -> dict[str, Any] | None:
    """Lift ``{"id": .., "attributes": {..}}`` into one flat dict."""
    if not isinstance(item, dict):
        return None
    attributes = item.get("attributes")
    if isinstance(attributes, dict):
        flat = dict(attributes)
        if "id" in item:
            flat.setdefault("id", item["id"])
        return flat
    return item


def related_items(value: Any) -> list[dict[str, Any]]:
    """Return the related objects of a relation as a flat list, whatever its encoding."""
    encoding = classify(value)
    if encoding is None:
        return []
    if isinstance(encoding, WrappedSingle):
        raw_items: tuple[Any, ...] = (encoding.item,)
    else:
        raw_items = encoding.items

    items: list[dict[str, Any]] = []
    for raw in raw_items:
        item = unwrap_attributes(raw)
        if item is not None:
            items.append(item)
    return items


def first_related(value: Any) -> dict[str, Any]:
    """The first related object, or an empty dict."""
    items = related_items(value)
    return items[0] if items else {}
