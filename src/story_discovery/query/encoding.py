"""Bracket-style parameter encoding for the CMS query grammar.

Produces the same keys as ``qs.stringify(obj, {encodeValuesOnly: true})``::

    {"filters": {"slug": {"$in": ["a", "b"]}}}
    -> [("filters[slug][$in][0]", "a"), ("filters[slug][$in][1]", "b")]
"""

from typing import Any

from story_discovery.data import AnyOf, Condition, Predicate, QueryDescriptor, RequestShape


def encode(obj: Any, prefix: str = "") -> list[tuple[str, str]]:
    """Flatten nested dicts/lists into ordered bracketed key/value pairs.

    None values are skipped; booleans are written as ``true``/``false``.
    """
    pairs: list[tuple[str, str]] = []
    if isinstance(obj, dict):
        for key, value in obj.items():
            pairs.extend(encode(value, f"{prefix}[{key}]" if prefix else str(key)))
    elif isinstance(obj, list | tuple):
        for i, value in enumerate(obj):
            pairs.extend(encode(value, f"{prefix}[{i}]"))
    elif obj is None:
        pass
    elif isinstance(obj, bool):
        pairs.append((prefix, "true" if obj else "false"))
    else:
        pairs.append((prefix, str(obj)))
    return pairs


def condition_tree(condition: Condition) -> dict[str, Any]:
    """Render one condition as a nested filter dict."""
    if isinstance(condition, AnyOf):
        return {"$or": [condition_tree(p) for p in condition.predicates]}
    node: dict[str, Any] = {condition.operator: condition.value}
    for segment in reversed(condition.path):
        node = {segment: node}
    return node


def _deep_merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


def nested_filters(conditions: tuple[Condition, ...]) -> dict[str, Any]:
    """All conditions AND-ed under a single ``$and`` list."""
    if not conditions:
        return {}
    return {"$and": [condition_tree(c) for c in conditions]}


def flat_filters(conditions: tuple[Condition, ...]) -> dict[str, Any]:
    """Predicates merged into one object keyed by field path.

    Sibling keys are AND-ed by the store. OR groups cannot share the single
    ``$or`` key, so a second group moves them all under ``$and``.
    """
    merged: dict[str, Any] = {}
    groups: list[dict[str, Any]] = []
    for condition in conditions:
        if isinstance(condition, Predicate):
            _deep_merge(merged, condition_tree(condition))
        else:
            groups.append(condition_tree(condition))
    if len(groups) == 1:
        merged.update(groups[0])
    elif groups:
        merged["$and"] = groups
    return merged


def to_query_params(descriptor: QueryDescriptor) -> list[tuple[str, str]]:
    """Encode a descriptor into request parameters for its shape."""
    if descriptor.shape == RequestShape.FLAT:
        filters = flat_filters(descriptor.conditions)
    else:
        filters = nested_filters(descriptor.conditions)

    query: dict[str, Any] = {
        "filters": filters or None,
        "populate": descriptor.populate,
        "pagination": {"page": descriptor.page, "pageSize": descriptor.page_size},
        "sort": list(descriptor.sort),
        "locale": descriptor.locale,
    }
    return encode(query)
