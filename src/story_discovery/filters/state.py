"""FilterState derivation from, and serialization to, URL query strings.

All operations are pure: they return a new ``FilterState`` and never touch
persistence. See ``story_discovery.filters.session`` for the stateful side.

URL contract::

    types=climate,health&author=Asha&location=Pune&dates=start:2024-01-01,7days
    &content=video,student&languages=hi,bn

Every parameter is a comma-joined list except ``author``. Date entries are
tagged ``start:``, ``end:``, ``date:`` or a preset token.
"""

import dataclasses
import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import parse_qsl, urlencode

from story_discovery.data import FILTER_FACETS, ContentType, FilterState

logger = logging.getLogger(__name__)

DATE_START_TAG = "start:"
DATE_END_TAG = "end:"
DATE_ON_TAG = "date:"

# Labels the filter menu used before content types were tokenized.
LEGACY_CONTENT_LABELS: dict[str, ContentType] = {
    "Editorials": ContentType.ARTICLE,
    "Video Articles": ContentType.VIDEO,
    "Audio Articles": ContentType.AUDIO,
    "Student Articles": ContentType.STUDENT,
}


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for value in values:
        value = value.strip()
        if value:
            seen.setdefault(value, None)
    return tuple(seen)


def _split(raw: str) -> tuple[str, ...]:
    return _dedupe(raw.split(","))


def _as_values(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return _split(value)
    return _dedupe(value)


def parse_content_type(token: str) -> ContentType | None:
    """Map a URL content token (or a legacy label) to a ``ContentType``."""
    if token in LEGACY_CONTENT_LABELS:
        return LEGACY_CONTENT_LABELS[token]
    try:
        return ContentType(token.lower())
    except ValueError:
        logger.debug("Dropping unknown content type %r", token)
        return None


def _content_types(tokens: Iterable[str]) -> tuple[ContentType, ...]:
    parsed = (parse_content_type(t) for t in tokens)
    seen: dict[ContentType, None] = {}
    for ct in parsed:
        if ct is not None:
            seen.setdefault(ct, None)
    return tuple(seen)


def _date_fields(tokens: Iterable[str]) -> dict[str, Any]:
    """Split tagged date tokens into bounds and presets."""
    date_from: str | None = None
    date_to: str | None = None
    presets: list[str] = []
    for token in tokens:
        if token.startswith(DATE_START_TAG):
            date_from = token[len(DATE_START_TAG) :] or None
        elif token.startswith(DATE_END_TAG):
            date_to = token[len(DATE_END_TAG) :] or None
        elif token.startswith(DATE_ON_TAG):
            day = token[len(DATE_ON_TAG) :] or None
            date_from = date_to = day
        else:
            presets.append(token)
    return {"date_from": date_from, "date_to": date_to, "date_presets": _dedupe(presets)}


def _date_tokens(state: FilterState) -> list[str]:
    tokens: list[str] = []
    if state.date_from and state.date_from == state.date_to:
        tokens.append(f"{DATE_ON_TAG}{state.date_from}")
    else:
        if state.date_from:
            tokens.append(f"{DATE_START_TAG}{state.date_from}")
        if state.date_to:
            tokens.append(f"{DATE_END_TAG}{state.date_to}")
    tokens.extend(state.date_presets)
    return tokens


def _facet_fields(facet: str, values: tuple[str, ...]) -> dict[str, Any]:
    """Translate a URL facet and its values into FilterState field updates."""
    if facet == "types":
        return {"categories": values}
    if facet == "author":
        return {"author": " ".join(values) if values else None}
    if facet == "location":
        return {"location": values}
    if facet == "dates":
        return _date_fields(values)
    if facet == "content":
        return {"content_types": _content_types(values)}
    if facet == "languages":
        return {"languages": values}
    msg = f"Unknown facet: {facet!r}"
    raise ValueError(msg)


def from_url(query_string: str) -> FilterState:
    """Build a FilterState from a URL query string.

    Unknown parameters are ignored; only the first occurrence of a repeated
    parameter is used.

    Args:
        query_string: Query string with or without the leading ``?``.

    Returns:
        The parsed FilterState.
    """
    params: dict[str, str] = {}
    for key, value in parse_qsl(query_string.lstrip("?")):
        params.setdefault(key, value)

    fields: dict[str, Any] = {}
    for facet in FILTER_FACETS:
        raw = params.get(facet)
        if not raw:
            continue
        if facet == "author":
            author = raw.strip()
            fields["author"] = author or None
        else:
            fields.update(_facet_fields(facet, _split(raw)))
    return FilterState(**fields)


def to_params(state: FilterState) -> list[tuple[str, str]]:
    """Serialize a FilterState into ordered ``(name, value)`` URL parameters."""
    params: list[tuple[str, str]] = []
    if state.categories:
        params.append(("types", ",".join(state.categories)))
    if state.author:
        params.append(("author", state.author))
    if state.location:
        params.append(("location", ",".join(state.location)))
    dates = _date_tokens(state)
    if dates:
        params.append(("dates", ",".join(dates)))
    if state.content_types:
        params.append(("content", ",".join(ct.value for ct in state.content_types)))
    if state.languages:
        params.append(("languages", ",".join(state.languages)))
    return params


def to_url(state: FilterState) -> str:
    """Serialize a FilterState into a query string (without the leading ``?``)."""
    return urlencode(to_params(state), safe=",:")


def strip_filters(query_string: str) -> str:
    """Remove every filter parameter from a query string, keeping the rest (e.g. ``locale``)."""
    kept = [
        (key, value)
        for key, value in parse_qsl(query_string.lstrip("?"), keep_blank_values=True)
        if key not in FILTER_FACETS
    ]
    return urlencode(kept, safe=",:")


def set_facet(state: FilterState, facet: str, value: str | Iterable[str]) -> FilterState:
    """Replace a facet's value(s).

    Args:
        state: Current state.
        facet: URL facet name (``types``, ``author``, ``location``, ``dates``,
            ``content`` or ``languages``).
        value: A comma-joined string or an iterable of values. ``author``
            takes the string as-is.

    Returns:
        A new FilterState.

    Raises:
        ValueError: If ``facet`` is not a known facet name.
    """
    if facet == "author":
        author = value.strip() if isinstance(value, str) else " ".join(_dedupe(value))
        return dataclasses.replace(state, author=author or None)
    return dataclasses.replace(state, **_facet_fields(facet, _as_values(value)))


def clear_facet(state: FilterState, facet: str, value: str | None = None) -> FilterState:
    """Clear a whole facet, or a single value of a multi-valued facet.

    Removing one value keeps its siblings. For ``dates``, any bound token
    (``start:``, ``end:``, ``date:``) removes both bounds together; a preset
    token removes only that preset.
    """
    if facet not in FILTER_FACETS:
        msg = f"Unknown facet: {facet!r}"
        raise ValueError(msg)

    if facet == "author":
        return dataclasses.replace(state, author=None)

    if facet == "dates":
        if value is None:
            return dataclasses.replace(state, date_from=None, date_to=None, date_presets=())
        if value.startswith((DATE_START_TAG, DATE_END_TAG, DATE_ON_TAG)):
            return dataclasses.replace(state, date_from=None, date_to=None)
        return dataclasses.replace(
            state, date_presets=tuple(p for p in state.date_presets if p != value)
        )

    if facet == "content":
        if value is None:
            return dataclasses.replace(state, content_types=())
        target = parse_content_type(value)
        return dataclasses.replace(
            state, content_types=tuple(ct for ct in state.content_types if ct != target)
        )

    field_name = {"types": "categories", "location": "location", "languages": "languages"}[facet]
    if value is None:
        return dataclasses.replace(state, **{field_name: ()})
    current: tuple[str, ...] = getattr(state, field_name)
    return dataclasses.replace(state, **{field_name: tuple(v for v in current if v != value)})


def clear_all() -> FilterState:
    """Return the empty FilterState."""
    return FilterState()
