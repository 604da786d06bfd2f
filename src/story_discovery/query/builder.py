"""Translate a FilterState into CMS query descriptors.

Building never fails: a facet value that cannot be resolved (a malformed
date, an unknown preset) is left out so that the other facets still apply.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from story_discovery.data import (
    AnyOf,
    Condition,
    ContentType,
    FilterState,
    Predicate,
    QueryDescriptor,
    RequestShape,
)
from story_discovery.query.dates import resolve_range, to_iso

logger = logging.getLogger(__name__)

ALL_LOCALES = "all"
PUBLISHED_DATE_FIELD = "Original_published_date"
DEFAULT_SORT = (f"{PUBLISHED_DATE_FIELD}:desc",)

# Every relation the normalizer and language resolver read from.
POPULATE_GRAPH: dict[str, Any] = {
    "Cover_image": {"fields": ["url"]},
    "Authors": {"populate": {"author_name": {"fields": ["Name"]}}},
    "categories": {"fields": ["Title", "slug"]},
    "location": {"fields": ["name", "district", "state"]},
    "localizations": {"fields": ["locale", "title", "strap", "slug"]},
}

AUTHOR_NAME_PATH = ("Authors", "author_name", "Name")
LOCATION_PATHS = (
    ("location", "name"),
    ("location", "district"),
    ("location", "state"),
    ("location_auto_suggestion",),
)
SEARCH_TEXT_PATHS = (("Title",), ("strap",), ("categories", "Title"))

_CONTENT_TYPE_PREDICATES: dict[ContentType, Predicate] = {
    ContentType.VIDEO: Predicate(("type",), "$eq", "video"),
    ContentType.AUDIO: Predicate(("type",), "$eq", "audio"),
    ContentType.STUDENT: Predicate(("is_student_article",), "$eq", True),
}


def _contains_any(paths: tuple[tuple[str, ...], ...], texts: tuple[str, ...]) -> AnyOf:
    return AnyOf(tuple(Predicate(path, "$containsi", text) for text in texts for path in paths))


def build_conditions(
    filters: FilterState,
    *,
    now: datetime,
    search_text: str | None = None,
) -> tuple[Condition, ...]:
    """Build the AND-ed condition list for a FilterState.

    Args:
        filters: Active facets.
        now: Instant used to resolve relative date presets.
        search_text: Free text for the search predicate set, if active.

    Returns:
        Conditions in facet order. Languages never produce a condition.
    """
    conditions: list[Condition] = []

    if filters.categories:
        conditions.append(Predicate(("categories", "slug"), "$in", list(filters.categories)))

    if filters.author:
        conditions.append(Predicate(AUTHOR_NAME_PATH, "$containsi", filters.author))

    if filters.location:
        conditions.append(_contains_any(LOCATION_PATHS, filters.location))

    lower, upper = resolve_range(filters.date_from, filters.date_to, filters.date_presets, now)
    if lower is not None:
        conditions.append(Predicate((PUBLISHED_DATE_FIELD,), "$gte", to_iso(lower)))
    if upper is not None:
        conditions.append(Predicate((PUBLISHED_DATE_FIELD,), "$lte", to_iso(upper)))

    # Articles are the editorial default: selecting them adds no type predicate.
    type_predicates = tuple(
        _CONTENT_TYPE_PREDICATES[ct]
        for ct in filters.content_types
        if ct in _CONTENT_TYPE_PREDICATES
    )
    if type_predicates:
        conditions.append(AnyOf(type_predicates))

    if search_text and search_text.strip():
        conditions.append(_contains_any(SEARCH_TEXT_PATHS, (search_text.strip(),)))

    return tuple(conditions)


def requested_locales(filters: FilterState, active_locale: str) -> list[str]:
    """Locales to target: the language facet, or the active locale alone."""
    if ALL_LOCALES in filters.languages:
        return [ALL_LOCALES]
    if filters.languages:
        return list(filters.languages)
    return [active_locale]


def request_shape(filters: FilterState) -> RequestShape:
    """Author matching is resolved through flat parameters; everything else is nested."""
    return RequestShape.FLAT if filters.author else RequestShape.NESTED


def build_descriptors(
    filters: FilterState,
    *,
    page: int,
    page_size: int,
    active_locale: str,
    search_text: str | None = None,
    now: datetime | None = None,
) -> list[QueryDescriptor]:
    """Build one QueryDescriptor per requested language.

    Args:
        filters: Active facets.
        page: 1-based page number requested from every locale.
        page_size: Items per page requested from every locale.
        active_locale: Locale the reader is browsing in.
        search_text: Optional free-text query (search page).
        now: Build instant; defaults to the current UTC time.

    Returns:
        Descriptors sharing the same conditions, page and page size.
    """
    conditions = build_conditions(
        filters, now=now or datetime.now(tz=UTC), search_text=search_text
    )
    shape = request_shape(filters)
    descriptors = [
        QueryDescriptor(
            conditions=conditions,
            populate=POPULATE_GRAPH,
            sort=DEFAULT_SORT,
            page=max(1, page),
            page_size=page_size,
            locale=locale,
            shape=shape,
        )
        for locale in requested_locales(filters, active_locale)
    ]
    logger.debug(
        "Built %d descriptor(s) for locales %s (%s shape)",
        len(descriptors),
        [d.locale for d in descriptors],
        shape,
    )
    return descriptors
