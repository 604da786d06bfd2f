"""Filter state, persistence and session handling."""

from story_discovery.filters.session import FilterSession
from story_discovery.filters.state import (
    clear_all,
    clear_facet,
    from_url,
    parse_content_type,
    set_facet,
    strip_filters,
    to_params,
    to_url,
)
from story_discovery.filters.store import (
    DEFAULT_SLOT_KEY,
    FilterStore,
    InMemoryFilterStore,
    JsonFileFilterStore,
    PersistedFilters,
)

__all__ = [
    "DEFAULT_SLOT_KEY",
    "FilterSession",
    "FilterStore",
    "InMemoryFilterStore",
    "JsonFileFilterStore",
    "PersistedFilters",
    "clear_all",
    "clear_facet",
    "from_url",
    "parse_content_type",
    "set_facet",
    "strip_filters",
    "to_params",
    "to_url",
]
