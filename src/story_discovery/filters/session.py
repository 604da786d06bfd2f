"""Stateful filter handling: mutations mirrored to the URL and the persistence slot."""

import logging
from collections.abc import Iterable

from story_discovery.data import FilterState, NavigationType
from story_discovery.filters.state import (
    clear_all,
    clear_facet,
    from_url,
    set_facet,
    strip_filters,
    to_url,
)
from story_discovery.filters.store import FilterStore

logger = logging.getLogger(__name__)


class FilterSession:
    """Owns the active FilterState and keeps the store in sync with it.

    Every mutation re-serializes the new state to the URL (``query_string``)
    and to the store. Removing the last value of a facet still writes the
    (empty) state, so the slot reads back as "no filters". Only ``clear_all``
    and a hard reload erase the slot itself.

    Args:
        store: Persistence slot for the last-applied filters.
        state: Initial state (defaults to no filters).
    """

    def __init__(self, store: FilterStore, state: FilterState | None = None) -> None:
        self._store = store
        self._state = state or FilterState()

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def query_string(self) -> str:
        """The URL query string for the current filters."""
        return to_url(self._state)

    def on_page_load(self, query_string: str, navigation_type: NavigationType) -> str:
        """Derive the state for a freshly loaded page.

        A hard reload drops filters: the slot is erased and filter parameters
        are stripped from the URL, while other parameters (e.g. ``locale``)
        survive. Any other navigation adopts the URL's filters.

        Args:
            query_string: The page's current query string.
            navigation_type: How the page was reached.

        Returns:
            The query string the page should display.
        """
        if navigation_type == NavigationType.RELOAD:
            logger.info("Page was reloaded; clearing persisted filters")
            self._store.clear()
            self._state = FilterState()
            return strip_filters(query_string)

        self._state = from_url(query_string)
        if self._state.is_empty:
            self._store.clear()
        else:
            self._store.save(self._state)
        return query_string.lstrip("?")

    def set(self, facet: str, value: str | Iterable[str]) -> FilterState:
        self._state = set_facet(self._state, facet, value)
        self._store.save(self._state)
        return self._state

    def clear(self, facet: str, value: str | None = None) -> FilterState:
        self._state = clear_facet(self._state, facet, value)
        self._store.save(self._state)
        return self._state

    def clear_all(self) -> FilterState:
        self._state = clear_all()
        self._store.clear()
        return self._state
