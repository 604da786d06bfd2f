"""Persistence slot for the last-applied filter set."""

import json
import logging
from pathlib import Path
from typing import Protocol
from urllib.parse import urlencode

from pydantic import BaseModel, ValidationError

from story_discovery.data import FilterState
from story_discovery.filters.state import from_url, to_params

logger = logging.getLogger(__name__)

DEFAULT_SLOT_KEY = "articleFilters"


class PersistedFilters(BaseModel):
    """Serialized form of a FilterState: one URL-encoded string per facet, or None."""

    types: str | None = None
    author: str | None = None
    location: str | None = None
    dates: str | None = None
    content: str | None = None
    languages: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_state(cls, state: FilterState) -> "PersistedFilters":
        return cls.model_validate(dict(to_params(state)))

    def to_state(self) -> FilterState:
        pairs = [(name, value) for name, value in self.model_dump().items() if value]
        # Re-parse through the URL grammar so both directions share one parser.
        return from_url(urlencode(pairs))


class FilterStore(Protocol):
    """Interface for the single persisted filter slot."""

    def load(self) -> FilterState | None:
        """Return the stored filters, or None if the slot was erased.

        A slot holding an all-null object loads as an empty FilterState.
        """
        ...

    def save(self, state: FilterState) -> None:
        """Write ``state`` to the slot."""
        ...

    def clear(self) -> None:
        """Erase the slot."""
        ...


class InMemoryFilterStore:
    """FilterStore kept in process memory. Useful for tests and single runs."""

    def __init__(self) -> None:
        self._slot: PersistedFilters | None = None

    def load(self) -> FilterState | None:
        return self._slot.to_state() if self._slot is not None else None

    def save(self, state: FilterState) -> None:
        self._slot = PersistedFilters.from_state(state)

    def clear(self) -> None:
        self._slot = None


class JsonFileFilterStore:
    """FilterStore backed by a JSON file holding named slots.

    Args:
        path: JSON file location. Created on first save.
        slot_key: Name of the slot inside the file.
    """

    def __init__(self, path: Path, *, slot_key: str = DEFAULT_SLOT_KEY) -> None:
        self._path = path
        self._slot_key = slot_key

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable filter store {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2))

    def load(self) -> FilterState | None:
        raw = self._read_all().get(self._slot_key)
        if raw is None:
            return None
        try:
            return PersistedFilters.model_validate(raw).to_state()
        except ValidationError as e:
            logger.warning(f"Ignoring malformed filter slot {self._slot_key!r}: {e}")
            return None

    def save(self, state: FilterState) -> None:
        data = self._read_all()
        data[self._slot_key] = PersistedFilters.from_state(state).model_dump()
        self._write_all(data)

    def clear(self) -> None:
        data = self._read_all()
        if data.pop(self._slot_key, None) is not None:
            self._write_all(data)
