"""Normalization of raw store records."""

from story_discovery.normalize.relations import (
    Bare,
    RelationEncoding,
    Wrapped,
    WrappedSingle,
    classify,
    related_items,
)
from story_discovery.normalize.story import StoryNormalizer, format_date

__all__ = [
    "Bare",
    "RelationEncoding",
    "StoryNormalizer",
    "Wrapped",
    "WrappedSingle",
    "classify",
    "format_date",
    "related_items",
]
