"""Data models for story discovery."""

from story_discovery.data.models import (
    FILTER_FACETS,
    AnyOf,
    Category,
    Condition,
    ContentType,
    DatePreset,
    DiscoveryRequest,
    DiscoveryResult,
    ExecutionResult,
    FilterState,
    LanguageVariant,
    LocalizationVariant,
    NavigationType,
    PaginationState,
    Predicate,
    QueryDescriptor,
    RawPage,
    RequestShape,
    Story,
)

__all__ = [
    "FILTER_FACETS",
    "AnyOf",
    "Category",
    "Condition",
    "ContentType",
    "DatePreset",
    "DiscoveryRequest",
    "DiscoveryResult",
    "ExecutionResult",
    "FilterState",
    "LanguageVariant",
    "LocalizationVariant",
    "NavigationType",
    "PaginationState",
    "Predicate",
    "QueryDescriptor",
    "RawPage",
    "RequestShape",
    "Story",
]
