"""Story discovery: faceted, multilingual story listing over a headless content store."""

from story_discovery.config import DiscoveryConfig, create_from_config, load_config
from story_discovery.data import (
    AnyOf,
    Category,
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
from story_discovery.fetch import FanoutExecutor, StoryFetcher, StrapiFetcher
from story_discovery.filters import (
    FilterSession,
    FilterStore,
    InMemoryFilterStore,
    JsonFileFilterStore,
    clear_all,
    clear_facet,
    from_url,
    set_facet,
    to_url,
)
from story_discovery.languages import display_name, resolve_languages
from story_discovery.normalize import Bare, StoryNormalizer, Wrapped, WrappedSingle
from story_discovery.pagination import PaginationCoordinator, derive_pagination
from story_discovery.pipeline import DiscoveryEngine
from story_discovery.query import build_descriptors, to_query_params
from story_discovery.run_logger import RunLogger

__all__ = [
    # Models
    "AnyOf",
    "Category",
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
    # Filters
    "FilterSession",
    "FilterStore",
    "InMemoryFilterStore",
    "JsonFileFilterStore",
    "clear_all",
    "clear_facet",
    "from_url",
    "set_facet",
    "to_url",
    # Query
    "build_descriptors",
    "to_query_params",
    # Fetching
    "FanoutExecutor",
    "StoryFetcher",
    "StrapiFetcher",
    # Normalization
    "Bare",
    "StoryNormalizer",
    "Wrapped",
    "WrappedSingle",
    # Languages
    "display_name",
    "resolve_languages",
    # Pagination
    "PaginationCoordinator",
    "derive_pagination",
    # Engine
    "DiscoveryEngine",
    # Logging
    "RunLogger",
    # Config
    "DiscoveryConfig",
    "create_from_config",
    "load_config",
]
