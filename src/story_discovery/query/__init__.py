"""Query building and encoding for the content store."""

from story_discovery.query.builder import (
    ALL_LOCALES,
    DEFAULT_SORT,
    POPULATE_GRAPH,
    build_conditions,
    build_descriptors,
    request_shape,
    requested_locales,
)
from story_discovery.query.encoding import encode, to_query_params

__all__ = [
    "ALL_LOCALES",
    "DEFAULT_SORT",
    "POPULATE_GRAPH",
    "build_conditions",
    "build_descriptors",
    "encode",
    "request_shape",
    "requested_locales",
    "to_query_params",
]
