"""Configuration module for story discovery."""

from story_discovery.config.factory import create_from_config
from story_discovery.config.loader import get_default_config_path, load_config
from story_discovery.config.models import (
    CMSConfig,
    DiscoveryConfig,
    FileFilterStoreConfig,
    FilterStoreConfig,
    LocaleConfig,
    LoggingConfig,
    MemoryFilterStoreConfig,
    PaginationConfig,
)

__all__ = [
    "CMSConfig",
    "DiscoveryConfig",
    "FileFilterStoreConfig",
    "FilterStoreConfig",
    "LocaleConfig",
    "LoggingConfig",
    "MemoryFilterStoreConfig",
    "PaginationConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
