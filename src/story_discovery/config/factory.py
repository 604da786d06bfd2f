"""Factory functions to create components from configuration."""

from pathlib import Path

from story_discovery.config.models import (
    DiscoveryConfig,
    FileFilterStoreConfig,
    MemoryFilterStoreConfig,
    PaginationConfig,
)
from story_discovery.fetch.fanout import FanoutExecutor
from story_discovery.fetch.strapi import StrapiFetcher
from story_discovery.filters.session import FilterSession
from story_discovery.filters.store import FilterStore, InMemoryFilterStore, JsonFileFilterStore
from story_discovery.normalize.story import StoryNormalizer
from story_discovery.pagination.coordinator import PaginationCoordinator
from story_discovery.pipeline.engine import DiscoveryEngine
from story_discovery.run_logger import RunLogger


def create_filter_store(
    config: MemoryFilterStoreConfig | FileFilterStoreConfig,
) -> FilterStore:
    """Create a filter store from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, MemoryFilterStoreConfig):
        return InMemoryFilterStore()
    if isinstance(config, FileFilterStoreConfig):
        return JsonFileFilterStore(Path(config.path), slot_key=config.slot_key)
    msg = f"Unknown filter store config type: {type(config)}"
    raise ValueError(msg)


def create_pagination(
    config: PaginationConfig, *, viewport_width: int | None = None
) -> PaginationCoordinator:
    """Create a pagination coordinator from config."""
    return PaginationCoordinator(
        mobile_breakpoint=config.mobile_breakpoint,
        mobile_page_size=config.mobile_page_size,
        desktop_page_size=config.desktop_page_size,
        jump_size=config.jump_size,
        mobile_visible_pages=config.mobile_visible_pages,
        desktop_visible_pages=config.desktop_visible_pages,
        viewport_width=viewport_width,
    )


def create_from_config(
    config: DiscoveryConfig,
    *,
    active_locale: str | None = None,
    viewport_width: int | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[DiscoveryEngine, RunLogger | None]:
    """Create a complete discovery engine from root config.

    Args:
        config: Root configuration.
        active_locale: Locale the reader is browsing in (default: config's default locale).
        viewport_width: Initial viewport width for page sizing.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (engine, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    fetcher = StrapiFetcher(
        base_url=config.cms.base_url,
        collection=config.cms.collection,
        timeout=config.cms.timeout,
    )
    normalizer = StoryNormalizer(
        base_url=fetcher.base_url,
        publisher_name=config.locale.publisher_name,
        default_image_url=config.cms.default_image_url,
        default_location=config.locale.default_location,
    )
    session = FilterSession(create_filter_store(config.filter_store))

    engine = DiscoveryEngine(
        executor=FanoutExecutor(fetcher),
        normalizer=normalizer,
        session=session,
        pagination=create_pagination(config.pagination, viewport_width=viewport_width),
        active_locale=active_locale or config.locale.default_locale,
        fallback_locale=config.locale.fallback_locale,
        run_logger=run_logger,
    )
    return (engine, run_logger)
