"""Discovery engine: filters in, normalized stories and pagination out."""

import dataclasses
import logging
import time
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from story_discovery.data import (
    DiscoveryRequest,
    DiscoveryResult,
    ExecutionResult,
    FilterState,
    NavigationType,
    QueryDescriptor,
    Story,
)
from story_discovery.fetch.fanout import FanoutExecutor
from story_discovery.filters.session import FilterSession
from story_discovery.languages.resolver import with_available_languages
from story_discovery.normalize.story import StoryNormalizer
from story_discovery.pagination.coordinator import PaginationCoordinator
from story_discovery.query.builder import ALL_LOCALES, build_descriptors
from story_discovery.run_logger import RunLogger

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class DiscoveryEngine:
    """Orchestrates one discovery surface (article listing or search).

    Flow for each ``load``:
    1. Build one query descriptor per requested language
    2. Execute them (concurrently when there are several)
    3. Re-fetch against the fallback locale if the active locale has nothing
    4. Normalize records and resolve language availability
    5. Derive pagination, reloading the last page if the request ran past it

    Every load is tagged with a generation number. A load that completes
    after a newer one was issued is discarded instead of overwriting the
    newer result.

    Args:
        executor: Runs query descriptors against the store.
        normalizer: Turns raw records into stories.
        session: Owns the active filters and their persistence slot.
        pagination: Tracks page and viewport-dependent page size.
        active_locale: Locale the reader is browsing in.
        fallback_locale: Locale re-fetched when the active locale has no records.
        run_logger: Optional RunLogger for intermediate result logging.
        clock: Source of "now" for relative date presets.
    """

    def __init__(
        self,
        executor: FanoutExecutor,
        normalizer: StoryNormalizer,
        session: FilterSession,
        pagination: PaginationCoordinator,
        *,
        active_locale: str = "en",
        fallback_locale: str = "en",
        run_logger: RunLogger | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._executor = executor
        self._normalizer = normalizer
        self._session = session
        self._pagination = pagination
        self._active_locale = active_locale
        self._fallback_locale = fallback_locale
        self._run_logger = run_logger
        self._clock = clock
        self._generation = 0
        self._result = DiscoveryResult()

    @property
    def result(self) -> DiscoveryResult:
        """The latest applied result (what the presentation layer renders)."""
        return self._result

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def filters(self) -> FilterState:
        return self._session.state

    @property
    def session(self) -> FilterSession:
        return self._session

    @property
    def pagination(self) -> PaginationCoordinator:
        return self._pagination

    @property
    def active_locale(self) -> str:
        return self._active_locale

    def set_active_locale(self, locale: str) -> None:
        self._active_locale = locale

    # -- Filter and viewport events --

    def on_page_load(self, query_string: str, navigation_type: NavigationType) -> str:
        """Adopt the URL's filters, or drop them on a hard reload.

        Returns:
            The query string the page should display.
        """
        self._pagination.reset()
        return self._session.on_page_load(query_string, navigation_type)

    def set_filter(self, facet: str, value: str | Iterable[str]) -> FilterState:
        self._pagination.reset()
        return self._session.set(facet, value)

    def clear_filter(self, facet: str, value: str | None = None) -> FilterState:
        self._pagination.reset()
        return self._session.clear(facet, value)

    def clear_all_filters(self) -> FilterState:
        self._pagination.reset()
        return self._session.clear_all()

    def set_viewport_width(self, width: int) -> bool:
        """Update the viewport width; True if the page size changed and page 1 is due."""
        return self._pagination.set_viewport_width(width)

    def request(
        self, *, page: int | None = None, search_text: str | None = None
    ) -> DiscoveryRequest:
        """A request for the session's current filters at ``page`` (default: current page)."""
        return DiscoveryRequest(
            filters=self._session.state,
            page=page if page is not None else self._pagination.current_page,
            search_text=search_text,
        )

    # -- Loading --

    async def load(self, request: DiscoveryRequest | None = None) -> DiscoveryResult | None:
        """Fetch, normalize and paginate stories for ``request``.

        Args:
            request: Filters, page and optional search text. Defaults to the
                session's filters at the current page.

        Returns:
            The applied result, or None if a newer load superseded this one.
        """
        request = request or self.request()
        self._generation += 1
        generation = self._generation

        self._pagination.request_page(request.page)
        page_size = self._pagination.page_size
        self._result = dataclasses.replace(self._result, is_loading=True, error=None)

        if self._run_logger:
            self._run_logger.start_run(generation, request)

        t0 = time.monotonic()
        descriptors = build_descriptors(
            request.filters,
            page=request.page,
            page_size=page_size,
            active_locale=self._active_locale,
            search_text=request.search_text,
            now=self._clock(),
        )
        if self._run_logger:
            self._run_logger.log_stage(
                generation,
                stage="query_build",
                component="build_descriptors",
                input_data=request,
                output_data=descriptors,
                duration_seconds=time.monotonic() - t0,
            )

        t0 = time.monotonic()
        results = await self._executor.execute(descriptors)
        if self._is_stale(generation):
            return None

        results = await self._fallback_if_missing(request.filters, descriptors, results)
        if self._is_stale(generation):
            return None

        if self._run_logger:
            self._run_logger.log_stage(
                generation,
                stage="fetch",
                component=type(self._executor).__name__,
                input_data=[d.locale for d in descriptors],
                output_data=[
                    {
                        "locale": r.locale,
                        "records": len(r.records),
                        "total": r.total,
                        "error": r.error,
                    }
                    for r in results
                ],
                duration_seconds=time.monotonic() - t0,
            )

        t0 = time.monotonic()
        stories = self._stories(results)
        if self._run_logger:
            self._run_logger.log_stage(
                generation,
                stage="normalize",
                component=type(self._normalizer).__name__,
                input_data={"record_count": sum(len(r.records) for r in results)},
                output_data={"story_count": len(stories)},
                duration_seconds=time.monotonic() - t0,
            )

        pagination = self._pagination.apply(results)
        if self._run_logger:
            self._run_logger.log_stage(
                generation,
                stage="paginate",
                component=type(self._pagination).__name__,
                input_data=[r.item_count for r in results],
                output_data=pagination,
                duration_seconds=0.0,
            )

        # Only a lone request surfaces its failure; a failed fan-out leg just contributes nothing.
        error = results[0].error if len(results) == 1 else None
        if error is None and pagination.current_page < request.page:
            logger.info(
                f"Page {request.page} is past the last page; "
                f"loading page {pagination.current_page} instead"
            )
            if self._run_logger:
                self._run_logger.finish_run(generation, stories, pagination, discarded=True)
            return await self.load(dataclasses.replace(request, page=pagination.current_page))

        self._result = DiscoveryResult(
            stories=tuple(stories),
            pagination=pagination,
            is_loading=False,
            error=error,
        )

        if self._run_logger:
            self._run_logger.finish_run(generation, stories, pagination)
        return self._result

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.info(
            f"Discarding results of load {generation}; load {self._generation} is newer"
        )
        if self._run_logger:
            self._run_logger.finish_run(generation, [], None, discarded=True)
        return True

    async def _fallback_if_missing(
        self,
        filters: FilterState,
        descriptors: list[QueryDescriptor],
        results: list[ExecutionResult],
    ) -> list[ExecutionResult]:
        """Re-fetch against the fallback locale when the active locale yielded nothing.

        Applies only to a single request that the reader did not pin to a
        language and that succeeded with zero records.
        """
        if len(descriptors) != 1 or filters.languages:
            return results
        descriptor, result = descriptors[0], results[0]
        if descriptor.locale in (self._fallback_locale, ALL_LOCALES):
            return results
        if result.error is not None or result.records:
            return results

        logger.info(
            f"No stories for locale {descriptor.locale}; "
            f"falling back to {self._fallback_locale}"
        )
        fallback = dataclasses.replace(descriptor, locale=self._fallback_locale)
        return await self._executor.execute([fallback])

    def _stories(self, results: list[ExecutionResult]) -> list[Story]:
        stories: list[Story] = []
        for result in results:
            for story in self._normalizer.normalize_all(result.records):
                stories.append(with_available_languages(story, self._active_locale))
        return stories
