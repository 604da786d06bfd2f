"""Concurrent execution of one or many query descriptors."""

import logging

from story_discovery.data import ExecutionResult, QueryDescriptor, RawPage
from story_discovery.fetch.base import StoryFetcher

logger = logging.getLogger(__name__)


class FanoutExecutor:
    """Run descriptors against the store and pair each result with its locale.

    A single descriptor is one request. Several descriptors (one per
    requested language) are issued concurrently and joined. A failing
    request never raises: it contributes an empty result carrying the
    error message, and the other requests still count.

    Args:
        fetcher: Issues the descriptors over one shared connection.
    """

    def __init__(self, fetcher: StoryFetcher) -> None:
        self._fetcher = fetcher

    async def execute(self, descriptors: list[QueryDescriptor]) -> list[ExecutionResult]:
        """Execute all descriptors.

        Args:
            descriptors: Queries to issue. Order is preserved in the output.

        Returns:
            One ExecutionResult per descriptor.
        """
        if not descriptors:
            return []

        pages = await self._fetcher.fetch_all(descriptors)

        results: list[ExecutionResult] = []
        for descriptor, page in zip(descriptors, pages, strict=True):
            if isinstance(page, BaseException):
                logger.warning(
                    f"Error fetching stories for locale {descriptor.locale}. Error: {page}"
                )
                results.append(
                    ExecutionResult(
                        locale=descriptor.locale,
                        error=f"{type(page).__name__}: {page}",
                    )
                )
                continue
            results.append(_to_result(descriptor, page))
        return results


def _to_result(descriptor: QueryDescriptor, page: RawPage) -> ExecutionResult:
    return ExecutionResult(
        locale=descriptor.locale,
        records=list(page.records),
        total=page.total,
        page_count=page.page_count,
    )
