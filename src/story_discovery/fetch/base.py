from typing import Protocol

from story_discovery.data import QueryDescriptor, RawPage


class StoryFetcher(Protocol):
    """Interface for issuing query descriptors against the content store."""

    async def fetch_all(
        self, descriptors: list[QueryDescriptor]
    ) -> list[RawPage | BaseException]:
        """Execute requests concurrently over one connection.

        Args:
            descriptors: The queries to issue.

        Returns:
            One entry per descriptor, in order: the raw page with the store's
            pagination metadata, or the exception that request raised.
        """
        ...
