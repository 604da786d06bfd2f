"""Fetcher for a Strapi-style REST document store."""

import asyncio
import logging
import os
from typing import Any

import httpx

from story_discovery.data import QueryDescriptor, RawPage
from story_discovery.query.encoding import to_query_params

DEFAULT_BASE_URL = "https://beta.ruralindiaonline.org/v1/"

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int | None:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


class StrapiFetcher:
    """Issue query descriptors against ``{base_url}api/{collection}``.

    Args:
        base_url: Store root (defaults to PARI_API_URL env var, then the public beta host).
        collection: Collection name (default: "articles").
        timeout: Per-request timeout in seconds; None waits indefinitely.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        collection: str = "articles",
        timeout: float | None = 30.0,
    ) -> None:
        self._base_url = base_url or os.environ.get("PARI_API_URL") or DEFAULT_BASE_URL
        self._collection = collection
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def endpoint(self) -> str:
        return f"{self._base_url.rstrip('/')}/api/{self._collection}"

    async def fetch_all(
        self, descriptors: list[QueryDescriptor]
    ) -> list[RawPage | BaseException]:
        """Issue all descriptors concurrently through one shared client.

        A failing request yields its exception in place of a page.
        """
        if not descriptors:
            return []

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            tasks = [self._fetch_single(client, descriptor) for descriptor in descriptors]
            return await asyncio.gather(*tasks, return_exceptions=True)

    async def fetch(self, descriptor: QueryDescriptor) -> RawPage:
        """Execute one request, raising on failure."""
        (page,) = await self.fetch_all([descriptor])
        if isinstance(page, BaseException):
            raise page
        return page

    async def _fetch_single(
        self, client: httpx.AsyncClient, descriptor: QueryDescriptor
    ) -> RawPage:
        """Execute one request and parse the ``data``/``meta.pagination`` envelope."""
        response = await client.get(self.endpoint, params=to_query_params(descriptor))
        response.raise_for_status()
        payload = response.json()

        data = payload.get("data") if isinstance(payload, dict) else None
        if isinstance(data, dict):
            records = [data]
        elif isinstance(data, list):
            records = [r for r in data if isinstance(r, dict)]
        else:
            records = []

        meta = payload.get("meta", {}) if isinstance(payload, dict) else {}
        pagination = meta.get("pagination", {}) if isinstance(meta, dict) else {}
        if not isinstance(pagination, dict):
            pagination = {}

        logger.debug(
            "Fetched %d record(s) for locale %s (page %d)",
            len(records),
            descriptor.locale,
            descriptor.page,
        )
        return RawPage(
            records=records,
            total=_as_int(pagination.get("total")),
            page_count=_as_int(pagination.get("pageCount")),
        )
