"""Tests for StrapiFetcher and FanoutExecutor."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from story_discovery.data import QueryDescriptor, RawPage
from story_discovery.fetch import DEFAULT_BASE_URL, FanoutExecutor, StrapiFetcher


def _descriptor(locale: str = "en", page: int = 1) -> QueryDescriptor:
    return QueryDescriptor(
        conditions=(),
        populate={},
        sort=("Original_published_date:desc",),
        page=page,
        page_size=20,
        locale=locale,
    )


class TestStrapiFetcher:
    """Tests for StrapiFetcher."""

    @pytest.fixture
    def mock_response_data(self) -> dict:
        """Sample store response."""
        return {
            "data": [
                {"id": 1, "attributes": {"Title": "Story 1"}},
                {"id": 2, "attributes": {"Title": "Story 2"}},
            ],
            "meta": {"pagination": {"page": 1, "pageSize": 20, "pageCount": 3, "total": 47}},
        }

    def test_base_url_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PARI_API_URL", raising=False)
        fetcher = StrapiFetcher()
        assert fetcher.base_url == DEFAULT_BASE_URL
        assert fetcher.endpoint == "https://beta.ruralindiaonline.org/v1/api/articles"

    def test_base_url_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARI_API_URL", "https://cms.example.org")
        assert StrapiFetcher().endpoint == "https://cms.example.org/api/articles"

    def test_explicit_base_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARI_API_URL", "https://cms.example.org")
        fetcher = StrapiFetcher(base_url="https://other.example.org/", collection="stories")
        assert fetcher.endpoint == "https://other.example.org/api/stories"

    async def test_fetch_parses_envelope(
        self, mock_response_data: dict, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should return records with the store's pagination metadata."""
        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()
        calls: list[dict] = []

        async def mock_get(self, url, **kwargs):
            calls.append({"url": url, **kwargs})
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        page = await StrapiFetcher(base_url="https://cms.example.org").fetch(_descriptor("hi", 2))

        assert len(page.records) == 2
        assert page.total == 47
        assert page.page_count == 3
        assert calls[0]["url"] == "https://cms.example.org/api/articles"
        params = dict(calls[0]["params"])
        assert params["locale"] == "hi"
        assert params["pagination[page]"] == "2"

    async def test_fetch_single_object_and_missing_meta(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_response = MagicMock()
        mock_response.json.return_value = {"data": {"id": 9, "attributes": {}}}
        mock_response.raise_for_status = MagicMock()

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        page = await StrapiFetcher().fetch(_descriptor())
        assert page.records == [{"id": 9, "attributes": {}}]
        assert page.total is None
        assert page.page_count is None

    async def test_fetch_raises_on_http_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "500 Server Error", request=MagicMock(), response=MagicMock()
        )

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        with pytest.raises(httpx.HTTPStatusError):
            await StrapiFetcher().fetch(_descriptor())

    async def test_fetch_all_shares_one_client(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should issue every descriptor through the same client, concurrently."""
        clients: list[int] = []
        in_flight = 0
        peak = 0

        async def mock_get(self, url, **kwargs):
            nonlocal in_flight, peak
            clients.append(id(self))
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            response = MagicMock()
            response.json.return_value = {"data": [], "meta": {}}
            response.raise_for_status = MagicMock()
            return response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        pages = await StrapiFetcher().fetch_all([_descriptor(c) for c in ("hi", "bn", "ta")])

        assert len(pages) == 3
        assert all(isinstance(p, RawPage) for p in pages)
        assert len(set(clients)) == 1
        assert peak == 3

    async def test_fetch_all_returns_failures_in_place(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(self, url, **kwargs):
            if dict(kwargs["params"])["locale"] == "bn":
                raise httpx.ConnectError("connection refused")
            response = MagicMock()
            response.json.return_value = {"data": [{"id": 1}]}
            response.raise_for_status = MagicMock()
            return response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        pages = await StrapiFetcher().fetch_all([_descriptor("hi"), _descriptor("bn")])

        assert isinstance(pages[0], RawPage)
        assert pages[0].records == [{"id": 1}]
        assert isinstance(pages[1], httpx.ConnectError)

    async def test_fetch_all_empty(self) -> None:
        assert await StrapiFetcher().fetch_all([]) == []


class TestFanoutExecutor:
    """Tests for FanoutExecutor."""

    async def test_empty_descriptors(self) -> None:
        fetcher = MagicMock()
        fetcher.fetch_all = AsyncMock()
        assert await FanoutExecutor(fetcher).execute([]) == []
        fetcher.fetch_all.assert_not_called()

    async def test_results_paired_with_locales_in_order(self) -> None:
        fetcher = MagicMock()
        fetcher.fetch_all = AsyncMock(
            return_value=[
                RawPage(records=[{"id": "hi"}], total=5, page_count=1),
                RawPage(records=[{"id": "bn"}], total=3),
            ]
        )

        results = await FanoutExecutor(fetcher).execute([_descriptor("hi"), _descriptor("bn")])

        assert [r.locale for r in results] == ["hi", "bn"]
        assert results[0].records == [{"id": "hi"}]
        assert results[0].total == 5
        assert results[0].page_count == 1
        assert results[1].item_count == 3

    async def test_failed_leg_does_not_sink_the_others(self) -> None:
        fetcher = MagicMock()
        fetcher.fetch_all = AsyncMock(
            return_value=[
                RawPage(records=[{"id": 1}], total=1),
                httpx.ConnectError("connection refused"),
            ]
        )

        results = await FanoutExecutor(fetcher).execute([_descriptor("hi"), _descriptor("bn")])

        assert results[0].error is None
        assert results[0].records == [{"id": 1}]
        assert results[1].records == []
        assert results[1].error == "ConnectError: connection refused"
