"""Feed fetcher tests using httpx.MockTransport instead of a live server."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from contest_ranker.errors import SourceUnavailable
from contest_ranker.infrastructure.feed import FeedFetcher, FileFeedFetcher, HttpFeedFetcher

FEED_URL = "https://sheets.example.test/pub?output=csv"


def _transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_http_fetch_returns_body(sample_feed: str):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=sample_feed.encode("utf-8"))

    fetcher = HttpFeedFetcher(FEED_URL, transport=_transport(handler))

    assert await fetcher.fetch() == sample_feed
    assert seen == [FEED_URL]


@pytest.mark.asyncio
async def test_http_error_status_raises_source_unavailable():
    fetcher = HttpFeedFetcher(FEED_URL, transport=_transport(lambda r: httpx.Response(503)))

    with pytest.raises(SourceUnavailable) as excinfo:
        await fetcher.fetch()

    assert excinfo.value.source == FEED_URL
    assert "503" in excinfo.value.reason
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_transport_error_raises_source_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = HttpFeedFetcher(FEED_URL, transport=_transport(handler))

    with pytest.raises(SourceUnavailable, match="connection refused"):
        await fetcher.fetch()


@pytest.mark.asyncio
async def test_single_attempt_by_default():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500)

    fetcher = HttpFeedFetcher(FEED_URL, transport=_transport(handler))

    with pytest.raises(SourceUnavailable):
        await fetcher.fetch()
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_configured_attempts_retry_transient_failures(sample_feed: str):
    responses = iter([httpx.Response(502), httpx.Response(200, text=sample_feed)])
    fetcher = HttpFeedFetcher(
        FEED_URL, attempts=2, transport=_transport(lambda r: next(responses))
    )

    assert await fetcher.fetch() == sample_feed


def test_url_and_limits_come_from_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FEED_URL", FEED_URL)
    monkeypatch.setenv("FEED_FETCH_ATTEMPTS", "3")
    monkeypatch.setenv("FEED_TIMEOUT_SECONDS", "2.5")

    fetcher = HttpFeedFetcher()

    assert fetcher.url == FEED_URL
    assert fetcher.attempts == 3
    assert fetcher.timeout == 2.5


def test_missing_url_is_a_configuration_error():
    with pytest.raises(ValueError, match="FEED_URL"):
        HttpFeedFetcher()


@pytest.mark.asyncio
async def test_file_fetcher_reads_export(feed_file: Path, sample_feed: str):
    fetcher = FileFeedFetcher(feed_file)
    assert await fetcher.fetch() == sample_feed


@pytest.mark.asyncio
async def test_missing_file_raises_source_unavailable(tmp_path: Path):
    fetcher = FileFeedFetcher(tmp_path / "absent.csv")

    with pytest.raises(SourceUnavailable) as excinfo:
        await fetcher.fetch()

    assert excinfo.value.source.endswith("absent.csv")


def test_fetchers_satisfy_protocol(feed_file: Path):
    assert isinstance(FileFeedFetcher(feed_file), FeedFetcher)
    assert isinstance(HttpFeedFetcher(FEED_URL), FeedFetcher)
