"""
Feed fetchers: obtain the raw submission text.

The core only depends on the `FeedFetcher` protocol. Two implementations are
provided:

- `HttpFeedFetcher` downloads a published spreadsheet CSV with httpx.
- `FileFeedFetcher` reads a local CSV export.

Any failure to obtain the text is raised as `SourceUnavailable`. Retrying is a
fetcher policy: `HttpFeedFetcher` makes `attempts` tries (1 means no retry)
with exponential backoff via tenacity.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contest_ranker.config import get_settings
from contest_ranker.errors import SourceUnavailable
from contest_ranker.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class FeedFetcher(Protocol):
    """
    Source of the raw submission feed.

    Attributes
    ----------
    source : str
        Human-readable description of the feed location, used in diagnostics.
    """

    source: str

    async def fetch(self) -> str:
        """
        Return the raw feed text.

        Raises
        ------
        SourceUnavailable
            If the text cannot be obtained.
        """
        ...


class HttpFeedFetcher:
    """
    Download the feed over HTTP(S).

    Non-2xx responses, transport errors and timeouts all count as the feed
    being unavailable.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        attempts: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        resolved_url = url or settings.feed_url
        if not resolved_url:
            raise ValueError("No feed URL given and FEED_URL is not set")
        self.url = resolved_url
        self.source = resolved_url
        self.timeout = timeout if timeout is not None else settings.feed_timeout_seconds
        self.attempts = attempts if attempts is not None else settings.feed_fetch_attempts
        self._transport = transport

    async def _get(self, client: httpx.AsyncClient) -> str:
        response = await client.get(self.url)
        response.raise_for_status()
        return response.content.decode("utf-8", errors="replace")

    async def fetch(self) -> str:
        log.info("Fetching feed", extra={"source": self.source, "attempts": self.attempts})
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                async for attempt in AsyncRetrying(
                    stop=stop_after_attempt(self.attempts),
                    wait=wait_exponential(multiplier=0.5, min=0.5, max=5),
                    retry=retry_if_exception_type(httpx.HTTPError),
                    reraise=True,
                ):
                    with attempt:
                        text = await self._get(client)
        except httpx.HTTPStatusError as exc:
            log.error(
                "Feed request rejected",
                extra={"source": self.source, "status": exc.response.status_code},
            )
            raise SourceUnavailable(self.source, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, RetryError) as exc:
            log.error("Feed request failed", extra={"source": self.source, "error": str(exc)})
            raise SourceUnavailable(self.source, str(exc) or type(exc).__name__) from exc

        log.info("Feed fetched", extra={"source": self.source, "chars": len(text)})
        return text


class FileFeedFetcher:
    """
    Read the feed from a local CSV export.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.source = str(self.path)

    def _read(self) -> str:
        return self.path.read_text(encoding="utf-8", errors="replace")

    async def fetch(self) -> str:
        try:
            text = await asyncio.to_thread(self._read)
        except OSError as exc:
            log.error("Feed file unreadable", extra={"source": self.source, "error": str(exc)})
            raise SourceUnavailable(self.source, exc.strerror or str(exc)) from exc
        log.info("Feed read", extra={"source": self.source, "chars": len(text)})
        return text


__all__ = ["FeedFetcher", "FileFeedFetcher", "HttpFeedFetcher"]
