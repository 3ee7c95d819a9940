"""
Fetch service for marketplace search result pages.

Builds the search URL for a keyword, waits the politeness delay, performs
the GET with browser-like headers and a bounded timeout, and classifies
failures into a small set of upstream errors. Successful responses return
the raw markup; nothing here parses it.

Example:
    >>> async with SearchPageFetcher(settings.fetch_config()) as fetcher:
    ...     html = await fetcher.fetch("wireless mouse")
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional
from urllib.parse import quote_plus

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from marketplace_scraper.config.settings import FetchConfig
from marketplace_scraper.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Custom Exceptions
# =============================================================================

class UpstreamError(Exception):
    """Base exception for a failed search page fetch."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        upstream_status: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.message = message or self.default_message
        self.upstream_status = upstream_status
        self.details = details or {}
        super().__init__(self.message)


class UpstreamTimeout(UpstreamError):
    """Raised when the upstream request exceeds the timeout."""
    status_code = 408
    default_message = "Request timed out - please try again"


class UpstreamForbidden(UpstreamError):
    """Raised when the marketplace blocks the request."""
    status_code = 403
    default_message = "Access blocked by Amazon - try again later"


class UpstreamNotFound(UpstreamError):
    """Raised when the marketplace reports the page as missing."""
    status_code = 404
    default_message = "Page not found"


class UpstreamOther(UpstreamError):
    """Raised for any other HTTP or transport failure."""
    status_code = 500
    default_message = "Internal server error"


def classify_status(status_code: int) -> type[UpstreamError]:
    """Map an upstream HTTP error status to an error class."""
    if status_code == 403:
        return UpstreamForbidden
    if status_code == 404:
        return UpstreamNotFound
    return UpstreamOther


# =============================================================================
# Fetcher
# =============================================================================

class SearchPageFetcher:
    """Fetches one search results page per call."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or FetchConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def connect(self) -> None:
        """Initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.config.headers,
                timeout=httpx.Timeout(self.config.timeout_seconds),
                follow_redirects=True,
                transport=self._transport,
            )

    async def disconnect(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SearchPageFetcher":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    def build_search_url(self, keyword: str) -> str:
        return self.config.build_url(quote_plus(keyword))

    async def _politeness_delay(self) -> None:
        delay = self.config.request_delay_seconds
        if delay > 0:
            logger.debug("Politeness delay", wait_seconds=delay)
            await asyncio.sleep(delay)

    async def _get(self, url: str) -> httpx.Response:
        """GET with retries on transient network errors only."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(httpx.NetworkError),
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(multiplier=self.config.retry_backoff_seconds, max=10),
            reraise=True,
        ):
            with attempt:
                return await self._client.get(url)
        raise UpstreamOther("No request attempt was made")

    async def fetch(self, keyword: str) -> str:
        """
        Fetch the search results page for ``keyword``.

        Returns:
            The page markup.

        Raises:
            UpstreamTimeout, UpstreamForbidden, UpstreamNotFound, UpstreamOther
        """
        if not self._client:
            await self.connect()

        url = self.build_search_url(keyword)
        await self._politeness_delay()

        start_time = time.time()
        try:
            response = await self._get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error("Search page request timed out", url=url, error=str(e))
            raise UpstreamTimeout(details={"url": url}) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Search page request failed", url=url, status=status)
            error_cls = classify_status(status)
            raise error_cls(upstream_status=status, details={"url": url}) from e
        except httpx.HTTPError as e:
            logger.error("Search page request error", url=url, error=str(e))
            raise UpstreamOther(details={"url": url, "error": str(e)}) from e

        logger.info(
            "Search page fetched",
            url=url,
            status=response.status_code,
            bytes=len(response.content),
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return response.text
