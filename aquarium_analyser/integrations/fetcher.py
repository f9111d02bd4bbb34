"""HTTP fetcher for source article pages and their images."""

import logging

import httpx

from aquarium_analyser.config import Settings, settings
from aquarium_analyser.core.exceptions import ArticleFetchError

logger = logging.getLogger(__name__)


class ArticleFetcher:
    """Async HTTP client for the article source site.

    Must be used as an async context manager. One instance serves a whole
    pipeline run, so the page and all of its images share a connection pool.
    """

    def __init__(
        self,
        app_settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = app_settings or settings
        self.timeout = self.settings.http_timeout_seconds
        self.user_agent = self.settings.scraper_user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ArticleFetcher":
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args) -> None:
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Fetcher must be used as async context manager")
        return self._client

    async def fetch_html(self, url: str) -> str:
        """Fetch a page and return its decoded body.

        Raises:
            ArticleFetchError: on any transport error or non-2xx status.
        """
        logger.info("Fetching article page", extra={"url": url})
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch article page", extra={"url": url, "error": str(e)})
            raise ArticleFetchError(url, str(e) or type(e).__name__) from e
        return response.text

    async def fetch_bytes(self, url: str) -> bytes:
        """Fetch a binary resource. Transport errors propagate as httpx errors."""
        response = await self.client.get(url)
        response.raise_for_status()
        return response.content
