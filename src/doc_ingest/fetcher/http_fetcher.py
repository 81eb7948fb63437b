"""HTTP fetcher for static documentation pages."""

import httpx

from doc_ingest.config import TraversalOptions
from doc_ingest.fetcher.base import BaseFetcher, FetchResult


class HttpFetcher(BaseFetcher):
    """Plain HTTP fetcher built on httpx."""

    def __init__(
        self,
        options: TraversalOptions,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(options)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        """Initialize HTTP client."""
        self._client = httpx.AsyncClient(
            headers={"User-Agent": self.options.user_agent},
            follow_redirects=True,
            timeout=self.options.timeout_ms / 1000,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Clean up HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> FetchResult:
        """Fetch a page via HTTP."""
        if not self._client:
            raise RuntimeError("Fetcher not initialized. Use 'async with' context manager.")

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            return FetchResult(
                url=url, final_url=url, html="", status_code=0,
                error=f"Timed out fetching {url}: {e}",
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return FetchResult(
                url=url, final_url=url, html="", status_code=0,
                error=f"Failed to fetch {url}: {e}",
            )

        return FetchResult(
            url=url,
            final_url=str(response.url),
            html=response.text,
            status_code=response.status_code,
        )
