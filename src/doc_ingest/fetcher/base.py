"""Base class for page fetchers."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from doc_ingest.config import TraversalOptions
from doc_ingest.errors import TransportError


class FetchResult(BaseModel):
    """Result of fetching a page."""

    url: str
    final_url: str  # After redirects
    html: str
    status_code: int
    error: str | None = None

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300 and not self.error

    def raise_for_status(self) -> None:
        """Raise TransportError unless the fetch succeeded."""
        if self.success:
            return
        message = self.error or f"HTTP {self.status_code} for {self.url}"
        raise TransportError(self.url, message, self.status_code)


class BaseFetcher(ABC):
    """Abstract base class for page fetchers.

    Fetchers never retry: a failed page is reported once and skipped.
    """

    def __init__(self, options: TraversalOptions):
        self.options = options

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult:
        """Fetch a page and return its HTML content."""

    @abstractmethod
    async def __aenter__(self):
        """Async context manager entry."""

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
