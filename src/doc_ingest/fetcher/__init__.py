"""Page fetching."""

from doc_ingest.fetcher.base import BaseFetcher, FetchResult
from doc_ingest.fetcher.http_fetcher import HttpFetcher

__all__ = [
    "BaseFetcher",
    "FetchResult",
    "HttpFetcher",
]
