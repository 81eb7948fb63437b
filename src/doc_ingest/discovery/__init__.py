"""Web crawling for documentation sites."""

from doc_ingest.discovery.crawler import CrawlStats, WebCrawler

__all__ = [
    "CrawlStats",
    "WebCrawler",
]
