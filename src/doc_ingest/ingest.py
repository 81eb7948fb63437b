"""Entry point: resolve a source by name and ingest it."""

import logging

from doc_ingest.config import GitRepoConfig
from doc_ingest.discovery import WebCrawler
from doc_ingest.entries import ParsedEntry, find_orphans
from doc_ingest.fetcher import BaseFetcher
from doc_ingest.progress import ProgressChannel
from doc_ingest.repository import RepositoryWalker
from doc_ingest.sources import Source, SourceRegistry

logger = logging.getLogger(__name__)


async def ingest_source(
    source: Source,
    progress: ProgressChannel | None = None,
    fetcher: BaseFetcher | None = None,
) -> list[ParsedEntry]:
    """Crawl a web source or walk a repository source.

    Raises ConfigurationError or CloneError on fatal problems; per-page and
    per-file failures only shrink the result.
    """
    if isinstance(source, GitRepoConfig):
        entries = await RepositoryWalker(source, progress=progress).ingest()
    else:
        entries = await WebCrawler(source, fetcher=fetcher, progress=progress).crawl()

    orphans = find_orphans(entries)
    if orphans:
        logger.warning(
            "%d entries of %s have no parent entry, first: %s",
            len(orphans),
            source.name,
            orphans[0].path,
        )
    return entries


async def ingest(
    name: str,
    registry: SourceRegistry | None = None,
    progress: ProgressChannel | None = None,
    fetcher: BaseFetcher | None = None,
) -> list[ParsedEntry]:
    """Ingest the source registered under ``name``."""
    registry = registry or SourceRegistry.default()
    source = registry.resolve(name)
    return await ingest_source(source, progress=progress, fetcher=fetcher)
