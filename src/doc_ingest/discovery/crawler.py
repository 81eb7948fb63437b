"""Breadth-first crawler that turns a documentation site into entries."""

import logging
from collections import deque
from dataclasses import dataclass

from doc_ingest.config import SourceDefinition
from doc_ingest.entries import EntryCollector, ParsedEntry, parent_path, strip_extension
from doc_ingest.errors import ConfigurationError, TransportError
from doc_ingest.extractor import ContentExtractor, ExtractedPage
from doc_ingest.fetcher import BaseFetcher, HttpFetcher
from doc_ingest.filters import FilterContext, FilterPipeline
from doc_ingest.links import LinkNormalizer
from doc_ingest.progress import ProgressChannel, ScrapePhase, emit
from doc_ingest.utils.rate_limiter import RateLimiter
from doc_ingest.utils.url_utils import resolve_location

logger = logging.getLogger(__name__)

# Entry path for a page that sits at the base location itself.
ROOT_ENTRY_PATH = "index"


@dataclass
class CrawlStats:
    """Counters for one crawl run."""

    pages_fetched: int = 0
    pages_failed: int = 0
    pages_skipped: int = 0
    entries: int = 0


class WebCrawler:
    """Crawl one web source in BFS order.

    The driver loop is sequential: every dequeued page is fetched, parsed and
    folded into the entry list before the next one is taken off the frontier,
    so the queue and visited set need no locking. Fetches still go through a
    bounded slot pool sized by ``options.concurrency``.
    """

    def __init__(
        self,
        definition: SourceDefinition,
        fetcher: BaseFetcher | None = None,
        pipeline: FilterPipeline | None = None,
        progress: ProgressChannel | None = None,
    ):
        self.definition = definition
        self.options = definition.options
        self.fetcher = fetcher
        self.pipeline = pipeline or FilterPipeline.default()
        self.progress = progress
        self.normalizer = LinkNormalizer(definition.base_url)
        self.extractor = ContentExtractor(definition.selectors, self.normalizer)
        self.rate_limiter = RateLimiter(
            self.options.delay_ms / 1000,
            self.options.concurrency,
        )
        self.stats = CrawlStats()
        self._cancel_requested = False

    def cancel(self) -> None:
        """Stop the crawl before the next page is dequeued."""
        self._cancel_requested = True

    async def crawl(self) -> list[ParsedEntry]:
        """Run the crawl and return entries in BFS order."""
        emit(self.progress, ScrapePhase.STARTING, total_estimate=self._max_pages_estimate())
        logger.info(
            "Starting crawl of %s %s (%s), max pages %s, max depth %s",
            self.definition.display_name,
            self.definition.version,
            self.definition.base_url,
            self.options.max_pages,
            self.options.max_depth,
        )

        fetcher = self.fetcher or HttpFetcher(self.options)
        try:
            await fetcher.__aenter__()
        except Exception as e:
            emit(self.progress, ScrapePhase.FAILED, current_path=str(e))
            raise ConfigurationError(
                f"Cannot set up HTTP client for {self.definition.name}: {e}"
            ) from e

        try:
            entries = await self._run(fetcher)
        finally:
            await fetcher.__aexit__(None, None, None)

        self.stats.entries = len(entries)
        emit(
            self.progress,
            ScrapePhase.COMPLETED,
            current_index=self.stats.pages_fetched,
            total_estimate=self.stats.pages_fetched,
            entries_so_far=len(entries),
        )
        logger.info(
            "Crawl of %s finished: %d pages fetched, %d failed, %d entries",
            self.definition.name,
            self.stats.pages_fetched,
            self.stats.pages_failed,
            len(entries),
        )
        return entries

    async def _run(self, fetcher: BaseFetcher) -> list[ParsedEntry]:
        opts = self.options
        queue: deque[tuple[str, int]] = deque((path, 0) for path in opts.seed_paths)
        visited: set[str] = set()
        collector = EntryCollector()

        while queue:
            if self._cancel_requested:
                logger.info("Crawl of %s cancelled", self.definition.name)
                break

            path, depth = queue.popleft()

            if path in visited:
                continue

            if opts.max_pages is not None and self.stats.pages_fetched >= opts.max_pages:
                logger.info("Reached max pages limit: %d", opts.max_pages)
                break

            if opts.max_depth is not None and depth > opts.max_depth:
                self.stats.pages_skipped += 1
                continue

            if opts.should_skip(path):
                logger.debug("Skipping path: %s", path)
                self.stats.pages_skipped += 1
                continue

            visited.add(path)

            emit(
                self.progress,
                ScrapePhase.SCRAPING,
                current_index=self.stats.pages_fetched + 1,
                total_estimate=self._max_pages_estimate(len(visited) + len(queue)),
                current_path=path,
                entries_so_far=len(collector),
            )

            url = resolve_location(self.definition.base_url, path)
            logger.debug("Fetching %s (depth %d)", url, depth)
            self.stats.pages_fetched += 1

            page = await self._fetch_page(fetcher, url, path)
            if page is not None:
                self._fold(page, path, depth, collector, queue, visited)

            await self.rate_limiter.pause()

        return collector.entries

    async def _fetch_page(
        self, fetcher: BaseFetcher, url: str, path: str
    ) -> ExtractedPage | None:
        """Fetch and extract one page; None when it has to be skipped."""
        try:
            async with self.rate_limiter.slot():
                result = await fetcher.fetch(url)
            result.raise_for_status()
        except TransportError as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            self.stats.pages_failed += 1
            return None

        context = FilterContext(
            url=result.final_url,
            path=path,
            base_url=self.definition.base_url,
        )
        try:
            html = self.pipeline.process(result.html, context)
            return self.extractor.extract(html, path)
        except Exception:
            logger.warning("Failed to extract %s", url, exc_info=True)
            self.stats.pages_failed += 1
            return None

    def _fold(
        self,
        page: ExtractedPage,
        path: str,
        depth: int,
        collector: EntryCollector,
        queue: deque[tuple[str, int]],
        visited: set[str],
    ) -> None:
        """Apply one page's result to the entry list and the frontier."""
        entry_path = strip_extension(path) or ROOT_ENTRY_PATH

        collector.ensure_ancestors(entry_path)
        if page.content:
            collector.add_leaf(
                ParsedEntry(
                    path=entry_path,
                    title=page.title,
                    content=page.content,
                    entry_type=page.entry_type,
                    parent_path=parent_path(entry_path),
                )
            )

        if not self.options.follow_links:
            return

        for link in page.links:
            if link not in visited and not self.options.should_skip(link):
                queue.append((link, depth + 1))

    def _max_pages_estimate(self, discovered: int = 0) -> int:
        if self.options.max_pages is not None:
            return self.options.max_pages
        return discovered
