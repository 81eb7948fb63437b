"""Ordered chain of pure HTML-to-HTML transforms."""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from doc_ingest.utils.url_utils import origin_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterContext:
    """Where the HTML being filtered came from."""

    url: str
    path: str
    base_url: str


Filter = Callable[[str, FilterContext], str]

_NOISE_PATTERNS = [
    re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<!--.*?-->", re.DOTALL),
]

_HREF_RE = re.compile(r"""href=(["'])([^"']+)\1""", re.IGNORECASE)


def strip_noise(html: str, context: FilterContext) -> str:
    """Remove scripts, stylesheets and HTML comments."""
    for pattern in _NOISE_PATTERNS:
        html = pattern.sub("", html)
    return html


def rewrite_root_relative_links(html: str, context: FilterContext) -> str:
    """Make ``href="/x"`` absolute against the origin of the base location."""
    origin = origin_of(context.base_url)
    if not origin:
        return html

    def replace(match: re.Match[str]) -> str:
        quote, href = match.group(1), match.group(2)
        if href.startswith("/") and not href.startswith("//"):
            return f"href={quote}{origin}{href}{quote}"
        return match.group(0)

    return _HREF_RE.sub(replace, html)


class FilterPipeline:
    """Apply filters in order.

    A filter that raises is skipped and its input passed through, so one
    malformed page never aborts the crawl.
    """

    def __init__(self, filters: Sequence[Filter] = ()):
        self.filters: tuple[Filter, ...] = tuple(filters)

    @classmethod
    def default(cls) -> "FilterPipeline":
        return cls([strip_noise, rewrite_root_relative_links])

    def add_filter(self, filter_fn: Filter) -> "FilterPipeline":
        """Return a new pipeline with ``filter_fn`` appended."""
        return FilterPipeline([*self.filters, filter_fn])

    def process(self, html: str, context: FilterContext) -> str:
        result = html
        for filter_fn in self.filters:
            try:
                result = filter_fn(result, context)
            except Exception:
                logger.debug(
                    "Filter %s failed on %s",
                    getattr(filter_fn, "__name__", filter_fn),
                    context.url,
                    exc_info=True,
                )
        return result
