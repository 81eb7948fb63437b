"""HTML filters applied to a page before it is parsed."""

from doc_ingest.filters.pipeline import (
    Filter,
    FilterContext,
    FilterPipeline,
    rewrite_root_relative_links,
    strip_noise,
)

__all__ = [
    "Filter",
    "FilterContext",
    "FilterPipeline",
    "rewrite_root_relative_links",
    "strip_noise",
]
