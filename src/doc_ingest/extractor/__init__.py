"""Content extraction from fetched pages."""

from doc_ingest.extractor.content import (
    ContentExtractor,
    ExtractedPage,
    classify_entry_type,
)

__all__ = [
    "ContentExtractor",
    "ExtractedPage",
    "classify_entry_type",
]
