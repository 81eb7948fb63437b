"""Documentation sources and their registry."""

from doc_ingest.sources.registry import (
    AvailableSource,
    Source,
    SourceKind,
    SourceRegistry,
)

__all__ = [
    "AvailableSource",
    "Source",
    "SourceKind",
    "SourceRegistry",
]
