"""HTML to Markdown conversion."""

from doc_ingest.converter.markdown import (
    MarkdownConverter,
    detect_language,
    fence,
    html_to_markdown,
)

__all__ = [
    "MarkdownConverter",
    "detect_language",
    "fence",
    "html_to_markdown",
]
