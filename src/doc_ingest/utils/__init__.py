"""Utility functions and classes."""

from doc_ingest.utils.rate_limiter import RateLimiter
from doc_ingest.utils.url_utils import (
    canonicalize_path,
    is_same_host,
    origin_of,
    resolve_location,
)

__all__ = [
    "RateLimiter",
    "canonicalize_path",
    "is_same_host",
    "origin_of",
    "resolve_location",
]
