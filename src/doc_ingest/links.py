"""Resolve anchor hrefs into crawl-relative paths."""

import re
from urllib.parse import urlparse

from doc_ingest.utils.url_utils import (
    canonicalize_path,
    has_scheme,
    is_same_host,
    strip_fragment_and_query,
)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class LinkNormalizer:
    """Turn an ``href`` found on ``current_path`` into a path under the base.

    Paths are relative to ``base_url`` and keep their extension; the result is
    canonical, so feeding it back in (from a root-level page, or in
    root-relative form) returns it unchanged.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._scheme = urlparse(base_url).scheme or "https"

    def normalize(self, href: str, current_path: str) -> str | None:
        href = strip_fragment_and_query(href.strip())
        if not href or _CONTROL_CHARS.search(href):
            return None

        if href.startswith("//"):
            href = f"{self._scheme}:{href}"

        if href.startswith(("http://", "https://")):
            return self._from_absolute(href)

        if has_scheme(href):
            # mailto:, javascript:, tel:, data: ...
            return None

        if href.startswith("/"):
            return canonicalize_path(href.lstrip("/"))

        directory = current_path.rsplit("/", 1)[0] if "/" in current_path else ""
        parts = [p for p in directory.split("/") if p]

        if href.startswith("../"):
            while href.startswith("../"):
                if parts:
                    parts.pop()
                href = href[3:]
        else:
            while href.startswith("./"):
                href = href[2:]

        parts.append(href)
        return canonicalize_path("/".join(p for p in parts if p))

    def _from_absolute(self, url: str) -> str | None:
        if url.startswith(self.base_url):
            return canonicalize_path(url[len(self.base_url):])
        if url == self.base_url.rstrip("/"):
            return ""
        if not is_same_host(url, self.base_url):
            return None
        try:
            path = urlparse(url).path
        except ValueError:
            return None
        return canonicalize_path(path.lstrip("/"))
