"""URL manipulation utilities."""

import re
from urllib.parse import urlparse

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def origin_of(url: str) -> str:
    """``scheme://host[:port]`` of a URL, or an empty string."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def is_same_host(url1: str, url2: str) -> bool:
    """Check if two URLs are on the same host; malformed URLs never are."""
    try:
        return urlparse(url1).netloc.lower() == urlparse(url2).netloc.lower()
    except ValueError:
        return False


def has_scheme(href: str) -> bool:
    """True for ``mailto:``, ``https:``, ``data:`` and other scheme prefixes."""
    return bool(_SCHEME_RE.match(href))


def strip_fragment_and_query(href: str) -> str:
    return href.split("#", 1)[0].split("?", 1)[0]


def resolve_location(base_url: str, path: str) -> str:
    """Absolute URL of a crawl-relative ``path`` under ``base_url``."""
    if path.startswith(("http://", "https://")):
        return path

    if path.startswith("/"):
        return origin_of(base_url) + path

    if path.startswith("./"):
        path = path[2:]
    return f"{base_url.rstrip('/')}/{path}"


def canonicalize_path(path: str) -> str:
    """Collapse empty, ``.`` and ``..`` segments of a relative path.

    A trailing slash is kept: ``learn/`` and ``learn`` can be different
    resources on some servers.
    """
    trailing = path.endswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)

    result = "/".join(parts)
    if trailing and result:
        result += "/"
    return result
