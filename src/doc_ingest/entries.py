"""Parsed entries and the ancestor synthesis that keeps them a tree."""

import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SECTION = "section"

_STRIP_EXTENSIONS = (".html", ".htm", ".mdx", ".markdown", ".md")


class ParsedEntry(BaseModel):
    """One unit of extracted documentation, a leaf page or a section."""

    path: str
    title: str
    content: str = ""
    entry_type: str | None = None
    parent_path: str | None = None

    @property
    def is_section(self) -> bool:
        return self.entry_type == SECTION and not self.content


def strip_extension(path: str) -> str:
    """Drop trailing slashes and a known document extension."""
    path = path.rstrip("/")
    lowered = path.lower()
    for ext in _STRIP_EXTENSIONS:
        if lowered.endswith(ext):
            path = path[: -len(ext)]
            break
    return path.rstrip("/")


def parent_path(path: str) -> str | None:
    """The path with its last segment removed, or None at the root."""
    path = strip_extension(path)
    if "/" not in path:
        return None
    return path.rsplit("/", 1)[0]


def humanize(segment: str) -> str:
    """Turn a path segment like ``error_handling`` into ``Error handling``."""
    text = segment.replace("_", " ").replace("-", " ").strip()
    if not text:
        return segment
    return text[0].upper() + text[1:]


def ensure_ancestors(
    path: str,
    existing_paths: set[str],
    entries: list[ParsedEntry],
) -> list[ParsedEntry]:
    """Append a section entry for every missing ancestor of ``path``.

    Ancestors are walked from the shortest prefix to the longest; the full
    path itself is never added. Returns the entries created, which is empty
    when every ancestor is already present.
    """
    parts = [p for p in strip_extension(path).split("/") if p]
    created: list[ParsedEntry] = []

    for i in range(1, len(parts)):
        prefix = "/".join(parts[:i])
        if prefix in existing_paths:
            continue

        existing_paths.add(prefix)
        section = ParsedEntry(
            path=prefix,
            title=humanize(parts[i - 1]),
            content="",
            entry_type=SECTION,
            parent_path="/".join(parts[: i - 1]) or None,
        )
        entries.append(section)
        created.append(section)

    return created


class EntryCollector:
    """Ordered entry list with a path index.

    Keeps paths unique: a page whose path was already synthesized as a
    section takes that section's place, a repeated page is dropped.
    """

    def __init__(self):
        self.entries: list[ParsedEntry] = []
        self.paths: set[str] = set()
        self._positions: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def ensure_ancestors(self, path: str) -> list[ParsedEntry]:
        start = len(self.entries)
        created = ensure_ancestors(path, self.paths, self.entries)
        for offset, entry in enumerate(created):
            self._positions[entry.path] = start + offset
        return created

    def add_leaf(self, entry: ParsedEntry) -> bool:
        """Add a content entry; returns False when it was a duplicate."""
        position = self._positions.get(entry.path)
        if position is not None:
            existing = self.entries[position]
            if not existing.is_section:
                logger.debug("Duplicate entry path dropped: %s", entry.path)
                return False
            self.entries[position] = entry
            return True

        self.paths.add(entry.path)
        self._positions[entry.path] = len(self.entries)
        self.entries.append(entry)
        return True


def find_orphans(entries: list[ParsedEntry]) -> list[ParsedEntry]:
    """Entries whose parent path has no entry of its own."""
    paths = {entry.path for entry in entries}
    return [
        entry
        for entry in entries
        if entry.parent_path is not None and entry.parent_path not in paths
    ]
