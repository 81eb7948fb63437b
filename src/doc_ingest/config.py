"""Configuration models for documentation sources."""

import re
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from doc_ingest.errors import ConfigurationError

DEFAULT_USER_AGENT = "DocIngest/1.0 (Documentation Scraper)"


class TraversalOptions(BaseModel):
    """Crawl scope and politeness settings for one web source."""

    model_config = ConfigDict(frozen=True)

    seed_paths: list[str] = Field(default_factory=lambda: [""])
    skip_patterns: list[re.Pattern[str]] = Field(default_factory=list)
    skip_paths: frozenset[str] = frozenset()
    only_patterns: list[re.Pattern[str]] | None = None
    max_depth: int | None = Field(default=3, ge=0)
    max_pages: int | None = Field(default=500, ge=0)
    follow_links: bool = True
    concurrency: int = Field(default=4, ge=1, le=32)
    delay_ms: int = Field(default=200, ge=0, le=60000)
    timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    user_agent: str = DEFAULT_USER_AGENT

    def should_skip(self, path: str) -> bool:
        """Whether ``path`` falls outside the crawl scope.

        Skip rules always win over ``only_patterns``.
        """
        if path in self.skip_paths:
            return True

        for pattern in self.skip_patterns:
            if pattern.search(path):
                return True

        if self.only_patterns is not None:
            if not any(pattern.search(path) for pattern in self.only_patterns):
                return True

        return False


def split_selector_group(group: str) -> list[str]:
    """Split a selector list on its top-level commas.

    Commas inside ``(...)``, ``[...]`` or quotes belong to one selector, as in
    ``:is(h1, h2)`` or ``[data-x="a,b"]``.
    """
    selectors: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    for char in group:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            selectors.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    selectors.append("".join(current).strip())
    return [s for s in selectors if s]


class ContentSelectors(BaseModel):
    """CSS selectors locating title, body and links within a page."""

    model_config = ConfigDict(frozen=True)

    title: str = "h1, .page-title, title"
    content: str = "main, article, .content, .documentation, #content, body"
    links: str = "a[href]"
    entry_type_attr: str | None = None
    remove_selectors: list[str] = Field(
        default_factory=lambda: [
            "nav",
            "header",
            "footer",
            ".sidebar",
            ".navigation",
            ".toc",
            "script",
            "style",
            ".ads",
            ".advertisement",
        ]
    )

    @property
    def title_selectors(self) -> list[str]:
        """Title alternatives in priority order."""
        return split_selector_group(self.title)


class SourceDefinition(BaseModel):
    """A documentation web site that is ingested by crawling."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    version: str
    base_url: str
    description: str = ""
    options: TraversalOptions = Field(default_factory=TraversalOptions)
    selectors: ContentSelectors = Field(default_factory=ContentSelectors)
    attribution: str | None = None


class GitRepoConfig(BaseModel):
    """A documentation tree kept as Markdown in a GitHub repository.

    ``base_url`` has the form
    ``https://github.com/{owner}/{repo}/tree/{branch}/{path}``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    version: str
    base_url: str
    description: str | None = None
    available_versions: list[str] = Field(default_factory=list)
    ignore_files: list[str] = Field(default_factory=list)
    ignore_dirs: list[str] = Field(default_factory=lambda: [".git"])
    attribution: str | None = None

    def should_ignore_file(self, file_path: str) -> bool:
        file_name = file_path.rsplit("/", 1)[-1]
        return any(
            file_name == pattern or pattern in file_path
            for pattern in self.ignore_files
        )

    def should_ignore_dir(self, dir_name: str) -> bool:
        return any(pattern in dir_name for pattern in self.ignore_dirs)


class SourcesFile(BaseModel):
    """Extra source definitions loaded from TOML.

    Example::

        [[web]]
        name = "httpx"
        display_name = "HTTPX"
        version = "0.27"
        base_url = "https://www.python-httpx.org/"

        [web.options]
        seed_paths = ["quickstart/"]
        max_pages = 40

        [[repository]]
        name = "fastapi"
        display_name = "FastAPI"
        version = "master"
        base_url = "https://github.com/fastapi/fastapi/tree/master/docs/en/docs"
    """

    web: list[SourceDefinition] = Field(default_factory=list)
    repository: list[GitRepoConfig] = Field(default_factory=list)


def load_sources_file(path: Path) -> SourcesFile:
    """Load source definitions from a TOML file."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return SourcesFile.model_validate(data)
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid sources file {path}: {e}") from e
