"""Lookup table of ingestible documentation sources."""

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel

from doc_ingest.config import GitRepoConfig, SourceDefinition, load_sources_file
from doc_ingest.errors import ConfigurationError
from doc_ingest.repository.walker import parse_repo_url
from doc_ingest.sources.repos import REPO_SOURCES
from doc_ingest.sources.web import WEB_SOURCES

logger = logging.getLogger(__name__)

Source = SourceDefinition | GitRepoConfig


class SourceKind(str, Enum):
    """How a source is ingested."""

    WEB = "web"
    REPOSITORY = "repository"


class AvailableSource(BaseModel):
    """Summary of a source for listings."""

    name: str
    display_name: str
    version: str
    description: str
    source_url: str
    kind: SourceKind


class SourceRegistry:
    """Sources keyed by name, built once at startup.

    Repository sources shadow web sources of the same name.
    """

    def __init__(
        self,
        web: Iterable[SourceDefinition] = (),
        repositories: Iterable[GitRepoConfig] = (),
    ):
        self._web: dict[str, SourceDefinition] = {d.name: d for d in web}
        self._repositories: dict[str, GitRepoConfig] = {c.name: c for c in repositories}

    @classmethod
    def default(cls, sources_file: Path | None = None) -> "SourceRegistry":
        """Built-in sources, extended by an optional TOML file."""
        web = list(WEB_SOURCES)
        repositories = list(REPO_SOURCES)
        if sources_file is not None:
            extra = load_sources_file(sources_file)
            logger.info(
                "Loaded %d web and %d repository sources from %s",
                len(extra.web),
                len(extra.repository),
                sources_file,
            )
            web.extend(extra.web)
            repositories.extend(extra.repository)
        return cls(web, repositories)

    def resolve(self, name: str) -> Source:
        """Source definition for ``name``; ConfigurationError if unknown."""
        if name in self._repositories:
            return self._repositories[name]
        if name in self._web:
            return self._web[name]
        raise ConfigurationError(f"Documentation not found: {name}")

    def names(self) -> list[str]:
        return sorted(set(self._web) | set(self._repositories))

    def list_sources(self) -> list[AvailableSource]:
        """Every source, repository-backed ones last."""
        sources = [
            AvailableSource(
                name=d.name,
                display_name=d.display_name,
                version=d.version,
                description=d.description,
                source_url=d.base_url,
                kind=SourceKind.WEB,
            )
            for d in self._web.values()
            if d.name not in self._repositories
        ]
        for config in self._repositories.values():
            sources.append(
                AvailableSource(
                    name=config.name,
                    display_name=config.display_name,
                    version=config.version,
                    description=config.description or _repo_description(config),
                    source_url=config.base_url,
                    kind=SourceKind.REPOSITORY,
                )
            )
        return sources


def _repo_description(config: GitRepoConfig) -> str:
    try:
        info = parse_repo_url(config.base_url)
    except ConfigurationError:
        return f"{config.display_name} documentation"
    return f"Official documentation from {info.owner}/{info.repo}"
