import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from conftest import make_definition
from doc_ingest.config import GitRepoConfig
from doc_ingest.entries import ParsedEntry
from doc_ingest.errors import ConfigurationError
from doc_ingest.fetcher import HttpFetcher
from doc_ingest.ingest import ingest, ingest_source
from doc_ingest.sources import SourceRegistry


@pytest.mark.asyncio
async def test_ingest_web_source_by_name(docs_site):
    definition = make_definition(max_depth=None)
    registry = SourceRegistry(web=[definition])
    fetcher = HttpFetcher(definition.options, transport=docs_site.transport)

    entries = await ingest("example", registry=registry, fetcher=fetcher)

    assert len(entries) == 9
    assert entries[0].path == "index"


@pytest.mark.asyncio
async def test_ingest_unknown_name_fails_before_fetching(docs_site):
    definition = make_definition()
    fetcher = HttpFetcher(definition.options, transport=docs_site.transport)

    with pytest.raises(ConfigurationError):
        await ingest("missing", registry=SourceRegistry(web=[definition]), fetcher=fetcher)

    assert docs_site.requested == []


@pytest.mark.asyncio
async def test_repository_source_goes_to_walker():
    config = GitRepoConfig(
        name="demo",
        display_name="Demo",
        version="main",
        base_url="https://github.com/acme/demo/tree/main/docs",
    )
    entry = ParsedEntry(path="intro", title="Intro", content="x", entry_type="page")
    walker = MagicMock()
    walker.ingest = AsyncMock(return_value=[entry])

    with patch("doc_ingest.ingest.RepositoryWalker", return_value=walker) as walker_cls:
        entries = await ingest_source(config)

    walker_cls.assert_called_once_with(config, progress=None)
    assert entries == [entry]


@pytest.mark.asyncio
async def test_orphans_are_logged(caplog):
    config = GitRepoConfig(
        name="demo",
        display_name="Demo",
        version="main",
        base_url="https://github.com/acme/demo/tree/main/docs",
    )
    orphan = ParsedEntry(path="a/b", title="B", content="x", parent_path="a")
    walker = MagicMock()
    walker.ingest = AsyncMock(return_value=[orphan])

    with patch("doc_ingest.ingest.RepositoryWalker", return_value=walker):
        with caplog.at_level(logging.WARNING, logger="doc_ingest.ingest"):
            await ingest_source(config)

    assert "have no parent entry" in caplog.text
