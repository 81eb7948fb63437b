import json

import pytest

from conftest import make_definition
from doc_ingest.entries import SECTION, ParsedEntry
from doc_ingest.output import JsonLinesOutput, MultiFileOutput, read_entries
from doc_ingest.output.multi_file import INDEX_FILENAME


@pytest.fixture
def source():
    return make_definition().model_copy(update={"attribution": "© Example Inc."})


@pytest.fixture
def entries():
    return [
        ParsedEntry(path="index", title="Home", content="# Home", entry_type="section"),
        ParsedEntry(path="guide", title="Guide", entry_type=SECTION),
        ParsedEntry(
            path="guide/intro",
            title="Introduction",
            content="# Introduction\n\nHello.",
            entry_type="page",
            parent_path="guide",
        ),
    ]


@pytest.mark.asyncio
async def test_jsonl_output(tmp_path, source, entries):
    path = await JsonLinesOutput(tmp_path / "out" / "example.jsonl").write(entries, source)

    lines = path.read_text(encoding="utf-8").splitlines()
    header = json.loads(lines[0])["source"]

    assert header["name"] == "example"
    assert header["attribution"] == "© Example Inc."
    assert header["total_entries"] == 3
    assert len(lines) == 4
    assert read_entries(path) == entries


@pytest.mark.asyncio
async def test_multi_file_output(tmp_path, source, entries):
    out = await MultiFileOutput(tmp_path / "tree").write(entries, source)

    intro = (out / "guide" / "intro.md").read_text(encoding="utf-8")
    assert intro.startswith("---\ntitle: Introduction\npath: guide/intro\n")
    assert "parent_path: guide" in intro
    assert intro.rstrip().endswith("Hello.")

    assert (out / "index.md").exists()
    # Sections without content get no file of their own.
    assert not (out / "guide.md").exists()

    index = (out / INDEX_FILENAME).read_text(encoding="utf-8")
    assert "# Example 1.0" in index
    assert "> © Example Inc." in index
    assert "- [Home](index.md)" in index
    assert "- Guide\n  - [Introduction](guide/intro.md)" in index


@pytest.mark.asyncio
async def test_multi_file_paths_stay_inside_output_dir(tmp_path, source):
    entry = ParsedEntry(path="../../etc/pass:wd", title="Sneaky", content="x")

    out = await MultiFileOutput(tmp_path / "tree").write([entry], source)

    assert (out / "etc" / "pass_wd.md").exists()
