"""JSON Lines hand-off of an entry list."""

import json
from pathlib import Path

import aiofiles

from doc_ingest.entries import ParsedEntry
from doc_ingest.sources import Source


class JsonLinesOutput:
    """Write the source header followed by one entry per line."""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)

    async def write(self, entries: list[ParsedEntry], source: Source) -> Path:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        header = {
            "name": source.name,
            "display_name": source.display_name,
            "version": source.version,
            "source_url": source.base_url,
            "attribution": source.attribution,
            "total_entries": len(entries),
        }

        async with aiofiles.open(self.output_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps({"source": header}, ensure_ascii=False) + "\n")
            for entry in entries:
                await f.write(entry.model_dump_json() + "\n")

        return self.output_path


def read_entries(path: Path) -> list[ParsedEntry]:
    """Load the entries back from a JSON Lines file, skipping the header."""
    entries = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            data = json.loads(line)
            if "source" in data:
                continue
            entries.append(ParsedEntry.model_validate(data))
    return entries
