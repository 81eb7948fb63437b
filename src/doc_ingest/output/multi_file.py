"""Markdown tree output: one file per entry plus an index."""

import re
from pathlib import Path

import aiofiles

from doc_ingest.entries import ParsedEntry
from doc_ingest.sources import Source

INDEX_FILENAME = "_index.md"

_UNSAFE_CHARS = re.compile(r'[<>:"|?*\\]')


class MultiFileOutput:
    """Write each entry with content to its own Markdown file."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    async def write(self, entries: list[ParsedEntry], source: Source) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: dict[str, Path] = {}
        for entry in entries:
            if not entry.content:
                continue
            filepath = self._get_filepath(entry.path)
            filepath.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(filepath, "w", encoding="utf-8") as f:
                await f.write(self._format_entry(entry))
            written[entry.path] = filepath

        await self._write_index(entries, written, source)
        return self.output_dir

    def _get_filepath(self, path: str) -> Path:
        """Map an entry path to a file inside the output directory."""
        parts = [
            _UNSAFE_CHARS.sub("_", part)
            for part in path.split("/")
            if part and part not in (".", "..")
        ]
        if not parts:
            parts = ["index"]
        parts[-1] = parts[-1] + ".md"
        return self.output_dir.joinpath(*parts)

    @staticmethod
    def _format_entry(entry: ParsedEntry) -> str:
        lines = [
            "---",
            f"title: {entry.title}",
            f"path: {entry.path}",
        ]
        if entry.entry_type:
            lines.append(f"entry_type: {entry.entry_type}")
        if entry.parent_path:
            lines.append(f"parent_path: {entry.parent_path}")
        lines.append("---")
        lines.append("")
        lines.append(entry.content.rstrip())
        lines.append("")
        return "\n".join(lines)

    async def _write_index(
        self,
        entries: list[ParsedEntry],
        written: dict[str, Path],
        source: Source,
    ) -> None:
        """List the tree, children indented below their parents."""
        children: dict[str | None, list[ParsedEntry]] = {}
        for entry in entries:
            children.setdefault(entry.parent_path, []).append(entry)

        parts = [
            f"# {source.display_name} {source.version}",
            "",
            f"> Source: {source.base_url}",
        ]
        if source.attribution:
            parts.append(f"> {source.attribution}")
        parts.append(f"> Total entries: {len(entries)}")
        parts.append("")

        def visit(parent: str | None, level: int) -> None:
            for entry in children.get(parent, []):
                indent = "  " * level
                filepath = written.get(entry.path)
                if filepath:
                    rel = filepath.relative_to(self.output_dir).as_posix()
                    parts.append(f"{indent}- [{entry.title}]({rel})")
                else:
                    parts.append(f"{indent}- {entry.title}")
                visit(entry.path, level + 1)

        visit(None, 0)
        parts.append("")

        async with aiofiles.open(self.output_dir / INDEX_FILENAME, "w", encoding="utf-8") as f:
            await f.write("\n".join(parts))
