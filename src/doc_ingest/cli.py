"""Command-line interface for doc-ingest."""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from doc_ingest import __version__
from doc_ingest.config import SourceDefinition, TraversalOptions
from doc_ingest.entries import ParsedEntry
from doc_ingest.errors import ConfigurationError, IngestError
from doc_ingest.ingest import ingest_source
from doc_ingest.output import JsonLinesOutput, MultiFileOutput
from doc_ingest.progress import ProgressChannel, ScrapePhase
from doc_ingest.sources import Source, SourceRegistry

app = typer.Typer(
    name="doc-ingest",
    help="Ingest documentation sites and repositories into a hierarchical entry set.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()


class OutputFormat(str, Enum):
    """How entries are handed off."""

    JSONL = "jsonl"
    TREE = "tree"


def version_callback(value: bool):
    if value:
        console.print(f"doc-ingest version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
):
    """Documentation ingestion for full-text indexing."""


@app.command()
def ingest(
    name: str = typer.Argument(..., help="Name of a registered documentation source"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (jsonl) or directory (tree). Defaults to ./output/<name>",
    ),
    fmt: str = typer.Option(
        "jsonl",
        "--format",
        "-f",
        help="Output format: 'jsonl' (one entry per line) or 'tree' (Markdown files)",
    ),
    sources_file: Optional[Path] = typer.Option(
        None,
        "--sources-file",
        "-s",
        help="TOML file with additional source definitions",
    ),
    max_pages: Optional[int] = typer.Option(
        None,
        "--max-pages",
        help="Override the source's page budget (web sources)",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Override the source's link depth (web sources)",
    ),
    delay: Optional[int] = typer.Option(
        None,
        "--delay",
        help="Override the delay between requests, in milliseconds (web sources)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
):
    """
    Crawl or clone a documentation source and write its entries.

    Examples:

        doc-ingest ingest rust

        doc-ingest ingest react --max-pages 20 -o react.jsonl

        doc-ingest ingest nextjs --format tree -o ./nextjs-docs/
    """
    configure_logging(verbose)

    try:
        output_format = OutputFormat(fmt)
    except ValueError:
        console.print(f"[red]Invalid format: {fmt}. Use 'jsonl' or 'tree'.[/red]")
        raise typer.Exit(1)

    try:
        registry = SourceRegistry.default(sources_file)
        source = registry.resolve(name)
        source = _apply_overrides(source, max_pages=max_pages, max_depth=max_depth, delay=delay)
    except IngestError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if output is None:
        suffix = ".jsonl" if output_format == OutputFormat.JSONL else ""
        output = Path("./output") / f"{source.name}{suffix}"

    try:
        entries = asyncio.run(_run(source))
        written = asyncio.run(_write(entries, source, output, output_format))
    except KeyboardInterrupt:
        console.print("\n[yellow]Ingestion cancelled.[/yellow]")
        raise typer.Exit(130)
    except IngestError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    sections = sum(1 for entry in entries if entry.is_section)
    console.print(
        f"[green]Written {len(entries)} entries"
        f" ({len(entries) - sections} pages, {sections} sections) to {written}[/green]"
    )


def _apply_overrides(
    source: Source,
    max_pages: int | None,
    max_depth: int | None,
    delay: int | None,
) -> Source:
    """Copy of a web source with CLI overrides applied."""
    updates: dict = {}
    if max_pages is not None:
        updates["max_pages"] = max_pages
    if max_depth is not None:
        updates["max_depth"] = max_depth
    if delay is not None:
        updates["delay_ms"] = delay
    if not updates:
        return source

    if not isinstance(source, SourceDefinition):
        console.print("[yellow]Crawl overrides are ignored for repository sources.[/yellow]")
        return source

    try:
        options = TraversalOptions.model_validate({**source.options.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid crawl override: {e}") from e
    return source.model_copy(update={"options": options})


async def _run(source: Source) -> list[ParsedEntry]:
    """Ingest while rendering the progress stream."""
    channel = ProgressChannel()

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TextColumn("{task.fields[path]}", style="dim"),
        console=console,
    )

    with progress:
        task_id = progress.add_task(f"{source.display_name}", total=None, path="")
        run = asyncio.create_task(ingest_source(source, progress=channel))
        run.add_done_callback(lambda _: channel.close())

        async for event in channel:
            if event.phase == ScrapePhase.FAILED:
                progress.update(task_id, description=f"[red]{source.display_name} failed")
                continue
            progress.update(
                task_id,
                total=event.total_estimate or None,
                completed=event.current_index,
                path=event.current_path[-60:],
            )

        return await run


async def _write(
    entries: list[ParsedEntry],
    source: Source,
    output: Path,
    output_format: OutputFormat,
) -> Path:
    if output_format == OutputFormat.JSONL:
        return await JsonLinesOutput(output).write(entries, source)
    return await MultiFileOutput(output).write(entries, source)


@app.command("list-sources")
def list_sources(
    sources_file: Optional[Path] = typer.Option(
        None,
        "--sources-file",
        "-s",
        help="TOML file with additional source definitions",
    ),
):
    """List available documentation sources."""
    try:
        registry = SourceRegistry.default(sources_file)
    except IngestError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Available Documentation Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Display Name")
    table.add_column("Version")
    table.add_column("Kind", justify="center")
    table.add_column("Source")

    for source in registry.list_sources():
        table.add_row(
            source.name,
            source.display_name,
            source.version,
            source.kind.value,
            source.source_url,
        )

    console.print(table)


@app.command("show-source")
def show_source(
    name: str = typer.Argument(..., help="Name of a registered documentation source"),
    sources_file: Optional[Path] = typer.Option(
        None,
        "--sources-file",
        "-s",
        help="TOML file with additional source definitions",
    ),
):
    """Print the full definition of one source."""
    try:
        source = SourceRegistry.default(sources_file).resolve(name)
    except IngestError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print_json(source.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
