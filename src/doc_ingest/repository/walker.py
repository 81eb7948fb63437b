"""Ingest a documentation tree from a shallow git clone."""

import asyncio
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import aiofiles

from doc_ingest.config import GitRepoConfig
from doc_ingest.entries import EntryCollector, ParsedEntry, humanize, parent_path, strip_extension
from doc_ingest.errors import CloneError, ConfigurationError, DocumentReadError
from doc_ingest.extractor.content import REPO_ENTRY_TYPES, classify_entry_type
from doc_ingest.progress import ProgressChannel, ScrapePhase, emit

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md", ".mdx", ".markdown")

# Headings further down than this are not treated as the document title.
TITLE_SCAN_LINES = 20


@dataclass(frozen=True)
class RepoInfo:
    """Location of a documentation tree inside a GitHub repository."""

    owner: str
    repo: str
    branch: str
    path: str = ""

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}.git"


def parse_repo_url(url: str) -> RepoInfo:
    """Split ``https://github.com/{owner}/{repo}/tree/{branch}/{path}``."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or parsed.netloc.lower() not in (
        "github.com",
        "www.github.com",
    ):
        raise ConfigurationError(f"Repository URL must point to github.com: {url}")

    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) < 4 or segments[2] != "tree":
        raise ConfigurationError(
            "Invalid repository URL "
            f"{url!r}, expected https://github.com/owner/repo/tree/branch/path"
        )

    return RepoInfo(
        owner=segments[0],
        repo=segments[1],
        branch=segments[3],
        path="/".join(segments[4:]),
    )


def extract_markdown_title(content: str, file_path: str) -> str:
    """First level-1 or level-2 heading near the top, else the file name."""
    for line in content.splitlines()[:TITLE_SCAN_LINES]:
        line = line.strip()
        if line.startswith("#") and not line.startswith("###"):
            title = line.lstrip("#").strip()
            if title:
                return title

    stem = strip_extension(file_path.rsplit("/", 1)[-1])
    return humanize(stem)


class RepositoryWalker:
    """Clone a repository and turn its Markdown files into entries.

    Everything after the clone is sequential local disk I/O.
    """

    def __init__(self, config: GitRepoConfig, progress: ProgressChannel | None = None):
        self.config = config
        self.progress = progress

    async def ingest(self) -> list[ParsedEntry]:
        repo_info = parse_repo_url(self.config.base_url)

        emit(self.progress, ScrapePhase.STARTING, current_path="Cloning repository...")
        logger.info(
            "Ingesting %s from %s/%s at %s",
            self.config.display_name,
            repo_info.owner,
            repo_info.repo,
            repo_info.branch,
        )

        clone_dir = Path(tempfile.mkdtemp(prefix=f"doc-ingest-{repo_info.repo}-"))
        try:
            try:
                await self.clone(repo_info, clone_dir)
            except CloneError as e:
                emit(self.progress, ScrapePhase.FAILED, current_path=str(e))
                raise
            return await self.walk(clone_dir, repo_info.path)
        finally:
            self._cleanup(clone_dir)

    async def clone(self, repo_info: RepoInfo, dest: Path) -> None:
        """Shallow-clone the pinned branch into ``dest``."""
        logger.info("Cloning %s (%s) into %s", repo_info.clone_url, repo_info.branch, dest)
        try:
            process = await asyncio.create_subprocess_exec(
                "git", "clone",
                "--depth", "1",
                "--branch", repo_info.branch,
                repo_info.clone_url,
                str(dest),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CloneError(f"Failed to execute git clone: {e}") from e

        _, stderr = await process.communicate()
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise CloneError(
                f"git clone of {repo_info.clone_url} ({repo_info.branch}) "
                f"exited with {process.returncode}: {message}"
            )

    def collect_markdown_files(self, root: Path, target: Path) -> list[Path]:
        """Markdown files under ``target`` in sorted walk order."""
        files: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(target):
            dirnames[:] = sorted(d for d in dirnames if not self.config.should_ignore_dir(d))
            for filename in sorted(filenames):
                if not filename.lower().endswith(MARKDOWN_EXTENSIONS):
                    continue
                file_path = Path(dirpath) / filename
                if self.config.should_ignore_file(file_path.relative_to(root).as_posix()):
                    continue
                files.append(file_path)
        return files

    async def walk(self, root: Path, subpath: str = "") -> list[ParsedEntry]:
        """Build entries from the Markdown files of a checked-out tree."""
        emit(self.progress, ScrapePhase.PROCESSING, current_path="Collecting files...")

        target = root / subpath if subpath else root
        if not target.is_dir():
            logger.warning("Documentation path %s not found in repository", subpath)
            files = []
        else:
            files = self.collect_markdown_files(root, target)

        total = len(files)
        emit(self.progress, ScrapePhase.SCRAPING, total_estimate=total)

        collector = EntryCollector()
        prefix = subpath.strip("/")
        for index, file_path in enumerate(files, start=1):
            relative = file_path.relative_to(root).as_posix()
            if prefix and relative.startswith(prefix + "/"):
                relative = relative[len(prefix) + 1:]
            if not relative:
                continue

            emit(
                self.progress,
                ScrapePhase.SCRAPING,
                current_index=index,
                total_estimate=total,
                current_path=relative,
                entries_so_far=len(collector),
            )

            entry_path = strip_extension(relative)
            collector.ensure_ancestors(entry_path)

            try:
                content = await self.read_file(file_path)
            except DocumentReadError as e:
                logger.warning("Skipping %s: %s", relative, e)
                continue

            collector.add_leaf(
                ParsedEntry(
                    path=entry_path,
                    title=extract_markdown_title(content, relative),
                    content=content,
                    entry_type=classify_entry_type(relative, REPO_ENTRY_TYPES),
                    parent_path=parent_path(entry_path),
                )
            )

        emit(
            self.progress,
            ScrapePhase.COMPLETED,
            current_index=total,
            total_estimate=total,
            entries_so_far=len(collector),
        )
        logger.info("Repository walk finished: %d files, %d entries", total, len(collector))
        return collector.entries

    @staticmethod
    async def read_file(file_path: Path) -> str:
        try:
            async with aiofiles.open(file_path, encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(str(file_path), f"Failed to read {file_path}: {e}") from e

    @staticmethod
    def _cleanup(clone_dir: Path) -> None:
        logger.debug("Removing temporary clone %s", clone_dir)
        try:
            shutil.rmtree(clone_dir)
        except OSError as e:
            logger.warning("Failed to remove temporary directory %s: %s", clone_dir, e)
