"""Ingestion of Markdown documentation from git repositories."""

from doc_ingest.repository.walker import RepoInfo, RepositoryWalker, parse_repo_url

__all__ = [
    "RepoInfo",
    "RepositoryWalker",
    "parse_repo_url",
]
