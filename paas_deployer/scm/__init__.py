"""Source-control collaborators (archive lookup and download)."""

from .github import GitHubArchiveResolver, normalize_archive_url

__all__ = ["GitHubArchiveResolver", "normalize_archive_url"]
