"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GitHubRepoRef:
    """Repository as returned by the listing endpoints."""

    full_name: str
    pushed_at: str | None  # ISO 8601, None for repos that were never pushed
    fork: bool = False


@dataclass(frozen=True)
class GitHubCommitRef:
    """Commit metadata from a listing or search result (no diff stats)."""

    sha: str
    repo_full_name: str
    html_url: str
    message: str  # First line only
    committed_at: str  # Committer date, ISO 8601

    @property
    def repo_url(self) -> str:
        """Repository web URL, derived from the commit URL."""
        return self.html_url.removesuffix(f"/commit/{self.sha}")


@dataclass(frozen=True)
class DiffStats:
    """Lines added and removed by a single commit."""

    additions: int
    deletions: int
