"""Data types for the stats pipeline."""

from dataclasses import asdict, dataclass
from typing import Any

from shipstats.services.stats.date_ranges import utc_day


@dataclass(frozen=True)
class CommitRecord:
    """One attributed commit with its diff stats.

    (repo_full_name, sha) identifies the diff stats lookup.
    """

    sha: str
    repo_full_name: str  # owner/repo
    repo_url: str
    message: str  # First line only
    committed_at: str  # ISO 8601
    commit_url: str
    additions: int
    deletions: int

    @property
    def day(self) -> str:
        """UTC calendar day of the commit (YYYY-MM-DD)."""
        return utc_day(self.committed_at)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommitRecord":
        return cls(
            sha=data["sha"],
            repo_full_name=data["repo_full_name"],
            repo_url=data["repo_url"],
            message=data["message"],
            committed_at=data["committed_at"],
            commit_url=data["commit_url"],
            additions=int(data["additions"]),
            deletions=int(data["deletions"]),
        )


@dataclass(frozen=True)
class RepoSummary:
    """Totals for all commits in one repository."""

    repo_full_name: str
    repo_url: str
    additions: int
    deletions: int
    commit_count: int
    commits: tuple[CommitRecord, ...]  # Fetch order

    @property
    def changes(self) -> int:
        return self.additions + self.deletions

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["commits"] = [c.to_dict() for c in self.commits]
        return data


@dataclass(frozen=True)
class RangeSummary:
    """Commit activity for a user over an inclusive range of days.

    `repos` is sorted by total changes, largest first. Consumers must keep
    that order.
    """

    username: str
    from_date: str  # YYYY-MM-DD, inclusive
    to_date: str  # YYYY-MM-DD, inclusive
    total_additions: int
    total_deletions: int
    total_commits: int
    repos: tuple[RepoSummary, ...]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "username": self.username,
            "from": self.from_date,
            "to": self.to_date,
            "total_additions": self.total_additions,
            "total_deletions": self.total_deletions,
            "total_commits": self.total_commits,
            "repos": [r.to_dict() for r in self.repos],
        }
