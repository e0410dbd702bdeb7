"""Fold commit records into per-repository and overall totals."""

from collections.abc import Iterable

from shipstats.services.stats.types import CommitRecord, RangeSummary, RepoSummary


def aggregate_commits(
    username: str,
    from_date: str,
    to_date: str,
    commits: Iterable[CommitRecord],
) -> RangeSummary:
    """Build a RangeSummary from a flat list of commits.

    Commits are grouped by repository in first-seen order, then repositories
    are sorted by additions + deletions, largest first. The sort is stable,
    so ties keep first-seen order.
    """
    records = list(commits)
    groups: dict[str, list[CommitRecord]] = {}

    for commit in records:
        groups.setdefault(commit.repo_full_name, []).append(commit)

    summaries = [
        RepoSummary(
            repo_full_name=name,
            repo_url=group[0].repo_url,
            additions=sum(c.additions for c in group),
            deletions=sum(c.deletions for c in group),
            commit_count=len(group),
            commits=tuple(group),
        )
        for name, group in groups.items()
    ]
    repos = sorted(summaries, key=lambda r: r.changes, reverse=True)

    return RangeSummary(
        username=username,
        from_date=from_date,
        to_date=to_date,
        total_additions=sum(c.additions for c in records),
        total_deletions=sum(c.deletions for c in records),
        total_commits=len(records),
        repos=tuple(repos),
    )
