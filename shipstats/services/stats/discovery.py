"""
Commit discovery strategies.

A strategy finds the commits a user authored in a date window, without diff
stats. Two are available:
- RepoEnumerationDiscovery: list repositories pushed to since `from`, then list
  the user's commits in each. Complete, but costs one request per repository.
- GlobalSearchDiscovery: a single commit search query. Cheap, but GitHub caps
  search at 1000 results and only indexes default branches.
"""

import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Literal

from shipstats.services.github import GitHubReadOperations, UpstreamError
from shipstats.services.github.constants import PAGE_SIZE, SEARCH_RESULT_LIMIT
from shipstats.services.github.types import GitHubCommitRef, GitHubRepoRef
from shipstats.services.stats.batching import settle_in_batches
from shipstats.services.stats.date_ranges import window_bounds

logger = logging.getLogger(__name__)

DiscoveryStrategy = Literal["repos", "search"]


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class CommitDiscovery(ABC):
    """Finds commits authored by a user within an inclusive day range."""

    name: str

    def __init__(self, github: GitHubReadOperations):
        self.github = github

    @abstractmethod
    async def discover(
        self,
        username: str,
        from_date: str,
        to_date: str,
    ) -> list[GitHubCommitRef]:
        """Return matching commits in fetch order.

        Raises:
            UpstreamError: If the commit source cannot be queried at all
        """


class RepoEnumerationDiscovery(CommitDiscovery):
    """Walk recently pushed repositories and list the user's commits in each."""

    name = "repos"

    def __init__(
        self,
        github: GitHubReadOperations,
        concurrency: int = 20,
        page_cap: int = 10,
    ):
        super().__init__(github)
        self.concurrency = concurrency
        self.page_cap = page_cap

    async def list_active_repos(self, username: str, from_date: str) -> list[GitHubRepoRef]:
        """
        List repositories pushed to on or after `from_date`.

        Listings are sorted by most recent push, so with a token paging stops
        once a page reaches repositories pushed before `from_date`. Public
        listings (no token) are always paged to the end.

        Raises:
            UpstreamError: If the first page cannot be fetched
        """
        from_ts = _parse_timestamp(f"{from_date}T00:00:00Z")
        collected: list[GitHubRepoRef] = []

        for page in range(1, self.page_cap + 1):
            try:
                repos = await self.github.list_repositories(username, page=page)
            except UpstreamError as e:
                if page == 1:
                    raise
                logger.warning(f"Stopped repository listing at page {page}: {e.message}")
                break

            collected.extend(repos)
            if len(repos) < PAGE_SIZE:
                break

            if self.github.is_authenticated:
                pushed = [_parse_timestamp(r.pushed_at) for r in repos if r.pushed_at]
                if pushed and min(pushed) < from_ts:
                    break

        active = [r for r in collected if r.pushed_at and _parse_timestamp(r.pushed_at) >= from_ts]
        logger.debug(f"{len(active)}/{len(collected)} repositories pushed since {from_date}")
        return active

    async def list_repo_commits(
        self,
        repo: GitHubRepoRef,
        username: str,
        since: str,
        until: str,
    ) -> list[GitHubCommitRef]:
        """All commits by `username` in one repository, paging until a short page."""
        commits: list[GitHubCommitRef] = []
        page = 1
        while True:
            batch = await self.github.list_commits_by_author(
                repo.full_name, username, since, until, page=page
            )
            commits.extend(batch)
            if len(batch) < PAGE_SIZE:
                return commits
            page += 1

    async def discover(
        self,
        username: str,
        from_date: str,
        to_date: str,
    ) -> list[GitHubCommitRef]:
        since, until = window_bounds(from_date, to_date)
        repos = await self.list_active_repos(username, from_date)
        if not repos:
            return []

        async def fetch_repo(repo: GitHubRepoRef) -> list[GitHubCommitRef]:
            return await self.list_repo_commits(repo, username, since, until)

        per_repo = await settle_in_batches(repos, fetch_repo, self.concurrency, label="repository")
        return [commit for commits in per_repo for commit in commits]


class GlobalSearchDiscovery(CommitDiscovery):
    """Find the user's commits with one commit search query."""

    name = "search"

    async def discover(
        self,
        username: str,
        from_date: str,
        to_date: str,
    ) -> list[GitHubCommitRef]:
        date_range = f"{from_date}..{to_date}"
        commits: list[GitHubCommitRef] = []

        for page in range(1, SEARCH_RESULT_LIMIT // PAGE_SIZE + 1):
            batch = await self.github.search_commits_by_author(username, date_range, page=page)
            commits.extend(batch)
            if len(batch) < PAGE_SIZE:
                break

        if len(commits) >= SEARCH_RESULT_LIMIT:
            logger.warning(
                f"Commit search for {username} hit the {SEARCH_RESULT_LIMIT} result cap; "
                "totals may be incomplete"
            )
        return commits[:SEARCH_RESULT_LIMIT]


def build_discovery(
    strategy: DiscoveryStrategy,
    github: GitHubReadOperations,
    concurrency: int = 20,
    page_cap: int = 10,
) -> CommitDiscovery:
    """Create the discovery strategy named in configuration."""
    if strategy == "repos":
        return RepoEnumerationDiscovery(github, concurrency=concurrency, page_cap=page_cap)
    if strategy == "search":
        return GlobalSearchDiscovery(github)
    raise ValueError(f"Unknown discovery strategy: {strategy}")
