"""Core commit-fetching logic for the stats pipeline.

Discovers a user's commits in a date window and resolves each one's diff
stats, producing CommitRecords in fetch order.
"""

import logging

from shipstats.services.github import DiffStatsCache, GitHubReadOperations
from shipstats.services.github.types import GitHubCommitRef
from shipstats.services.stats.batching import settle_in_batches
from shipstats.services.stats.discovery import CommitDiscovery
from shipstats.services.stats.types import CommitRecord

logger = logging.getLogger(__name__)

# Concurrency limit for GitHub lookups per batch
DEFAULT_CONCURRENCY = 20


class CommitFetcher:
    """
    Fetch a user's commits with diff stats.

    Diff stats go through a shared DiffStatsCache, so a commit seen by an
    earlier request in this process is never looked up again. Lookups run in
    fixed-width all-settle batches: a failed lookup drops that one commit and
    the rest of the result is still returned.
    """

    def __init__(
        self,
        github: GitHubReadOperations,
        discovery: CommitDiscovery,
        diff_cache: DiffStatsCache,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        self.github = github
        self.discovery = discovery
        self.diff_cache = diff_cache
        self.concurrency = concurrency

    async def _to_record(self, ref: GitHubCommitRef) -> CommitRecord:
        stats = await self.diff_cache.get_or_fetch(
            ref.repo_full_name, ref.sha, self.github.get_commit_diff_stats
        )
        return CommitRecord(
            sha=ref.sha,
            repo_full_name=ref.repo_full_name,
            repo_url=ref.repo_url,
            message=ref.message,
            committed_at=ref.committed_at,
            commit_url=ref.html_url,
            additions=stats.additions,
            deletions=stats.deletions,
        )

    async def fetch_commits(
        self,
        username: str,
        from_date: str,
        to_date: str,
    ) -> list[CommitRecord]:
        """Fetch commits by `username` between two days, inclusive.

        Raises:
            UpstreamError: If commits cannot be discovered at all
        """
        refs = await self.discovery.discover(username, from_date, to_date)
        if not refs:
            logger.info(f"No commits for {username} in {from_date}..{to_date}")
            return []

        records = await settle_in_batches(refs, self._to_record, self.concurrency, label="commit")
        logger.info(
            f"Fetched {len(records)}/{len(refs)} commits for {username} "
            f"in {from_date}..{to_date} via {self.discovery.name}"
        )
        logger.debug(f"Diff stats cache: {self.diff_cache.get_stats()}")
        return records
