"""
Day-cache resolver: the entry point of the stats pipeline.

Splits a range into UTC days, serves finished days from the day cache, fetches
whatever is missing (plus today, which is never cached) in one spanning GitHub
fetch, stores the newly finished days and aggregates the lot.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable

from shipstats.services.stats.aggregator import aggregate_commits
from shipstats.services.stats.commit_fetcher import CommitFetcher
from shipstats.services.stats.date_ranges import each_day, parse_day, today_utc
from shipstats.services.stats.day_cache import DayCacheStore
from shipstats.services.stats.types import CommitRecord, RangeSummary

logger = logging.getLogger(__name__)


class DayCacheResolver:
    """
    Resolve a user's commit stats for a range of days.

    Past days are immutable once the UTC date has rolled over, so they are
    cached indefinitely. Today is always fetched live and never written.
    Without a store every call goes straight to the fetcher.
    """

    def __init__(
        self,
        fetcher: CommitFetcher,
        store: DayCacheStore | None = None,
        today: Callable[[], str] = today_utc,
    ):
        self.fetcher = fetcher
        self.store = store
        self.today = today

    async def resolve(self, username: str, from_date: str, to_date: str) -> RangeSummary:
        """
        Build the RangeSummary for `username` over [from_date, to_date].

        Raises:
            ValueError: If a date is malformed or from_date is after to_date
            UpstreamError: If GitHub cannot be queried at all
        """
        if parse_day(from_date) > parse_day(to_date):
            raise ValueError(f"'from' ({from_date}) must not be after 'to' ({to_date})")

        if self.store is None:
            commits = await self.fetcher.fetch_commits(username, from_date, to_date)
            return aggregate_commits(username, from_date, to_date, commits)

        store = self.store
        today = self.today()
        days = each_day(from_date, to_date)
        past_days = [d for d in days if d < today]
        includes_today = today in days

        cached_rows = await asyncio.gather(*[store.get(username, d) for d in past_days])

        cached_commits: list[CommitRecord] = []
        uncached_past_days: list[str] = []
        for day, row in zip(past_days, cached_rows, strict=True):
            if row is None:
                uncached_past_days.append(day)
            else:
                cached_commits.extend(row)

        uncached_dates = uncached_past_days + ([today] if includes_today else [])
        logger.info(
            f"Resolving {username} {from_date}..{to_date}: "
            f"{len(past_days) - len(uncached_past_days)} cached days, "
            f"{len(uncached_dates)} to fetch"
        )

        fresh_commits: list[CommitRecord] = []
        if uncached_dates:
            fresh_commits = await self.fetcher.fetch_commits(
                username, min(uncached_dates), max(uncached_dates)
            )

            by_day: dict[str, list[CommitRecord]] = defaultdict(list)
            for commit in fresh_commits:
                by_day[commit.day].append(commit)

            await asyncio.gather(
                *[store.put(username, day, by_day.get(day, [])) for day in uncached_past_days]
            )

        # The spanning fetch may cover cached days too; keep only the gaps
        wanted = set(uncached_dates)
        merged = cached_commits + [c for c in fresh_commits if c.day in wanted]

        return aggregate_commits(username, from_date, to_date, merged)
