"""Persistent per-day store for resolved commit records."""

import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from shipstats.domain import daily_commit_stats_ops
from shipstats.services.stats.types import CommitRecord

logger = logging.getLogger(__name__)


class DayCacheStore(Protocol):
    """Stores the commits a user made on a single UTC day."""

    async def get(self, username: str, date: str) -> list[CommitRecord] | None:
        """Cached commits for the day, or None if the day was never stored."""
        ...

    async def put(self, username: str, date: str, commits: list[CommitRecord]) -> None:
        """Store the day's commits, replacing any existing entry."""
        ...


class SqlDayCacheStore:
    """
    DayCacheStore backed by the daily_commit_stats table.

    Every call opens its own session: the resolver reads and writes days
    concurrently, and an AsyncSession cannot be shared between tasks.
    """

    def __init__(self, session_maker: sessionmaker) -> None:  # type: ignore[type-arg]
        self.session_maker = session_maker

    async def get(self, username: str, date: str) -> list[CommitRecord] | None:
        db: AsyncSession
        async with self.session_maker() as db:
            row = await daily_commit_stats_ops.get_by_date(db, username, date)
        if row is None:
            return None
        return [CommitRecord.from_dict(c) for c in row.commits]

    async def put(self, username: str, date: str, commits: list[CommitRecord]) -> None:
        db: AsyncSession
        async with self.session_maker() as db:
            try:
                await daily_commit_stats_ops.set_day(
                    db, username, date, [c.to_dict() for c in commits]
                )
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.debug(f"Cached {len(commits)} commits for {username} on {date}")
