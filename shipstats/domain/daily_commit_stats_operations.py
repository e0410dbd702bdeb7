"""Domain operations for the per-day commit stats cache."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from shipstats.models.daily_commit_stats import DailyCommitStats


class DailyCommitStatsOperations:
    """
    Operations for cached per-day commit stats.

    Rows are keyed by (username, date) and written with an upsert, so a
    repeated write for the same day replaces the previous commit list.
    """

    def __init__(self) -> None:
        self.model = DailyCommitStats

    async def get_by_date(
        self,
        db: AsyncSession,
        username: str,
        date: str,
    ) -> DailyCommitStats | None:
        """
        Get the cached entry for a user and day.

        Args:
            db: Database session
            username: GitHub login
            date: UTC calendar day (YYYY-MM-DD)

        Returns:
            DailyCommitStats if the day is cached, None otherwise
        """
        statement = select(DailyCommitStats).where(
            and_(
                DailyCommitStats.username == username,  # type: ignore[arg-type]
                DailyCommitStats.date == date,  # type: ignore[arg-type]
            )
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def set_day(
        self,
        db: AsyncSession,
        username: str,
        date: str,
        commits: list[dict[str, Any]],
    ) -> None:
        """
        Create or replace the cached entry for a user and day.

        Uses PostgreSQL's INSERT ... ON CONFLICT DO UPDATE for atomicity.
        An empty list is a valid entry (the user made no commits that day).
        """
        now = datetime.now(UTC)

        stmt = (
            insert(self.model)
            .values(
                username=username,
                date=date,
                commits=commits,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_update(
                index_elements=["username", "date"],
                set_={
                    "commits": commits,
                    "updated_at": now,
                },
            )
        )

        await db.execute(stmt)
        await db.flush()


daily_commit_stats_ops = DailyCommitStatsOperations()
