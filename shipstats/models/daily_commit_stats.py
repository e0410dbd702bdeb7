"""Per-day commit stats cache model."""

import uuid as uuid_pkg
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Column, DateTime, Index, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel


class DailyCommitStats(SQLModel, table=True):
    """
    Commits a GitHub user made on one UTC calendar day, with diff stats.

    Only finished days are stored. Today's activity is still accumulating
    and is always fetched live, so a row for a date never needs invalidating.

    One row per (username, date); writes replace the whole commit list.
    """

    __tablename__ = "daily_commit_stats"
    __table_args__ = (
        Index(
            "ix_daily_commit_stats_username_date",
            "username",
            "date",
            unique=True,
        ),
    )

    id: uuid_pkg.UUID = Field(
        default_factory=uuid_pkg.uuid4,
        primary_key=True,
        nullable=False,
        sa_column_kwargs={"server_default": text("gen_random_uuid()")},
    )

    username: str = Field(
        max_length=100,
        nullable=False,
        description="GitHub login the commits are attributed to",
    )
    date: str = Field(
        max_length=10,
        nullable=False,
        description="UTC calendar day (YYYY-MM-DD)",
    )

    commits: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(
            JSONB,
            nullable=False,
            server_default=text("'[]'::jsonb"),
            comment="Array of commit records: [{sha, repo_full_name, additions, ...}]",
        ),
    )

    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
