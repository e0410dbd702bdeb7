"""Add daily_commit_stats table for per-day commit stats caching

Revision ID: a3f1c2d4e5b6
Revises:
Create Date: 2026-10-18 10:00:00.000000

One row per (username, UTC day) holding that day's commits with diff stats.
Only finished days are written, so rows never need invalidating.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a3f1c2d4e5b6"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "daily_commit_stats",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column(
            "commits",
            postgresql.JSONB(),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
            comment="Array of commit records: [{sha, repo_full_name, additions, ...}]",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Unique composite index for lookups and upserts
    op.create_index(
        "ix_daily_commit_stats_username_date",
        "daily_commit_stats",
        ["username", "date"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_daily_commit_stats_username_date", table_name="daily_commit_stats")
    op.drop_table("daily_commit_stats")
