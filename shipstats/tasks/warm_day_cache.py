"""
Pre-populate the day cache for a user.

Resolves the given range once so every finished day in it is stored.
Later API requests for those days are then served without GitHub calls.

Usage:
    python -m shipstats.tasks.warm_day_cache octocat 2024-01-01 2024-03-31
"""

import argparse
import asyncio
import logging

from shipstats.api.deps import build_stats_resolver
from shipstats.config import settings
from shipstats.core.database import close_db
from shipstats.services.github import close_github_client

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


async def warm_day_cache(username: str, from_date: str, to_date: str) -> None:
    """Resolve a range so its finished days land in the day cache."""
    if not settings.day_cache_enabled:
        logger.error("DATABASE_URL is not configured, nothing to warm")
        return

    logger.info(f"Warming day cache for {username}: {from_date}..{to_date}")
    resolver = build_stats_resolver()
    try:
        summary = await resolver.resolve(username, from_date, to_date)
    finally:
        await close_github_client()
        await close_db()

    logger.info("=" * 60)
    logger.info("Warm-up complete!")
    logger.info(f"  Commits: {summary.total_commits}")
    logger.info(f"  Repositories: {len(summary.repos)}")
    logger.info(f"  +{summary.total_additions} / -{summary.total_deletions}")
    logger.info("=" * 60)


def main() -> None:
    """Run the warm-up."""
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[1])
    parser.add_argument("username")
    parser.add_argument("from_date", metavar="from")
    parser.add_argument("to_date", metavar="to")
    args = parser.parse_args()
    asyncio.run(warm_day_cache(args.username, args.from_date, args.to_date))


if __name__ == "__main__":
    main()
