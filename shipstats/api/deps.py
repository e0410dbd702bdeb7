"""API dependencies for the stats and language pipelines."""

import logging

from shipstats.config import settings
from shipstats.core import database
from shipstats.services.github import DiffStatsCache, GitHubReadOperations
from shipstats.services.stats import (
    CommitFetcher,
    DayCacheResolver,
    LanguageFetcher,
    SqlDayCacheStore,
    build_discovery,
)

logger = logging.getLogger(__name__)

# Process-wide diff stats cache, created on first use
_diff_stats_cache: DiffStatsCache | None = None


def get_diff_stats_cache() -> DiffStatsCache:
    """Get or create the process-wide diff stats cache."""
    global _diff_stats_cache
    if _diff_stats_cache is None:
        _diff_stats_cache = DiffStatsCache(maxsize=settings.diff_stats_cache_size)
        logger.debug(f"Created diff stats cache (maxsize={settings.diff_stats_cache_size})")
    return _diff_stats_cache


def build_stats_resolver() -> DayCacheResolver:
    """Wire a DayCacheResolver from settings.

    The day cache is attached only when a database is configured.
    """
    github = GitHubReadOperations(settings.github_token)
    discovery = build_discovery(
        settings.stats_discovery,
        github,
        concurrency=settings.stats_concurrency,
        page_cap=settings.repo_page_cap,
    )
    fetcher = CommitFetcher(
        github,
        discovery,
        get_diff_stats_cache(),
        concurrency=settings.stats_concurrency,
    )

    store = None
    if database.async_session_maker is not None:
        store = SqlDayCacheStore(database.async_session_maker)

    return DayCacheResolver(fetcher, store)


def get_stats_resolver() -> DayCacheResolver:
    """FastAPI dependency returning a resolver for the current request."""
    return build_stats_resolver()


def build_language_fetcher() -> LanguageFetcher:
    return LanguageFetcher(
        GitHubReadOperations(settings.github_token),
        concurrency=settings.stats_concurrency,
    )


def get_language_fetcher() -> LanguageFetcher:
    """FastAPI dependency returning a language fetcher for the current request."""
    return build_language_fetcher()
