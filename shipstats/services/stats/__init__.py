"""
Commit stats pipeline.

Usage:
    resolver = DayCacheResolver(CommitFetcher(github, discovery, diff_cache), store)
    summary = await resolver.resolve("octocat", "2024-03-01", "2024-03-07")

Module structure:
- resolver.py: DayCacheResolver, the entry point
- commit_fetcher.py: Commit discovery + diff stats resolution
- discovery.py: Repository enumeration and global search strategies
- aggregator.py: Per-repository and overall totals
- day_cache.py: Per-day persistent store
- batching.py: Fixed-width all-settle batches
- date_ranges.py: UTC day helpers and named ranges
- types.py: CommitRecord, RepoSummary, RangeSummary
- languages.py: Language byte totals across a user's own repositories
"""

from shipstats.services.stats.aggregator import aggregate_commits
from shipstats.services.stats.commit_fetcher import CommitFetcher
from shipstats.services.stats.day_cache import DayCacheStore, SqlDayCacheStore
from shipstats.services.stats.discovery import (
    CommitDiscovery,
    GlobalSearchDiscovery,
    RepoEnumerationDiscovery,
    build_discovery,
)
from shipstats.services.stats.languages import LanguageFetcher, LanguageShare, LanguageSummary
from shipstats.services.stats.resolver import DayCacheResolver
from shipstats.services.stats.types import CommitRecord, RangeSummary, RepoSummary

__all__ = [
    "DayCacheResolver",
    "CommitFetcher",
    "CommitDiscovery",
    "RepoEnumerationDiscovery",
    "GlobalSearchDiscovery",
    "build_discovery",
    "aggregate_commits",
    "DayCacheStore",
    "SqlDayCacheStore",
    "CommitRecord",
    "RepoSummary",
    "RangeSummary",
    "LanguageFetcher",
    "LanguageSummary",
    "LanguageShare",
]
