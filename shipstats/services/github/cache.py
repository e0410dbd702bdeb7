"""
In-memory cache for commit diff stats.

A commit's additions/deletions never change once the SHA exists, so entries
never go stale. The cache is still bounded (LRU) because a long-lived process
would otherwise grow it without limit.

One instance is created per process and handed to the commit fetcher; see
`shipstats.api.deps.get_diff_stats_cache`.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from cachetools import LRUCache  # type: ignore[import-untyped]

from shipstats.services.github.types import DiffStats

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str]  # (repo_full_name, sha)


class DiffStatsCache:
    """Bounded memo of diff stats keyed by (repo_full_name, sha)."""

    def __init__(self, maxsize: int = 50_000) -> None:
        self._cache: LRUCache[CacheKey, DiffStats] = LRUCache(maxsize=maxsize)
        # Lookups currently being fetched; concurrent callers for a key share one
        self._in_flight: dict[CacheKey, asyncio.Future[DiffStats]] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    @property
    def maxsize(self) -> int:
        return int(self._cache.maxsize)

    def get(self, repo_full_name: str, sha: str) -> DiffStats | None:
        return self._cache.get((repo_full_name, sha))

    def set(self, repo_full_name: str, sha: str, stats: DiffStats) -> None:
        self._cache[(repo_full_name, sha)] = stats

    async def get_or_fetch(
        self,
        repo_full_name: str,
        sha: str,
        fetch: Callable[[str, str], Awaitable[DiffStats]],
    ) -> DiffStats:
        """
        Return cached stats, or fetch and store them.

        Concurrent calls for the same key share a single fetch. Failed fetches
        are not cached; the exception propagates to every waiting caller.
        """
        key = (repo_full_name, sha)
        cached = self.get(repo_full_name, sha)
        if cached is not None:
            logger.debug(f"Cache HIT: {repo_full_name}@{sha[:7]}")
            return cached

        pending = self._in_flight.get(key)
        if pending is not None:
            logger.debug(f"Cache JOIN: {repo_full_name}@{sha[:7]}")
            return await asyncio.shield(pending)

        logger.debug(f"Cache MISS: {repo_full_name}@{sha[:7]}")
        pending = asyncio.get_running_loop().create_future()
        self._in_flight[key] = pending
        try:
            stats = await fetch(repo_full_name, sha)
        except asyncio.CancelledError:
            pending.cancel()
            raise
        except Exception as e:
            pending.set_exception(e)
            # Mark retrieved so a fetch nobody joined doesn't log a warning
            pending.exception()
            raise
        finally:
            del self._in_flight[key]

        self.set(repo_full_name, sha, stats)
        pending.set_result(stats)
        return stats

    def clear(self) -> None:
        """Drop every entry. Useful for testing."""
        self._cache.clear()
        logger.debug("Cleared diff stats cache")

    def get_stats(self) -> dict[str, int]:
        """Get current cache statistics for monitoring."""
        return {"size": len(self._cache), "maxsize": self.maxsize}
