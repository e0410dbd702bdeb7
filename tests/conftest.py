"""Root conftest: test infrastructure for all tests.

Provides:
- A fresh diff stats cache per test
- A fake day cache store
- Resolver/fetcher fixtures with GitHub fully mocked
- API client with the stats resolver and language fetcher overridden
- Autouse guard that blocks real GitHub HTTP calls
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from shipstats.services.github import DiffStatsCache, GitHubReadOperations
from shipstats.services.github.types import DiffStats
from shipstats.services.stats import CommitFetcher, DayCacheResolver, LanguageFetcher

from tests.helpers.mock_factories import FakeDayCacheStore

TODAY = "2024-03-10"


# ─────────────────────────────────────────────────────────────────────────────
# Safety Guard
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def block_github_network():
    """SAFETY: never let a unit test reach api.github.com.

    Tests that exercise GitHubReadOperations patch get_github_client themselves;
    anything that slips through gets a client whose requests fail loudly.
    """
    client = MagicMock()
    client.get = AsyncMock(side_effect=AssertionError("Unmocked GitHub request"))
    with patch("shipstats.services.github.read_operations.get_github_client", return_value=client):
        yield client


# ─────────────────────────────────────────────────────────────────────────────
# Pipeline Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def diff_cache() -> DiffStatsCache:
    return DiffStatsCache(maxsize=100)


@pytest.fixture
def day_store() -> FakeDayCacheStore:
    return FakeDayCacheStore()


@pytest.fixture
def github() -> MagicMock:
    """GitHubReadOperations with every call mocked."""
    gh = MagicMock(spec=GitHubReadOperations)
    gh.is_authenticated = True
    gh.get_commit_diff_stats = AsyncMock(return_value=DiffStats(additions=1, deletions=0))
    return gh


@pytest.fixture
def fetcher() -> MagicMock:
    """CommitFetcher stand-in for resolver tests."""
    f = MagicMock(spec=CommitFetcher)
    f.fetch_commits = AsyncMock(return_value=[])
    return f


@pytest.fixture
def resolver(fetcher: MagicMock, day_store: FakeDayCacheStore) -> DayCacheResolver:
    return DayCacheResolver(fetcher, day_store, today=lambda: TODAY)


@pytest.fixture
def language_fetcher(github: MagicMock) -> LanguageFetcher:
    """LanguageFetcher over the mocked GitHub client."""
    github.get_authenticated_login = AsyncMock(return_value=None)
    github.list_owned_repositories = AsyncMock(return_value=[])
    github.get_repository_languages = AsyncMock(return_value={})
    return LanguageFetcher(github, concurrency=2)


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(resolver: DayCacheResolver, language_fetcher: LanguageFetcher):
    """HTTP client whose pipelines use the mocked GitHub client and fake store."""
    from shipstats.api.deps import get_language_fetcher, get_stats_resolver
    from shipstats.main import app

    app.dependency_overrides[get_stats_resolver] = lambda: resolver
    app.dependency_overrides[get_language_fetcher] = lambda: language_fetcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
