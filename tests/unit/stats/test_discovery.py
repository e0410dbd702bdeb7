"""Unit tests for commit discovery strategies."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shipstats.services.github import GitHubReadOperations, UpstreamError
from shipstats.services.stats.discovery import (
    GlobalSearchDiscovery,
    RepoEnumerationDiscovery,
    build_discovery,
)

from tests.helpers.mock_factories import make_commit_ref, make_repo_ref


def _github(authenticated: bool = True) -> MagicMock:
    github = MagicMock(spec=GitHubReadOperations)
    github.is_authenticated = authenticated
    github.list_repositories = AsyncMock(return_value=[])
    github.list_commits_by_author = AsyncMock(return_value=[])
    github.search_commits_by_author = AsyncMock(return_value=[])
    return github


def _full_page(pushed_at: str, prefix: str = "r") -> list:
    return [make_repo_ref(f"alice/{prefix}{i}", pushed_at) for i in range(100)]


# ═══════════════════════════════════════════════════════════════════════════
# RepoEnumerationDiscovery.list_active_repos
# ═══════════════════════════════════════════════════════════════════════════


class TestListActiveRepos:
    @pytest.mark.asyncio
    async def test_filters_repos_pushed_before_from(self):
        github = _github()
        github.list_repositories.return_value = [
            make_repo_ref("alice/new", "2024-03-02T08:00:00Z"),
            make_repo_ref("alice/edge", "2024-03-01T00:00:00Z"),
            make_repo_ref("alice/old", "2024-02-27T08:00:00Z"),
            make_repo_ref("alice/empty", None),
        ]

        repos = await RepoEnumerationDiscovery(github).list_active_repos("alice", "2024-03-01")

        assert [r.full_name for r in repos] == ["alice/new", "alice/edge"]

    @pytest.mark.asyncio
    async def test_authenticated_stops_once_page_is_older_than_from(self):
        github = _github(authenticated=True)
        github.list_repositories.side_effect = [
            _full_page("2024-03-05T00:00:00Z", "a"),
            _full_page("2024-02-01T00:00:00Z", "b"),
            _full_page("2024-01-01T00:00:00Z", "c"),
        ]

        repos = await RepoEnumerationDiscovery(github).list_active_repos("alice", "2024-03-01")

        assert github.list_repositories.await_count == 2
        assert len(repos) == 100

    @pytest.mark.asyncio
    async def test_unauthenticated_pages_to_the_end(self):
        github = _github(authenticated=False)
        github.list_repositories.side_effect = [
            _full_page("2024-02-01T00:00:00Z", "a"),
            _full_page("2024-03-05T00:00:00Z", "b"),
            [make_repo_ref("alice/last", "2024-03-06T00:00:00Z")],
        ]

        repos = await RepoEnumerationDiscovery(github).list_active_repos("alice", "2024-03-01")

        assert github.list_repositories.await_count == 3
        assert len(repos) == 101

    @pytest.mark.asyncio
    async def test_respects_page_cap(self):
        github = _github(authenticated=False)
        github.list_repositories.side_effect = lambda username, page: _full_page(
            "2024-03-05T00:00:00Z", f"p{page}-"
        )

        await RepoEnumerationDiscovery(github, page_cap=3).list_active_repos("alice", "2024-03-01")

        assert github.list_repositories.await_count == 3

    @pytest.mark.asyncio
    async def test_first_page_error_propagates(self):
        github = _github()
        github.list_repositories.side_effect = UpstreamError("GitHub API error: 500", 500)

        with pytest.raises(UpstreamError):
            await RepoEnumerationDiscovery(github).list_active_repos("alice", "2024-03-01")

    @pytest.mark.asyncio
    async def test_later_page_error_keeps_what_was_listed(self):
        github = _github()
        github.list_repositories.side_effect = [
            _full_page("2024-03-05T00:00:00Z"),
            UpstreamError("GitHub API error: 502", 502),
        ]

        repos = await RepoEnumerationDiscovery(github).list_active_repos("alice", "2024-03-01")

        assert len(repos) == 100


# ═══════════════════════════════════════════════════════════════════════════
# RepoEnumerationDiscovery.discover
# ═══════════════════════════════════════════════════════════════════════════


class TestRepoEnumerationDiscover:
    @pytest.mark.asyncio
    async def test_lists_commits_in_each_active_repo(self):
        github = _github()
        github.list_repositories.return_value = [
            make_repo_ref("alice/blog", "2024-03-02T00:00:00Z"),
            make_repo_ref("acme/api", "2024-03-02T00:00:00Z"),
        ]
        blog_commit = make_commit_ref(repo_full_name="alice/blog")
        api_commit = make_commit_ref(repo_full_name="acme/api")

        async def list_commits(repo, author, since, until, page=1):
            return {"alice/blog": [blog_commit], "acme/api": [api_commit]}[repo]

        github.list_commits_by_author.side_effect = list_commits

        commits = await RepoEnumerationDiscovery(github).discover(
            "alice", "2024-03-01", "2024-03-03"
        )

        assert commits == [blog_commit, api_commit]
        call = github.list_commits_by_author.await_args_list[0]
        assert call.args[1:4] == ("alice", "2024-03-01T00:00:00Z", "2024-03-03T23:59:59Z")

    @pytest.mark.asyncio
    async def test_pages_commits_until_short_page(self):
        github = _github()
        github.list_repositories.return_value = [make_repo_ref("alice/blog")]
        github.list_commits_by_author.side_effect = [
            [make_commit_ref() for _ in range(100)],
            [make_commit_ref() for _ in range(7)],
        ]

        commits = await RepoEnumerationDiscovery(github).discover(
            "alice", "2024-03-01", "2024-03-01"
        )

        assert len(commits) == 107
        assert github.list_commits_by_author.await_count == 2

    @pytest.mark.asyncio
    async def test_failing_repo_is_skipped(self):
        github = _github()
        github.list_repositories.return_value = [
            make_repo_ref("alice/gone"),
            make_repo_ref("alice/blog"),
        ]
        kept = make_commit_ref(repo_full_name="alice/blog")

        async def list_commits(repo, author, since, until, page=1):
            if repo == "alice/gone":
                raise UpstreamError("Repository or resource not found: alice/gone", 404)
            return [kept]

        github.list_commits_by_author.side_effect = list_commits

        commits = await RepoEnumerationDiscovery(github).discover(
            "alice", "2024-03-01", "2024-03-01"
        )

        assert commits == [kept]

    @pytest.mark.asyncio
    async def test_no_active_repos(self):
        github = _github()

        commits = await RepoEnumerationDiscovery(github).discover(
            "alice", "2024-03-01", "2024-03-01"
        )

        assert commits == []
        github.list_commits_by_author.assert_not_called()


# ═══════════════════════════════════════════════════════════════════════════
# GlobalSearchDiscovery
# ═══════════════════════════════════════════════════════════════════════════


class TestGlobalSearchDiscovery:
    @pytest.mark.asyncio
    async def test_single_short_page(self):
        github = _github()
        found = [make_commit_ref(), make_commit_ref()]
        github.search_commits_by_author.return_value = found

        commits = await GlobalSearchDiscovery(github).discover("alice", "2024-03-01", "2024-03-07")

        assert commits == found
        github.search_commits_by_author.assert_awaited_once_with(
            "alice", "2024-03-01..2024-03-07", page=1
        )

    @pytest.mark.asyncio
    async def test_caps_at_1000_results(self):
        github = _github()
        github.search_commits_by_author.side_effect = lambda *a, **kw: [
            make_commit_ref() for _ in range(100)
        ]

        commits = await GlobalSearchDiscovery(github).discover("alice", "2024-01-01", "2024-03-01")

        assert len(commits) == 1000
        assert github.search_commits_by_author.await_count == 10

    @pytest.mark.asyncio
    async def test_search_error_propagates(self):
        github = _github()
        github.search_commits_by_author.side_effect = UpstreamError("GitHub API error: 503", 503)

        with pytest.raises(UpstreamError):
            await GlobalSearchDiscovery(github).discover("alice", "2024-03-01", "2024-03-01")


class TestBuildDiscovery:
    def test_repos_strategy(self):
        discovery = build_discovery("repos", _github(), concurrency=5, page_cap=2)

        assert isinstance(discovery, RepoEnumerationDiscovery)
        assert discovery.concurrency == 5
        assert discovery.page_cap == 2

    def test_search_strategy(self):
        assert isinstance(build_discovery("search", _github()), GlobalSearchDiscovery)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            build_discovery("graphql", _github())  # type: ignore[arg-type]
