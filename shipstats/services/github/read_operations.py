"""
GitHub API read operations.

Provides the read-only calls the stats pipeline needs:
- Repository listing (authenticated user, or a user's public repos)
- Commit listing by author within a date window
- Commit search by author
- Per-commit diff stats
- Owned repository listing and per-repository language bytes
"""

import logging
from typing import Any

import httpx

from shipstats.services.github.constants import (
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    PAGE_SIZE,
    OWNER_AFFILIATION,
    REPO_AFFILIATION,
)
from shipstats.services.github.exceptions import UpstreamError
from shipstats.services.github.helpers import handle_error_response
from shipstats.services.github.http_client import get_github_client
from shipstats.services.github.types import DiffStats, GitHubCommitRef, GitHubRepoRef

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Works with or without a token. Without one, only public data is visible
    and repository listing falls back to the user's public repositories.

    Uses a shared HTTP client singleton for connection pooling.
    """

    BASE_URL = GITHUB_API_URL

    def __init__(self, token: str | None = None):
        self.token = token or None
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if self.token:
            self._headers["Authorization"] = f"Bearer {self.token}"

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    async def _get_json(
        self,
        path: str,
        resource: str,
        params: dict[str, str | int] | None = None,
    ) -> Any:
        """GET a GitHub API path and return the decoded body.

        Raises:
            UpstreamError: On any non-200 response or transport failure
        """
        client = get_github_client()
        try:
            response = await client.get(
                f"{self.BASE_URL}{path}",
                headers=self._headers,
                params=params,
            )
        except httpx.RequestError as e:
            raise UpstreamError(f"GitHub request failed for {resource}: {e}") from e

        handle_error_response(response, resource)
        return response.json()

    @staticmethod
    def _normalize_repo(data: dict[str, Any]) -> GitHubRepoRef:
        return GitHubRepoRef(
            full_name=data["full_name"],
            pushed_at=data.get("pushed_at"),
            fork=bool(data.get("fork", False)),
        )

    @staticmethod
    def _normalize_commit(data: dict[str, Any], repo_full_name: str) -> GitHubCommitRef:
        """Convert a commit listing/search item to GitHubCommitRef."""
        commit = data.get("commit", {})
        message = commit.get("message") or ""
        return GitHubCommitRef(
            sha=data["sha"],
            repo_full_name=repo_full_name,
            html_url=data["html_url"],
            message=message.split("\n")[0],
            committed_at=commit.get("committer", {}).get("date", ""),
        )

    async def list_repositories(
        self,
        username: str,
        page: int = 1,
        per_page: int = PAGE_SIZE,
    ) -> list[GitHubRepoRef]:
        """
        Fetch one page of repositories, most recently pushed first.

        With a token this lists everything the authenticated user can reach
        (owned, collaborator, organization member). Without a token it lists
        `username`'s public repositories.

        Args:
            username: GitHub login, used only for the unauthenticated listing
            page: Page number (1-indexed)
            per_page: Items per page (max 100)

        Returns:
            Repositories on the requested page
        """
        params: dict[str, str | int] = {
            "page": page,
            "per_page": min(per_page, PAGE_SIZE),
            "sort": "pushed",
            "direction": "desc",
        }

        if self.is_authenticated:
            path = "/user/repos"
            params["visibility"] = "all"
            params["affiliation"] = REPO_AFFILIATION
        else:
            path = f"/users/{username}/repos"
            params["type"] = "all"

        data = await self._get_json(path, f"repositories page {page}", params)
        return [self._normalize_repo(r) for r in data]

    async def list_owned_repositories(
        self,
        username: str,
        page: int = 1,
        per_page: int = PAGE_SIZE,
        include_private: bool = False,
    ) -> list[GitHubRepoRef]:
        """
        Fetch one page of repositories owned by a user, most recently pushed first.

        Args:
            username: GitHub login, used for the public listing
            page: Page number (1-indexed)
            per_page: Items per page (max 100)
            include_private: List the token owner's repositories, private
                ones included. Only meaningful when `username` owns the token.

        Returns:
            Repositories on the requested page, forks included
        """
        params: dict[str, str | int] = {
            "page": page,
            "per_page": min(per_page, PAGE_SIZE),
            "sort": "pushed",
        }

        if include_private and self.is_authenticated:
            path = "/user/repos"
            params["visibility"] = "all"
            params["affiliation"] = OWNER_AFFILIATION
        else:
            path = f"/users/{username}/repos"
            params["type"] = "owner"

        data = await self._get_json(path, f"repositories page {page}", params)
        return [self._normalize_repo(r) for r in data]

    async def get_authenticated_login(self) -> str | None:
        """Login of the token owner, or None without a token."""
        if not self.is_authenticated:
            return None
        data = await self._get_json("/user", "authenticated user")
        return data.get("login")

    async def get_repository_languages(self, repo_full_name: str) -> dict[str, int]:
        """
        Fetch bytes of code per language for a repository.

        Args:
            repo_full_name: Repository (format: "owner/repo")

        Returns:
            Mapping of language name to byte count (empty for repos with no code)
        """
        data = await self._get_json(
            f"/repos/{repo_full_name}/languages", f"{repo_full_name} languages"
        )
        if not isinstance(data, dict):
            return {}
        return {str(lang): int(size) for lang, size in data.items()}

    async def list_commits_by_author(
        self,
        repo_full_name: str,
        author: str,
        since: str,
        until: str,
        page: int = 1,
        per_page: int = PAGE_SIZE,
    ) -> list[GitHubCommitRef]:
        """
        Fetch one page of commits by `author` in a repository.

        Args:
            repo_full_name: Repository (format: "owner/repo")
            author: GitHub login or email of the commit author
            since: ISO 8601 timestamp, inclusive lower bound on committer date
            until: ISO 8601 timestamp, inclusive upper bound on committer date
            page: Page number (1-indexed)
            per_page: Items per page (max 100)

        Returns:
            Commits on the requested page, newest first
        """
        params: dict[str, str | int] = {
            "author": author,
            "since": since,
            "until": until,
            "page": page,
            "per_page": min(per_page, PAGE_SIZE),
        }
        data = await self._get_json(f"/repos/{repo_full_name}/commits", repo_full_name, params)
        if not isinstance(data, list):
            return []
        return [self._normalize_commit(c, repo_full_name) for c in data]

    async def search_commits_by_author(
        self,
        author: str,
        date_range: str,
        page: int = 1,
        per_page: int = PAGE_SIZE,
    ) -> list[GitHubCommitRef]:
        """
        Fetch one page of commit search results for `author`.

        Args:
            author: GitHub login
            date_range: Committer date qualifier, e.g. "2024-03-01..2024-03-07"
            page: Page number (1-indexed)
            per_page: Items per page (max 100)

        Returns:
            Matching commits across all repositories visible to the caller
        """
        params: dict[str, str | int] = {
            "q": f"author:{author} committer-date:{date_range}",
            "page": page,
            "per_page": min(per_page, PAGE_SIZE),
        }
        data = await self._get_json("/search/commits", f"commit search for {author}", params)
        return [
            self._normalize_commit(item, item["repository"]["full_name"])
            for item in data.get("items", [])
        ]

    async def get_commit_diff_stats(self, repo_full_name: str, sha: str) -> DiffStats:
        """
        Fetch additions/deletions for a single commit.

        Args:
            repo_full_name: Repository (format: "owner/repo")
            sha: Commit SHA

        Returns:
            DiffStats (zeros when GitHub omits the stats block)
        """
        data = await self._get_json(
            f"/repos/{repo_full_name}/commits/{sha}", f"{repo_full_name}@{sha[:7]}"
        )
        stats = data.get("stats") or {}
        return DiffStats(
            additions=stats.get("additions", 0),
            deletions=stats.get("deletions", 0),
        )
