"""
Language breakdown across a user's own repositories.

Bytes per language are summed over the user's most recently pushed
non-fork repositories, then the largest languages are reported with their
share of the reported total.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any

from shipstats.services.github import GitHubReadOperations, UpstreamError
from shipstats.services.github.constants import PAGE_SIZE
from shipstats.services.github.types import GitHubRepoRef
from shipstats.services.stats.batching import settle_in_batches

logger = logging.getLogger(__name__)

DEFAULT_TOP = 8
MAX_TOP = 12


@dataclass(frozen=True)
class LanguageShare:
    name: str
    bytes: int
    percentage: float  # Share of LanguageSummary.total_bytes, 0-100, one decimal


@dataclass(frozen=True)
class LanguageSummary:
    """Top languages for a user, largest first."""

    username: str
    total_bytes: int  # Sum over the reported languages only
    languages: tuple[LanguageShare, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "total_bytes": self.total_bytes,
            "languages": [asdict(lang) for lang in self.languages],
        }


class LanguageFetcher:
    """Sums language bytes over a user's own repositories."""

    def __init__(
        self,
        github: GitHubReadOperations,
        concurrency: int = 20,
        page_cap: int = 5,
        repo_limit: int = 50,
    ):
        self.github = github
        self.concurrency = concurrency
        self.page_cap = page_cap
        self.repo_limit = repo_limit

    async def is_token_owner(self, username: str) -> bool:
        """True when the configured token belongs to `username`."""
        try:
            login = await self.github.get_authenticated_login()
        except UpstreamError as e:
            logger.warning(f"Could not resolve token owner: {e.message}")
            return False
        return login is not None and login.lower() == username.lower()

    async def list_own_repos(self, username: str) -> list[GitHubRepoRef]:
        """
        Most recently pushed repositories owned by `username`, forks excluded.

        Private repositories are included only when the token belongs to
        `username`.

        Raises:
            UpstreamError: If any listing page fails
        """
        include_private = await self.is_token_owner(username)
        collected: list[GitHubRepoRef] = []

        for page in range(1, self.page_cap + 1):
            repos = await self.github.list_owned_repositories(
                username, page=page, include_private=include_private
            )
            collected.extend(repos)
            if len(repos) < PAGE_SIZE:
                break

        own = [r for r in collected if not r.fork]
        logger.debug(f"{len(own)}/{len(collected)} repositories for {username} are not forks")
        return own[: self.repo_limit]

    async def fetch_language_bytes(self, username: str) -> dict[str, int]:
        """Bytes per language summed over the user's own repositories.

        Repositories whose languages cannot be fetched are skipped.
        """
        repos = await self.list_own_repos(username)

        async def fetch_repo(repo: GitHubRepoRef) -> dict[str, int]:
            return await self.github.get_repository_languages(repo.full_name)

        per_repo = await settle_in_batches(repos, fetch_repo, self.concurrency, label="repository")

        totals: dict[str, int] = {}
        for languages in per_repo:
            for name, size in languages.items():
                totals[name] = totals.get(name, 0) + size
        return totals

    async def summarize(self, username: str, top: int = DEFAULT_TOP) -> LanguageSummary:
        """Top `top` languages by bytes, with percentages of their combined total."""
        totals = await self.fetch_language_bytes(username)
        ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:top]
        top_total = sum(size for _, size in ranked)

        shares = tuple(
            LanguageShare(
                name=name,
                bytes=size,
                percentage=round(size / top_total * 100, 1) if top_total else 0.0,
            )
            for name, size in ranked
        )
        return LanguageSummary(username=username, total_bytes=top_total, languages=shares)
