from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub - empty token = unauthenticated, public data only (60 req/hour)
    github_token: str = ""
    github_timeout: float = 30.0

    # Database for the per-day stats cache
    # Empty string = day cache disabled (every request goes straight to GitHub)
    database_url: str = ""

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Stats pipeline
    # "repos" walks the user's repositories, "search" uses the commit search API
    stats_discovery: Literal["repos", "search"] = "repos"
    # Number of GitHub requests in flight per batch
    stats_concurrency: int = 20
    # Upper bound on repository listing pages (100 repos per page)
    repo_page_cap: int = 10
    # Max (repo, sha) entries kept in the in-process diff stats cache
    diff_stats_cache_size: int = 50_000

    @property
    def day_cache_enabled(self) -> bool:
        """Check if the per-day stats cache is configured (has a database URL)."""
        return bool(self.database_url)


settings = Settings()
