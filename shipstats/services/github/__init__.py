"""
GitHub service package.

Usage: `from shipstats.services.github import GitHubReadOperations, DiffStatsCache`

Module structure:
- read_operations.py: Read-only API calls used by the stats pipeline
- cache.py: Bounded in-process diff stats cache
- helpers.py: Rate limit handling and error utilities
- http_client.py: Shared pooled AsyncClient
- types.py: Data types for API responses
- exceptions.py: Custom exceptions
- constants.py: API constants
"""

from shipstats.services.github.cache import DiffStatsCache
from shipstats.services.github.exceptions import UpstreamError
from shipstats.services.github.helpers import RateLimitInfo, handle_error_response
from shipstats.services.github.http_client import close_github_client
from shipstats.services.github.read_operations import GitHubReadOperations
from shipstats.services.github.types import DiffStats, GitHubCommitRef, GitHubRepoRef

__all__ = [
    # Operations
    "GitHubReadOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Cache
    "DiffStatsCache",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "UpstreamError",
    # Types
    "DiffStats",
    "GitHubCommitRef",
    "GitHubRepoRef",
]
