"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for GitHub API calls.
"""

import logging

import httpx

from shipstats.services.github.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Raise for any non-200 response from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: What was being fetched, for error context (e.g. "owner/repo")

    Raises:
        UpstreamError: For authentication, authorization, rate limit or other API errors
    """
    if response.status_code == 200:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise UpstreamError("Invalid or expired GitHub token", 401)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            logger.warning(f"GitHub rate limit exhausted while fetching {resource}")
            raise UpstreamError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise UpstreamError("GitHub API forbidden", 403)
    elif response.status_code == 429:
        logger.warning(f"GitHub secondary rate limit hit while fetching {resource}")
        raise UpstreamError(
            "GitHub API rate limit exceeded",
            429,
            rate_limit_reset=rate_info.reset_timestamp,
        )
    elif response.status_code == 404:
        raise UpstreamError(f"Repository or resource not found: {resource}", 404)
    elif response.status_code == 422:
        raise UpstreamError(f"GitHub rejected the request for {resource}", 422)
    else:
        raise UpstreamError(f"GitHub API error: {response.status_code}", response.status_code)
