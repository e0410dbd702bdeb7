"""Exceptions for GitHub service."""


class UpstreamError(Exception):
    """GitHub returned a non-success response or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)

    @property
    def is_rate_limited(self) -> bool:
        return self.rate_limit_reset is not None or self.status_code == 429
