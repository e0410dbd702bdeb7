"""Unit tests for GitHub HTTP client and helpers.

Tests the shared HTTP client singleton, rate limit parsing,
and error response processing.
"""

from __future__ import annotations

import httpx
import pytest

from shipstats.services.github.exceptions import UpstreamError
from shipstats.services.github.helpers import RateLimitInfo, handle_error_response
from shipstats.services.github.http_client import close_github_client, get_github_client

from tests.helpers.mock_factories import make_response

# ═══════════════════════════════════════════════════════════════════════════
# RateLimitInfo
# ═══════════════════════════════════════════════════════════════════════════


class TestRateLimitInfo:
    """Tests for rate limit header parsing."""

    def test_extracts_remaining_and_reset(self):
        resp = make_response(
            headers={
                "X-RateLimit-Remaining": "42",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        info = RateLimitInfo(resp)

        assert info.remaining == "42"
        assert info.reset_timestamp == 1700000000
        assert info.is_exhausted is False

    def test_detects_exhausted(self):
        resp = make_response(
            headers={
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        info = RateLimitInfo(resp)

        assert info.is_exhausted is True

    def test_missing_headers(self):
        info = RateLimitInfo(make_response(headers={}))

        assert info.remaining is None
        assert info.reset_timestamp is None
        assert info.is_exhausted is False


# ═══════════════════════════════════════════════════════════════════════════
# handle_error_response
# ═══════════════════════════════════════════════════════════════════════════


class TestHandleErrorResponse:
    """Tests for mapping GitHub status codes to UpstreamError."""

    def test_200_does_not_raise(self):
        handle_error_response(make_response(status_code=200, json_data=[]), "alice/blog")

    def test_401_raises_invalid_token(self):
        with pytest.raises(UpstreamError, match="Invalid or expired") as exc_info:
            handle_error_response(make_response(status_code=401), "alice/blog")
        assert exc_info.value.status_code == 401

    def test_403_rate_limited_carries_reset(self):
        resp = make_response(
            status_code=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )
        with pytest.raises(UpstreamError, match="rate limit") as exc_info:
            handle_error_response(resp, "alice/blog")

        assert exc_info.value.rate_limit_reset == 1700000000
        assert exc_info.value.is_rate_limited is True

    def test_403_not_rate_limited_is_forbidden(self):
        resp = make_response(status_code=403, headers={"X-RateLimit-Remaining": "10"})
        with pytest.raises(UpstreamError, match="forbidden") as exc_info:
            handle_error_response(resp, "alice/blog")
        assert exc_info.value.is_rate_limited is False

    def test_429_is_rate_limited_without_reset_header(self):
        with pytest.raises(UpstreamError, match="rate limit") as exc_info:
            handle_error_response(make_response(status_code=429), "alice/blog")
        assert exc_info.value.status_code == 429
        assert exc_info.value.is_rate_limited is True

    def test_404_names_resource(self):
        with pytest.raises(UpstreamError, match="alice/blog"):
            handle_error_response(make_response(status_code=404), "alice/blog")

    def test_422_rejected(self):
        with pytest.raises(UpstreamError, match="rejected") as exc_info:
            handle_error_response(make_response(status_code=422), "commit search for ghost")
        assert exc_info.value.status_code == 422

    def test_500_raises_generic_error(self):
        with pytest.raises(UpstreamError, match="500"):
            handle_error_response(make_response(status_code=500), "alice/blog")


# ═══════════════════════════════════════════════════════════════════════════
# HTTP Client Singleton
# ═══════════════════════════════════════════════════════════════════════════


class TestGitHubHttpClient:
    """Tests for the shared HTTP client singleton."""

    def test_client_returns_async_client(self):
        import shipstats.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            client = get_github_client()
            assert isinstance(client, httpx.AsyncClient)
            assert client.timeout.connect == 5.0
        finally:
            mod._client = original

    def test_returns_same_instance(self):
        import shipstats.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            a = get_github_client()
            b = get_github_client()
            assert a is b
        finally:
            mod._client = original

    @pytest.mark.asyncio
    async def test_close_resets_singleton(self):
        import shipstats.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            client = get_github_client()
            await close_github_client()

            assert client.is_closed
            assert mod._client is None
        finally:
            mod._client = original

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        import shipstats.services.github.http_client as mod

        original = mod._client
        mod._client = None

        try:
            await close_github_client()
            assert mod._client is None
        finally:
            mod._client = original
