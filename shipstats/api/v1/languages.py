"""
Language breakdown endpoint.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Response

from shipstats.api.deps import get_language_fetcher
from shipstats.core.exceptions import UpstreamFailure, ValidationError
from shipstats.services.github import UpstreamError
from shipstats.services.stats import LanguageFetcher
from shipstats.services.stats.languages import DEFAULT_TOP, MAX_TOP

router = APIRouter(prefix="/languages", tags=["languages"])
logger = logging.getLogger(__name__)

# Shared caches may serve a response for an hour, or stale for a day
CACHE_CONTROL = "public, max-age=3600, s-maxage=3600, stale-while-revalidate=86400"


@router.get("")
async def get_languages(
    response: Response,
    username: str | None = Query(None, description="GitHub login"),
    top: str | None = Query(None, description=f"Languages to report, 1-{MAX_TOP}"),
    fetcher: LanguageFetcher = Depends(get_language_fetcher),
) -> dict[str, Any]:
    """Get the most used languages across a user's own, non-fork repositories.

    `top` defaults to 8; out-of-range values are clamped and non-numeric
    values fall back to the default.
    """
    username = (username or "").strip()
    if not username:
        raise ValidationError("username is required")

    try:
        count = int(top) if top is not None else DEFAULT_TOP
    except ValueError:
        count = DEFAULT_TOP
    count = min(max(count, 1), MAX_TOP)

    try:
        summary = await fetcher.summarize(username, top=count)
    except UpstreamError as e:
        logger.error(f"Language request for {username} failed: {e.message}")
        raise UpstreamFailure(e.message, rate_limited=e.is_rate_limited) from e

    response.headers["Cache-Control"] = CACHE_CONTROL
    return summary.to_dict()
