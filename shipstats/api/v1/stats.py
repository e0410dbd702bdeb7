"""
Commit stats endpoint.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from shipstats.api.deps import get_stats_resolver
from shipstats.core.exceptions import UpstreamFailure, ValidationError
from shipstats.services.github import UpstreamError
from shipstats.services.stats import DayCacheResolver
from shipstats.services.stats.date_ranges import resolve_range

router = APIRouter(prefix="/stats", tags=["stats"])
logger = logging.getLogger(__name__)


@router.get("")
async def get_stats(
    username: str | None = Query(None, description="GitHub login"),
    from_date: str | None = Query(None, alias="from", description="First day, YYYY-MM-DD"),
    to_date: str | None = Query(None, alias="to", description="Last day, YYYY-MM-DD"),
    range_key: str | None = Query(
        None,
        alias="range",
        description="today, yesterday, last7, lastweek, thismonth, lastmonth",
    ),
    resolver: DayCacheResolver = Depends(get_stats_resolver),
) -> dict[str, Any]:
    """Get a user's commit activity over a range of UTC days.

    Defaults to today when no dates are given. Repositories in the response
    are ordered by additions + deletions, largest first.
    """
    username = (username or "").strip()
    if not username:
        raise ValidationError("username is required")

    try:
        resolved_from, resolved_to = resolve_range(
            range_key, from_date, to_date, today=resolver.today()
        )
        summary = await resolver.resolve(username, resolved_from, resolved_to)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    except UpstreamError as e:
        logger.error(f"Stats request for {username} failed: {e.message}")
        raise UpstreamFailure(e.message, rate_limited=e.is_rate_limited) from e

    return summary.to_dict()
