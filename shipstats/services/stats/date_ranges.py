"""UTC calendar-day helpers for stats ranges."""

import re
from datetime import UTC, date, datetime, timedelta

_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Named ranges accepted by the API in place of explicit from/to
RANGE_KEYS = ("today", "yesterday", "last7", "lastweek", "thismonth", "lastmonth")


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError for anything else."""
    if not _DAY_PATTERN.match(value or ""):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    return date.fromisoformat(value)


def today_utc() -> str:
    """Current UTC calendar day (YYYY-MM-DD)."""
    return datetime.now(UTC).date().isoformat()


def utc_day(timestamp: str) -> str:
    """UTC calendar day of an ISO 8601 timestamp.

    GitHub timestamps are already UTC ("2024-03-01T10:00:00Z"); offsets are
    converted, and naive timestamps are taken as UTC.
    """
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp[:10]
    if parsed.tzinfo is None:
        return parsed.date().isoformat()
    return parsed.astimezone(UTC).date().isoformat()


def each_day(from_date: str, to_date: str) -> list[str]:
    """Every calendar day from `from_date` to `to_date`, inclusive.

    Returns an empty list when `from_date` is after `to_date`.
    """
    start = parse_day(from_date)
    end = parse_day(to_date)
    # Offsets from `start` never step past `end`, so date.max is safe
    return [(start + timedelta(days=i)).isoformat() for i in range((end - start).days + 1)]


def window_bounds(from_date: str, to_date: str) -> tuple[str, str]:
    """GitHub `since`/`until` timestamps covering whole UTC days."""
    return f"{from_date}T00:00:00Z", f"{to_date}T23:59:59Z"


def resolve_range(
    range_key: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    today: str | None = None,
) -> tuple[str, str]:
    """
    Turn request parameters into an inclusive (from, to) pair.

    Without a range key, `from` defaults to today and `to` defaults to `from`.
    A range key takes precedence over explicit dates:
    - today / yesterday: that single day
    - last7: the last seven days, today included
    - lastweek: previous Monday through Sunday
    - thismonth: first of the month through today
    - lastmonth: the whole previous month

    Raises:
        ValueError: For an unknown range key
    """
    today_str = today or today_utc()

    if not range_key:
        resolved_from = from_date or today_str
        return resolved_from, to_date or resolved_from

    current = parse_day(today_str)

    if range_key == "today":
        return today_str, today_str
    if range_key == "yesterday":
        day = (current - timedelta(days=1)).isoformat()
        return day, day
    if range_key == "last7":
        return (current - timedelta(days=6)).isoformat(), today_str
    if range_key == "lastweek":
        start = current - timedelta(days=current.weekday() + 7)
        return start.isoformat(), (start + timedelta(days=6)).isoformat()
    if range_key == "thismonth":
        return current.replace(day=1).isoformat(), today_str
    if range_key == "lastmonth":
        last_of_previous = current.replace(day=1) - timedelta(days=1)
        return last_of_previous.replace(day=1).isoformat(), last_of_previous.isoformat()

    raise ValueError(f"Unknown range '{range_key}', expected one of: {', '.join(RANGE_KEYS)}")
