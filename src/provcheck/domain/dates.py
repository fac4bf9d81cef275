"""Date parsing for entitlement ranges.

Entitlement dates are ISO-8601 strings, either plain dates
(``2025-01-31``) or full timestamps. Naive values are read as UTC so
every comparison happens between aware datetimes.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

ONE_DAY = timedelta(days=1)


def parse_date(value: str | None) -> datetime | None:
    """Parse an ISO date/datetime string, or return None if unreadable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_date(value: datetime) -> str:
    """Render a parsed date back as ``YYYY-MM-DD``."""
    return value.strftime("%Y-%m-%d")


def whole_days(delta: timedelta) -> int:
    """Floor of *delta* expressed in days."""
    return delta // ONE_DAY
