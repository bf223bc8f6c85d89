"""Date labels shown in the widget."""

from datetime import datetime, timedelta

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

ONE_DAY = timedelta(hours=24)
ONE_WEEK = timedelta(days=7)


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp such as ``2024-03-01T12:00:00Z``."""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        raise ValueError(f"Timestamp has no timezone: {value!r}")
    return dt


def short_date(dt: datetime) -> str:
    return f"{MONTH_NAMES[dt.month - 1]} {dt.day}, {dt.year}"


def relative_time(updated_at: datetime, now: datetime) -> str:
    """Bucket ``updated_at`` into "yesterday", "last week" or an absolute date.

    Anything under 24 hours old is "yesterday", including minutes-old and
    future timestamps. There is no calendar-day logic.
    """
    delta = now - updated_at
    if delta < ONE_DAY:
        return "yesterday"
    if delta < ONE_WEEK:
        return "last week"
    return "on " + short_date(updated_at.astimezone(now.tzinfo))


def format_last_checked(now: datetime) -> str:
    """Format ``now`` as ``Mon d, yyyy, h:m`` with no zero padding."""
    return f"{short_date(now)}, {now.hour}:{now.minute}"
