"""UTC datetime utilities."""

from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def start_of_day(value: date) -> datetime:
    """Midnight UTC of the given calendar date."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (end - start).days
