"""Date and time utilities."""

from datetime import date, datetime, timedelta
from typing import Iterator

from ..exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60


def day_of_week(day: date) -> int:
    """Get day of week with 0 = Sunday, 6 = Saturday."""
    return (day.weekday() + 1) % 7


def minute_of_day(moment: datetime) -> int:
    """Get minutes past local midnight for a datetime."""
    return moment.hour * 60 + moment.minute


def at_minute(day: date, minutes: int) -> datetime:
    """Build the wall-clock instant `minutes` past midnight of `day`."""
    return datetime.combine(day, datetime.min.time()) + timedelta(minutes=minutes)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield calendar days from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def parse_datetime(value) -> datetime:
    """Parse an ISO-8601 string (or pass through a datetime/date)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(f"Invalid ISO-8601 datetime: {value!r}") from exc
