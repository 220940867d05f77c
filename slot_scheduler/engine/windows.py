"""Per-day window resolution."""

from datetime import date, datetime
from typing import List, Optional

from ..models.schedule import Schedule, Window
from ..utils.datetime_utils import day_of_week, minute_of_day


def resolve_windows(
    day: date,
    schedule: Schedule,
    cursor: Optional[datetime] = None,
) -> List[Window]:
    """Get the schedule's windows active on `day`, earliest first.
    
    When `cursor` falls on `day`, windows that closed at or before the
    cursor's minute-of-day are dropped. A window the cursor sits inside is
    kept with its stored bounds; callers start from the cursor instead.
    Overlapping or duplicate windows are returned as separate entries.
    """
    weekday = day_of_week(day)
    
    last_end_minutes = 0
    if cursor is not None and cursor.date() == day:
        last_end_minutes = minute_of_day(cursor)
    
    active = [
        window for window in schedule.windows
        if window.day_of_week == weekday
        and window.time_range.end_minutes > last_end_minutes
    ]
    
    return sorted(active, key=lambda w: w.time_range.start_minutes)
