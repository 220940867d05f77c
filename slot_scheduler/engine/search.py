"""First-fit search for the next available placement."""

import logging
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from ..models.schedule import Schedule
from ..utils.datetime_utils import at_minute, iter_days
from .windows import resolve_windows

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT_DAYS = 365


class Placement(NamedTuple):
    """A concrete start/end pair inside one window instance."""
    
    start: datetime
    end: datetime


def find_next_available(
    origin: datetime,
    schedule: Schedule,
    duration: int,
    cursor: Optional[datetime] = None,
    search_limit_days: int = DEFAULT_SEARCH_LIMIT_DAYS,
) -> Optional[Placement]:
    """Find the earliest window instance that fits `duration` minutes.
    
    Days are scanned from the later of `origin` and `cursor` up to
    `search_limit_days` past `origin`, inclusive. Window bounds come from the
    window itself, never from the origin's time-of-day. On the cursor's day a
    window already open at the cursor is used from the cursor onward. A
    placement never crosses its window's end, so it never crosses midnight.
    
    Returns None when nothing fits within the limit.
    """
    search_start = cursor if cursor is not None and cursor > origin else origin
    last_day = origin.date() + timedelta(days=search_limit_days)
    
    for day in iter_days(search_start.date(), last_day):
        cursor_today = cursor is not None and cursor.date() == day
        
        for window in resolve_windows(day, schedule, cursor):
            time_range = window.time_range
            
            window_start = at_minute(day, time_range.start_minutes)
            if cursor_today and window_start < cursor:
                start = cursor
            else:
                start = window_start
            
            end = start + timedelta(minutes=duration)
            
            # First fit wins; no search for a tighter window
            if end <= at_minute(day, time_range.end_minutes):
                return Placement(start, end)
    
    logger.debug(
        "No %d-minute window in schedule %s between %s and %s",
        duration, schedule.schedule_id, search_start.date(), last_day,
    )
    return None
