"""Scheduling engine: window resolution, next-fit search and allocation."""

from .scheduler import Scheduler, schedule
from .search import DEFAULT_SEARCH_LIMIT_DAYS, Placement, find_next_available
from .windows import resolve_windows

__all__ = [
    'Scheduler',
    'schedule',
    'DEFAULT_SEARCH_LIMIT_DAYS',
    'Placement',
    'find_next_available',
    'resolve_windows',
]
