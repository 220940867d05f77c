"""Place fixed-duration tasks into recurring weekly availability windows."""

from .engine import Scheduler, find_next_available, resolve_windows, schedule
from .exceptions import ValidationError
from .models import (
    DecisionTrace,
    Schedule,
    ScheduleOptions,
    SchedulingDecision,
    Task,
    TaskStatus,
    TimeRange,
    Window,
)

__version__ = '0.1.0'

__all__ = [
    'Scheduler',
    'schedule',
    'find_next_available',
    'resolve_windows',
    'ValidationError',
    'DecisionTrace',
    'Schedule',
    'ScheduleOptions',
    'SchedulingDecision',
    'Task',
    'TaskStatus',
    'TimeRange',
    'Window',
]
