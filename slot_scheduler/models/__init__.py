"""Data models for tasks, weekly schedules and decision traces."""

from .schedule import Schedule, ScheduleOptions, TimeRange, Window
from .task import Task, TaskStatus
from .trace import DecisionTrace, SchedulingDecision

__all__ = [
    'Schedule',
    'ScheduleOptions',
    'TimeRange',
    'Window',
    'Task',
    'TaskStatus',
    'DecisionTrace',
    'SchedulingDecision',
]
