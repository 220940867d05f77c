"""Weekly availability models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Sequence

from ..exceptions import ValidationError, require_list, require_mapping
from ..utils.datetime_utils import MINUTES_PER_DAY, parse_datetime


@dataclass(frozen=True)
class TimeRange:
    """A same-day span in minutes past local midnight."""
    
    start_minutes: int
    end_minutes: int
    
    def __post_init__(self):
        """Reject ranges outside a single day or with no length."""
        for value in (self.start_minutes, self.end_minutes):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"Time range bounds must be integers, got {value!r}")
            if not 0 <= value < MINUTES_PER_DAY:
                raise ValidationError(f"Time range bound {value} outside [0, {MINUTES_PER_DAY})")
        if self.start_minutes >= self.end_minutes:
            raise ValidationError(
                f"Time range start {self.start_minutes} must be before end {self.end_minutes}"
            )
    
    @property
    def span(self) -> int:
        """Length of the range in minutes."""
        return self.end_minutes - self.start_minutes


@dataclass(frozen=True)
class Window:
    """One recurring weekly availability window (0 = Sunday)."""
    
    day_of_week: int
    time_range: TimeRange
    
    def __post_init__(self):
        if isinstance(self.day_of_week, bool) or not isinstance(self.day_of_week, int):
            raise ValidationError(f"day_of_week must be an integer, got {self.day_of_week!r}")
        if not 0 <= self.day_of_week <= 6:
            raise ValidationError(f"day_of_week {self.day_of_week} outside 0-6")
        if not isinstance(self.time_range, TimeRange):
            raise ValidationError("Window time_range must be a TimeRange")
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Window':
        """Build a window from plan data (snake_case or camelCase keys)."""
        require_mapping(data, "Window entry")
        day = data.get('day_of_week', data.get('dayOfWeek'))
        time_range = require_mapping(
            data.get('time_range', data.get('timeRange')), "Window time_range"
        )
        return cls(
            day_of_week=day,
            time_range=TimeRange(
                start_minutes=time_range.get('start_minutes', time_range.get('startMinutes')),
                end_minutes=time_range.get('end_minutes', time_range.get('endMinutes')),
            ),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'day_of_week': self.day_of_week,
            'time_range': {
                'start_minutes': self.time_range.start_minutes,
                'end_minutes': self.time_range.end_minutes,
            },
        }


@dataclass
class Schedule:
    """A named recurring weekly availability pattern.
    
    Windows are kept exactly as given: entries sharing a day are neither
    merged nor deduplicated, so overlapping minutes may be offered twice.
    """
    
    schedule_id: str
    name: str
    windows: Sequence[Window] = field(default_factory=tuple)
    
    def __post_init__(self):
        """Validate entries and store them as a tuple."""
        for window in self.windows:
            if not isinstance(window, Window):
                raise ValidationError(f"Schedule {self.schedule_id} has a non-Window entry: {window!r}")
        self.windows = tuple(self.windows)
    
    @property
    def max_span(self) -> int:
        """Longest single window span in minutes (0 with no windows)."""
        return max((w.time_range.span for w in self.windows), default=0)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Schedule':
        """Build a schedule from plan data."""
        require_mapping(data, "Schedule entry")
        schedule_id = data.get('schedule_id', data.get('id'))
        if schedule_id is None:
            raise ValidationError(f"Schedule entry has no id: {data!r}")
        entries = require_list(
            data.get('windows', data.get('durations')), f"Schedule {schedule_id} windows"
        )
        return cls(
            schedule_id=str(schedule_id),
            name=data.get('name', ''),
            windows=[Window.from_dict(entry) for entry in entries],
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'schedule_id': self.schedule_id,
            'name': self.name,
            'windows': [w.to_dict() for w in self.windows],
        }


@dataclass(frozen=True)
class ScheduleOptions:
    """Planning horizon; `start_date` is also the search origin."""
    
    start_date: datetime
    end_date: datetime
    
    def __post_init__(self):
        for name in ('start_date', 'end_date'):
            value = getattr(self, name)
            if not isinstance(value, datetime):
                raise ValidationError(f"{name} must be a datetime, got {value!r}")
            if value.tzinfo is not None:
                raise ValidationError(f"{name} must be a naive wall-clock datetime")
        if self.start_date > self.end_date:
            raise ValidationError(
                f"Horizon start {self.start_date} is after end {self.end_date}"
            )
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleOptions':
        require_mapping(data, "Horizon")
        start = data.get('start_date', data.get('startDate'))
        end = data.get('end_date', data.get('endDate'))
        if start is None or end is None:
            raise ValidationError("Horizon requires start_date and end_date")
        return cls(start_date=parse_datetime(start), end_date=parse_datetime(end))
