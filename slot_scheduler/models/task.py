"""Task data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import ValidationError, require_mapping
from ..utils.datetime_utils import parse_datetime


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""
    
    NOT_STARTED = 'NOT_STARTED'
    IN_PROGRESS = 'IN_PROGRESS'
    COMPLETED = 'COMPLETED'


@dataclass(frozen=True)
class Task:
    """A fixed-duration task bound to one weekly schedule.
    
    `scheduled_start_date` / `scheduled_end_date` are outputs of the
    scheduler; input tasks may still carry the dates of an earlier run.
    """
    
    task_id: str
    name: str
    duration: int  # minutes
    schedule_id: str
    status: TaskStatus = TaskStatus.NOT_STARTED
    completed_at: Optional[datetime] = None
    scheduled_start_date: Optional[datetime] = None
    scheduled_end_date: Optional[datetime] = None
    
    def __post_init__(self):
        """Validate duration and dates, coerce status strings to TaskStatus."""
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise ValidationError(f"Task {self.task_id} duration must be an integer, got {self.duration!r}")
        if self.duration <= 0:
            raise ValidationError(f"Task {self.task_id} duration must be positive, got {self.duration}")
        
        if not isinstance(self.status, TaskStatus):
            try:
                object.__setattr__(self, 'status', TaskStatus(self.status))
            except ValueError as exc:
                raise ValidationError(f"Task {self.task_id} has unknown status {self.status!r}") from exc
        
        for name in ('completed_at', 'scheduled_start_date', 'scheduled_end_date'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, datetime):
                raise ValidationError(f"Task {self.task_id} {name} must be a datetime, got {value!r}")
    
    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED
    
    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_start_date is not None and self.scheduled_end_date is not None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Build a task from plan data (snake_case or camelCase keys)."""
        require_mapping(data, "Task entry")
        
        def optional_date(*keys):
            for key in keys:
                if data.get(key) is not None:
                    return parse_datetime(data[key])
            return None
        
        task_id = data.get('task_id', data.get('id'))
        if task_id is None:
            raise ValidationError(f"Task entry has no id: {data!r}")
        schedule_id = data.get('schedule_id', data.get('scheduleId', data.get('slotId')))
        if schedule_id is None:
            raise ValidationError(f"Task {task_id} has no schedule_id")
        
        return cls(
            task_id=str(task_id),
            name=data.get('name', ''),
            duration=data.get('duration'),
            schedule_id=str(schedule_id),
            status=data.get('status', TaskStatus.NOT_STARTED),
            completed_at=optional_date('completed_at', 'completedAt'),
            scheduled_start_date=optional_date('scheduled_start_date', 'scheduledStartDate'),
            scheduled_end_date=optional_date('scheduled_end_date', 'scheduledEndDate'),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        def iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value is not None else None
        
        return {
            'task_id': self.task_id,
            'name': self.name,
            'duration': self.duration,
            'schedule_id': self.schedule_id,
            'status': self.status.value,
            'completed_at': iso(self.completed_at),
            'scheduled_start_date': iso(self.scheduled_start_date),
            'scheduled_end_date': iso(self.scheduled_end_date),
        }
