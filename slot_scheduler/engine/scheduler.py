"""Core scheduling engine."""

import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exceptions import ValidationError
from ..models.schedule import Schedule, ScheduleOptions
from ..models.task import Task
from ..models.trace import DecisionTrace, SchedulingDecision
from ..utils.config import STALE_DATES_POLICIES, get_default_config
from .search import DEFAULT_SEARCH_LIMIT_DAYS, find_next_available

logger = logging.getLogger(__name__)


class Scheduler:
    """Greedy sequential allocator over weekly availability schedules.
    
    Tasks are placed strictly in input order. A single cursor, the end of the
    last committed task, is threaded through the run as a fold accumulator;
    a task that fails to place never moves it.
    """
    
    def __init__(self, config: Optional[dict] = None):
        """Initialize scheduler with configuration."""
        self.config = config if config is not None else get_default_config()
        self.scheduling_config = self.config.get('scheduling', {})
        self.search_limit_days = self.scheduling_config.get(
            'search_limit_days', DEFAULT_SEARCH_LIMIT_DAYS
        )
        self.stale_dates = self.scheduling_config.get('stale_dates', 'keep')
        
        if isinstance(self.search_limit_days, bool) or not isinstance(self.search_limit_days, int) \
                or self.search_limit_days < 0:
            raise ValueError(f"search_limit_days must be a non-negative integer: {self.search_limit_days!r}")
        if self.stale_dates not in STALE_DATES_POLICIES:
            raise ValueError(f"Unknown stale_dates policy: {self.stale_dates}")
    
    def schedule(
        self,
        tasks: Iterable[Task],
        schedules: Iterable[Schedule],
        options: ScheduleOptions,
    ) -> Tuple[List[Task], DecisionTrace]:
        """Place tasks into their schedules' windows within the horizon."""
        run_id = str(uuid.uuid4())[:8]
        schedules_by_id = self._index_schedules(schedules)
        
        results: List[Task] = []
        decisions: List[SchedulingDecision] = []
        cursor: Optional[datetime] = None
        
        for task in tasks:
            result, decision, cursor = self._schedule_task(
                task, schedules_by_id, options, cursor
            )
            logger.debug("Task %s: %s", task.task_id, decision.reason)
            results.append(result)
            decisions.append(decision)
        
        summary = self._compute_summary_stats(results, decisions)
        logger.info(
            "Run %s scheduled %d of %d tasks",
            run_id, summary['tasks_scheduled'], summary['tasks_total'],
        )
        
        trace = DecisionTrace(
            run_id=run_id,
            timestamp=datetime.now(),
            horizon_start=options.start_date,
            horizon_end=options.end_date,
            config={
                'search_limit_days': self.search_limit_days,
                'stale_dates': self.stale_dates,
            },
            decisions=decisions,
            summary_stats=summary,
        )
        
        return results, trace
    
    def _schedule_task(
        self,
        task: Task,
        schedules_by_id: Dict[str, Schedule],
        options: ScheduleOptions,
        cursor: Optional[datetime],
    ) -> Tuple[Task, SchedulingDecision, Optional[datetime]]:
        """Place one task; returns the new record, its decision and the next cursor."""
        if task.is_completed:
            return (
                dataclasses.replace(task),
                self._unscheduled(task, "Task already completed", "completed"),
                cursor,
            )
        
        schedule = schedules_by_id.get(task.schedule_id)
        if schedule is None:
            return self._reject(
                task, f"Unknown schedule '{task.schedule_id}'", "unknown_schedule", cursor
            )
        
        # No window instance can ever hold the task
        if schedule.max_span < task.duration:
            return self._reject(
                task,
                f"Duration {task.duration} min exceeds longest window ({schedule.max_span} min)",
                "duration_exceeds_windows",
                cursor,
            )
        
        placement = find_next_available(
            options.start_date,
            schedule,
            task.duration,
            cursor=cursor,
            search_limit_days=self.search_limit_days,
        )
        
        if placement is None:
            return self._reject(
                task,
                f"No fitting window within {self.search_limit_days} days",
                "no_window_in_search_limit",
                cursor,
            )
        
        if placement.end > options.end_date:
            return self._reject(
                task,
                f"Earliest fit ends {placement.end} after horizon end {options.end_date}",
                "beyond_horizon",
                cursor,
            )
        
        scheduled = dataclasses.replace(
            task,
            scheduled_start_date=placement.start,
            scheduled_end_date=placement.end,
        )
        decision = SchedulingDecision(
            task_id=task.task_id,
            scheduled_start=placement.start,
            scheduled_end=placement.end,
            reason="Scheduled in first fitting window",
        )
        return scheduled, decision, placement.end
    
    def _reject(
        self,
        task: Task,
        reason: str,
        constraint: str,
        cursor: Optional[datetime],
    ) -> Tuple[Task, SchedulingDecision, Optional[datetime]]:
        """Leave a task unscheduled according to the stale-dates policy."""
        if self.stale_dates == 'clear':
            result = dataclasses.replace(task, scheduled_start_date=None, scheduled_end_date=None)
        else:
            result = dataclasses.replace(task)
        return result, self._unscheduled(task, reason, constraint), cursor
    
    @staticmethod
    def _unscheduled(task: Task, reason: str, constraint: str) -> SchedulingDecision:
        return SchedulingDecision(
            task_id=task.task_id,
            scheduled_start=None,
            scheduled_end=None,
            reason=reason,
            constraint_applied=constraint,
        )
    
    @staticmethod
    def _index_schedules(schedules: Iterable[Schedule]) -> Dict[str, Schedule]:
        """Map schedule ids to schedules, rejecting duplicate ids."""
        indexed: Dict[str, Schedule] = {}
        for schedule in schedules:
            if schedule.schedule_id in indexed:
                raise ValidationError(f"Duplicate schedule id: {schedule.schedule_id}")
            indexed[schedule.schedule_id] = schedule
        return indexed
    
    def _compute_summary_stats(
        self,
        results: List[Task],
        decisions: List[SchedulingDecision],
    ) -> Dict[str, Any]:
        """Compute summary statistics for the trace."""
        committed = [d for d in decisions if d.committed]
        skipped = sum(1 for d in decisions if d.constraint_applied == 'completed')
        total_minutes = sum(
            int((d.scheduled_end - d.scheduled_start).total_seconds() // 60)
            for d in committed
        )
        
        return {
            'tasks_total': len(results),
            'tasks_scheduled': len(committed),
            'tasks_unscheduled': len(results) - len(committed) - skipped,
            'tasks_skipped_completed': skipped,
            'total_scheduled_minutes': total_minutes,
        }


def schedule(
    tasks: Iterable[Task],
    schedules: Iterable[Schedule],
    options: ScheduleOptions,
    config: Optional[dict] = None,
) -> List[Task]:
    """Schedule tasks and return the new task records, in input order."""
    results, _ = Scheduler(config).schedule(tasks, schedules, options)
    return results
