# Test configuration and fixtures
from datetime import datetime
from pathlib import Path

import pytest

from slot_scheduler.models import Schedule, ScheduleOptions, Task, TaskStatus, TimeRange, Window

NINE_AM = 9 * 60
FIVE_PM = 17 * 60

PLANS_DIR = Path(__file__).resolve().parent.parent / "plans"


@pytest.fixture
def workday_schedule():
    """Monday and Tuesday, 9:00 AM to 5:00 PM."""
    return Schedule(
        schedule_id="workday",
        name="Regular Workday",
        windows=[
            Window(day_of_week=1, time_range=TimeRange(NINE_AM, FIVE_PM)),
            Window(day_of_week=2, time_range=TimeRange(NINE_AM, FIVE_PM)),
        ],
    )


@pytest.fixture
def week_options():
    """Monday 2024-03-25 through that Friday."""
    return ScheduleOptions(
        start_date=datetime(2024, 3, 25),
        end_date=datetime(2024, 3, 29),
    )


@pytest.fixture
def make_task():
    """Factory for tasks bound to the workday schedule by default."""
    counter = {"next": 0}

    def _make(duration=60, schedule_id="workday", status=TaskStatus.NOT_STARTED, **kwargs):
        counter["next"] += 1
        task_id = kwargs.pop("task_id", str(counter["next"]))
        return Task(
            task_id=task_id,
            name=kwargs.pop("name", f"Task {task_id}"),
            duration=duration,
            schedule_id=schedule_id,
            status=status,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_plan_path():
    return PLANS_DIR / "workweek.yaml"
