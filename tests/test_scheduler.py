"""Tests for the sequential allocator."""

from datetime import datetime, timedelta

import pytest

from slot_scheduler import Scheduler, ValidationError, schedule
from slot_scheduler.models import Schedule, ScheduleOptions, TaskStatus, TimeRange, Window
from slot_scheduler.utils.datetime_utils import day_of_week, minute_of_day


def _windows_of(schedule_obj, start, end):
    """Windows of the schedule holding [start, end] on one day."""
    return [
        w for w in schedule_obj.windows
        if w.day_of_week == day_of_week(start.date())
        and start.date() == end.date()
        and w.time_range.start_minutes <= minute_of_day(start)
        and minute_of_day(end) <= w.time_range.end_minutes
    ]


@pytest.mark.unit
class TestScenarios:
    """Reference scenarios over a Monday/Tuesday 9-to-5 schedule."""

    def test_single_task_first_available_slot(self, make_task, workday_schedule, week_options):
        result = schedule([make_task(60)], [workday_schedule], week_options)

        assert len(result) == 1
        assert result[0].scheduled_start_date == datetime(2024, 3, 25, 9, 0)
        assert result[0].scheduled_end_date == datetime(2024, 3, 25, 10, 0)

    def test_tasks_scheduled_sequentially(self, make_task, workday_schedule, week_options):
        tasks = [make_task(120), make_task(60)]

        result = schedule(tasks, [workday_schedule], week_options)

        assert len(result) == 2
        assert result[0].scheduled_start_date == datetime(2024, 3, 25, 9, 0)
        assert result[0].scheduled_end_date == datetime(2024, 3, 25, 11, 0)
        assert result[1].scheduled_start_date == datetime(2024, 3, 25, 11, 0)
        assert result[1].scheduled_end_date == datetime(2024, 3, 25, 12, 0)

    def test_completed_tasks_not_scheduled(self, make_task, workday_schedule, week_options):
        tasks = [
            make_task(60, status=TaskStatus.COMPLETED, completed_at=datetime(2024, 3, 24)),
            make_task(60),
        ]

        result = schedule(tasks, [workday_schedule], week_options)

        assert len(result) == 2
        assert result[0].scheduled_start_date is None
        assert result[0].scheduled_end_date is None
        assert result[0] == tasks[0]
        assert result[1].scheduled_start_date == datetime(2024, 3, 25, 9, 0)
        assert result[1].scheduled_end_date == datetime(2024, 3, 25, 10, 0)

    def test_rolls_over_to_next_day(self, make_task, workday_schedule, week_options):
        tasks = [make_task(480), make_task(60)]

        result = schedule(tasks, [workday_schedule], week_options)

        assert result[0].scheduled_start_date == datetime(2024, 3, 25, 9, 0)
        assert result[0].scheduled_end_date == datetime(2024, 3, 25, 17, 0)
        assert result[1].scheduled_start_date == datetime(2024, 3, 26, 9, 0)
        assert result[1].scheduled_end_date == datetime(2024, 3, 26, 10, 0)

    def test_task_longer_than_any_window_left_unscheduled(self, make_task, workday_schedule, week_options):
        result = schedule([make_task(600)], [workday_schedule], week_options)

        assert len(result) == 1
        assert result[0].scheduled_start_date is None
        assert result[0].scheduled_end_date is None


@pytest.mark.unit
class TestAllocatorRules:
    """Skip rules, cursor handling and horizon bounds."""

    def test_unknown_schedule_is_skipped_without_moving_cursor(self, make_task, workday_schedule, week_options):
        tasks = [make_task(60), make_task(60, schedule_id="missing"), make_task(60)]

        result, trace = Scheduler().schedule(tasks, [workday_schedule], week_options)

        assert not result[1].is_scheduled
        assert trace.decisions[1].constraint_applied == "unknown_schedule"
        assert result[2].scheduled_start_date == datetime(2024, 3, 25, 10, 0)

    def test_completed_task_does_not_move_cursor(self, make_task, workday_schedule, week_options):
        tasks = [
            make_task(60),
            make_task(
                120,
                status=TaskStatus.COMPLETED,
                scheduled_start_date=datetime(2024, 3, 26, 9),
                scheduled_end_date=datetime(2024, 3, 26, 11),
            ),
            make_task(60),
        ]

        result = schedule(tasks, [workday_schedule], week_options)

        assert result[1] == tasks[1]
        assert result[2].scheduled_start_date == datetime(2024, 3, 25, 10, 0)

    def test_fit_beyond_horizon_end_is_rejected_and_cursor_kept(self, make_task, workday_schedule):
        options = ScheduleOptions(datetime(2024, 3, 25), datetime(2024, 3, 25, 9, 30))
        tasks = [make_task(60), make_task(30)]

        result, trace = Scheduler().schedule(tasks, [workday_schedule], options)

        assert not result[0].is_scheduled
        assert trace.decisions[0].constraint_applied == "beyond_horizon"
        assert result[1].scheduled_start_date == datetime(2024, 3, 25, 9, 0)
        assert result[1].scheduled_end_date == datetime(2024, 3, 25, 9, 30)

    def test_end_exactly_at_horizon_end_is_accepted(self, make_task, workday_schedule):
        options = ScheduleOptions(datetime(2024, 3, 25), datetime(2024, 3, 25, 10, 0))

        result = schedule([make_task(60)], [workday_schedule], options)

        assert result[0].scheduled_end_date == datetime(2024, 3, 25, 10, 0)

    def test_input_order_is_kept(self, make_task, workday_schedule, week_options):
        tasks = [make_task(30, task_id="short"), make_task(300, task_id="long"), make_task(30, task_id="tail")]

        result = schedule(tasks, [workday_schedule], week_options)

        assert [t.task_id for t in result] == ["short", "long", "tail"]
        assert result[1].scheduled_start_date == datetime(2024, 3, 25, 9, 30)
        assert result[2].scheduled_start_date == datetime(2024, 3, 25, 14, 30)

    def test_no_backfill_after_rollover(self, make_task, workday_schedule, week_options):
        # The 60-minute task does not return to Monday's free afternoon
        tasks = [make_task(300), make_task(240), make_task(60)]

        result = schedule(tasks, [workday_schedule], week_options)

        assert result[1].scheduled_start_date == datetime(2024, 3, 26, 9, 0)
        assert result[2].scheduled_start_date == datetime(2024, 3, 26, 13, 0)

    def test_cursor_is_shared_across_schedules(self, make_task, workday_schedule, week_options):
        mornings = Schedule(
            schedule_id="mornings",
            name="Mornings",
            windows=[
                Window(1, TimeRange(480, 600)),
                Window(2, TimeRange(480, 600)),
            ],
        )
        tasks = [make_task(480), make_task(60, schedule_id="mornings")]

        result = schedule(tasks, [workday_schedule, mornings], week_options)

        assert result[1].scheduled_start_date == datetime(2024, 3, 26, 8, 0)

    def test_overlapping_windows_are_considered_separately(self, make_task, week_options):
        overlapping = Schedule(
            schedule_id="overlap",
            name="Overlapping",
            windows=[
                Window(1, TimeRange(540, 600)),
                Window(1, TimeRange(585, 660)),
            ],
        )

        # 100 minutes would fit the 9:00-11:00 union but neither window alone
        result, trace = Scheduler().schedule(
            [make_task(100, schedule_id="overlap")], [overlapping], week_options
        )

        assert not result[0].is_scheduled
        assert trace.decisions[0].constraint_applied == "duration_exceeds_windows"

    def test_no_fit_within_search_limit(self, make_task, week_options):
        sundays = Schedule("sun", "Sundays", [Window(0, TimeRange(540, 600))])
        options = ScheduleOptions(week_options.start_date, datetime(2024, 6, 1))
        config = {"scheduling": {"search_limit_days": 3}}

        result, trace = Scheduler(config).schedule(
            [make_task(30, schedule_id="sun")], [sundays], options
        )

        assert not result[0].is_scheduled
        assert trace.decisions[0].constraint_applied == "no_window_in_search_limit"

    def test_duplicate_schedule_ids_rejected(self, make_task, workday_schedule, week_options):
        with pytest.raises(ValidationError):
            schedule([make_task(60)], [workday_schedule, workday_schedule], week_options)


@pytest.mark.unit
class TestStaleDates:
    """Previously scheduled dates on tasks that fail to place."""

    def _stale_task(self, make_task):
        return make_task(
            600,
            scheduled_start_date=datetime(2024, 3, 18, 9),
            scheduled_end_date=datetime(2024, 3, 18, 19),
        )

    def test_kept_by_default(self, make_task, workday_schedule, week_options):
        task = self._stale_task(make_task)

        result = schedule([task], [workday_schedule], week_options)

        assert result[0].scheduled_start_date == datetime(2024, 3, 18, 9)
        assert result[0].scheduled_end_date == datetime(2024, 3, 18, 19)

    def test_cleared_when_configured(self, make_task, workday_schedule, week_options):
        task = self._stale_task(make_task)
        config = {"scheduling": {"stale_dates": "clear"}}

        result = schedule([task], [workday_schedule], week_options, config)

        assert result[0].scheduled_start_date is None
        assert result[0].scheduled_end_date is None
        assert task.scheduled_start_date == datetime(2024, 3, 18, 9)

    def test_overwritten_on_success(self, make_task, workday_schedule, week_options):
        task = make_task(
            60,
            scheduled_start_date=datetime(2024, 3, 18, 9),
            scheduled_end_date=datetime(2024, 3, 18, 10),
        )

        result = schedule([task], [workday_schedule], week_options)

        assert result[0].scheduled_start_date == datetime(2024, 3, 25, 9)

    @pytest.mark.parametrize("config", [
        {"scheduling": {"stale_dates": "forget"}},
        {"scheduling": {"search_limit_days": -1}},
        {"scheduling": {"search_limit_days": "365"}},
    ])
    def test_invalid_config_rejected(self, config):
        with pytest.raises(ValueError):
            Scheduler(config)


@pytest.mark.unit
class TestProperties:
    """Properties that hold for any run."""

    @pytest.fixture
    def mixed_tasks(self, make_task):
        return [
            make_task(90),
            make_task(45, status=TaskStatus.COMPLETED),
            make_task(200, status=TaskStatus.IN_PROGRESS),
            make_task(600),
            make_task(240),
            make_task(15, schedule_id="missing"),
            make_task(30),
            make_task(480),
        ]

    def test_placements_match_duration_and_single_window(self, mixed_tasks, workday_schedule, week_options):
        result = schedule(mixed_tasks, [workday_schedule], week_options)

        for task in result:
            if task.is_completed or not task.is_scheduled:
                continue
            assert task.scheduled_end_date - task.scheduled_start_date == timedelta(minutes=task.duration)
            assert _windows_of(workday_schedule, task.scheduled_start_date, task.scheduled_end_date)
            assert week_options.start_date <= task.scheduled_end_date <= week_options.end_date

    def test_committed_placements_never_overlap(self, mixed_tasks, workday_schedule, week_options):
        result = schedule(mixed_tasks, [workday_schedule], week_options)

        committed = [t for t in result if not t.is_completed and t.is_scheduled]
        for previous, current in zip(committed, committed[1:]):
            assert current.scheduled_start_date >= previous.scheduled_end_date

    def test_completed_tasks_unchanged(self, mixed_tasks, workday_schedule, week_options):
        result = schedule(mixed_tasks, [workday_schedule], week_options)

        for before, after in zip(mixed_tasks, result):
            if before.is_completed:
                assert after == before

    def test_rerun_reproduces_commits(self, mixed_tasks, workday_schedule, week_options):
        first = schedule(mixed_tasks, [workday_schedule], week_options)
        second = schedule(first, [workday_schedule], week_options)

        assert second == first

    def test_inputs_not_mutated_and_outputs_are_new_records(self, mixed_tasks, workday_schedule, week_options):
        snapshot = [t.to_dict() for t in mixed_tasks]

        result = schedule(mixed_tasks, [workday_schedule], week_options)

        assert [t.to_dict() for t in mixed_tasks] == snapshot
        assert all(out is not inp for out, inp in zip(result, mixed_tasks))
        assert len(result) == len(mixed_tasks)

    def test_generator_input_accepted(self, mixed_tasks, workday_schedule, week_options):
        result = schedule(iter(mixed_tasks), iter([workday_schedule]), week_options)

        assert len(result) == len(mixed_tasks)
