from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from zoneinfo import ZoneInfo

from .common.datetime_utils import Clock, SystemClock, WeekCalendar
from .core.constants import (
    DEFAULT_DAILY_OVERTIME_HOURS,
    DEFAULT_MAX_SHIFT_HOURS,
    DEFAULT_OVERTIME_THRESHOLD_HOURS,
    DEFAULT_WEEK_START,
)
from .database.connection import DBConfig, DatabaseConnection
from .repairs.policy import ClosingTimePolicy
from .repairs.service import ClockRepairService
from .summaries.policies.weekly_threshold import WeeklyThresholdPolicy
from .summaries.service import WeeklySummaryService
from .timeclock.calculator.base import IntervalCalculator
from .timeclock.calculator.quarter_hour_calculator import QuarterHourIntervalCalculator
from .timeclock.calculator.standard_calculator import StandardIntervalCalculator
from .timeclock.mysql_time_entry_repository import MySQLTimeEntryRepository
from .timeclock.repository import TimeEntryRepository
from .timeclock.service import TimeClockService
from .work_orders.mysql_assignment_repository import MySQLAssignmentRepository
from .work_orders.repository import AssignmentRepository
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository


@dataclass(frozen=True)
class Container:
    entries_repo: TimeEntryRepository
    workers_repo: WorkerRepository
    assignments_repo: AssignmentRepository

    clock: Clock
    time_clock_service: TimeClockService
    summary_service: WeeklySummaryService
    repair_service: ClockRepairService


def build_services(
    *,
    entries: TimeEntryRepository,
    workers: WorkerRepository,
    assignments: AssignmentRepository,
    settings: Any = None,
    clock: Optional[Clock] = None,
) -> Container:
    """Wire services around any repository implementations.

    settings may be a settings module or any object exposing the engine
    settings as attributes; missing attributes fall back to defaults.
    """

    clock = clock or SystemClock()
    threshold = float(getattr(settings, "OVERTIME_THRESHOLD_HOURS", DEFAULT_OVERTIME_THRESHOLD_HOURS))
    max_shift = float(getattr(settings, "MAX_SHIFT_HOURS", DEFAULT_MAX_SHIFT_HOURS))
    week_start = int(getattr(settings, "WEEK_START", DEFAULT_WEEK_START))
    daily_threshold = float(getattr(settings, "DAILY_OVERTIME_HOURS", DEFAULT_DAILY_OVERTIME_HOURS))
    # empty means naive local time
    tz_name = getattr(settings, "TIMEZONE", None)
    tz = ZoneInfo(tz_name) if tz_name else None

    calculator: IntervalCalculator = StandardIntervalCalculator()
    if bool(getattr(settings, "ROUND_TO_QUARTER_HOUR", False)):
        calculator = QuarterHourIntervalCalculator(calculator)

    time_clock_service = TimeClockService(entries, workers, clock=clock)
    summary_service = WeeklySummaryService(
        entries,
        workers,
        assignments,
        calendar=WeekCalendar(first_weekday=week_start, tz=tz),
        calculator=calculator,
        policy=WeeklyThresholdPolicy(threshold=threshold),
        clock=clock,
        daily_overtime_hours=daily_threshold,
    )
    repair_service = ClockRepairService(
        entries,
        workers,
        policy=ClosingTimePolicy(max_shift_hours=max_shift),
        clock=clock,
    )

    return Container(
        entries_repo=entries,
        workers_repo=workers,
        assignments_repo=assignments,
        clock=clock,
        time_clock_service=time_clock_service,
        summary_service=summary_service,
        repair_service=repair_service,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        entries=MySQLTimeEntryRepository(conn),
        workers=MySQLWorkerRepository(conn),
        assignments=MySQLAssignmentRepository(conn),
        settings=settings,
    )
