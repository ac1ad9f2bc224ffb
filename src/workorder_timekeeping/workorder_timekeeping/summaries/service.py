from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, SystemClock, WeekCalendar
from ..core.constants import DEFAULT_DAILY_OVERTIME_HOURS
from ..core.exceptions import WorkerNotFoundError
from ..timeclock.calculator.base import IntervalCalculator
from ..timeclock.calculator.standard_calculator import StandardIntervalCalculator
from ..timeclock.model import TimeClockEntry
from ..timeclock.repository import TimeEntryRepository
from ..work_orders.repository import AssignmentRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .aggregator import compute_weekly_summary, entries_in_week
from .attribution import WorkOrderAttributionResolver
from .model import OvertimeReport, WorkerHours, WorkerWeeklySummary, WorkOrderHoursBreakdown
from .policies.base import OvertimePolicy
from .policies.weekly_threshold import WeeklyThresholdPolicy

logger = logging.getLogger(__name__)


class WeeklySummaryService:
    """Reads a snapshot from the stores and drives the pure aggregator.

    Store failures (StoreUnavailable) propagate unchanged: a partial payroll
    total is worse than no total. Every batch call shares a single ``now``.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        workers: WorkerRepository,
        assignments: AssignmentRepository,
        *,
        calendar: WeekCalendar | None = None,
        calculator: IntervalCalculator | None = None,
        policy: OvertimePolicy | None = None,
        clock: Clock | None = None,
        daily_overtime_hours: float = DEFAULT_DAILY_OVERTIME_HOURS,
    ):
        self._entries = entries
        self._workers = workers
        self._resolver = WorkOrderAttributionResolver(assignments)
        self._calendar = calendar or WeekCalendar()
        self._calculator = calculator or StandardIntervalCalculator()
        self._policy = policy or WeeklyThresholdPolicy()
        self._clock = clock or SystemClock()
        self._daily_overtime_hours = float(daily_overtime_hours)

    def _summarize(self, worker: Worker, reference_date: date | datetime, now: datetime) -> WorkerWeeklySummary:
        week_start, week_end = self._calendar.week_bounds(reference_date)
        entries: Sequence[TimeClockEntry] = self._entries.fetch_entries(worker.worker_id)

        in_week = entries_in_week(entries, week_start, week_end)
        attributions = self._resolver.resolve_all(in_week)

        current_work_order = None
        open_entries = [e for e in entries if e.is_open]
        if open_entries:
            current = max(open_entries, key=lambda e: e.clock_in_time)
            if current.entry_id in attributions:
                current_work_order = attributions[current.entry_id]
            else:
                current_work_order = self._resolver.resolve(current)

        summary = compute_weekly_summary(
            worker,
            in_week,
            attributions,
            now=now,
            week_start=week_start,
            week_end=week_end,
            calculator=self._calculator,
            policy=self._policy,
            current_work_order=current_work_order,
        )
        if summary.flagged_entry_ids:
            logger.warning(
                "worker %s has inconsistent entries counted as 0 hours: %s",
                worker.worker_id,
                list(summary.flagged_entry_ids),
            )
        return summary

    def weekly_summary(
        self,
        worker_id: int,
        reference_date: date | datetime,
        *,
        now: Optional[datetime] = None,
    ) -> WorkerWeeklySummary:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise WorkerNotFoundError(f"Worker {worker_id} does not exist")
        return self._summarize(worker, reference_date, now or self._clock.now())

    def all_weekly_summaries(
        self,
        reference_date: date | datetime,
        *,
        now: Optional[datetime] = None,
    ) -> list[WorkerWeeklySummary]:
        """Summaries for every active worker, ordered by name."""
        now = now or self._clock.now()
        workers = sorted(
            (w for w in self._workers.fetch_all_workers() if w.is_active),
            key=lambda w: ((w.name or "").lower(), w.worker_id),
        )
        return [self._summarize(w, reference_date, now) for w in workers]

    def work_order_breakdowns(
        self,
        reference_date: date | datetime,
        *,
        now: Optional[datetime] = None,
    ) -> list[WorkOrderHoursBreakdown]:
        """Per work order totals across all workers, largest first."""
        by_order: dict[int, WorkOrderHoursBreakdown] = {}
        for summary in self.all_weekly_summaries(reference_date, now=now):
            for wos in summary.work_orders:
                key = wos.work_order.work_order_id
                breakdown = by_order.setdefault(key, WorkOrderHoursBreakdown(work_order=wos.work_order))
                breakdown.total_hours += wos.hours_worked
                breakdown.worker_hours.append(WorkerHours(worker=summary.worker, hours=wos.hours_worked))

        return sorted(by_order.values(), key=lambda b: b.total_hours, reverse=True)

    def overtime_report(
        self,
        reference_date: date | datetime,
        *,
        now: Optional[datetime] = None,
    ) -> OvertimeReport:
        summaries = self.all_weekly_summaries(reference_date, now=now)
        return OvertimeReport(
            summaries=tuple(s for s in summaries if s.is_overtime),
            daily_threshold=self._daily_overtime_hours,
        )
