from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from ..timeclock.calculator.base import IntervalCalculator
from ..timeclock.model import TimeClockEntry
from ..work_orders.model import WorkOrder
from ..workers.model import Worker
from .model import WorkerWeeklySummary, WorkOrderSummary
from .policies.base import OvertimePolicy


def entries_in_week(entries: Iterable[TimeClockEntry], week_start: date, week_end: date) -> list[TimeClockEntry]:
    """Entries whose work_date falls in [week_start, week_end), ordered by clock-in."""
    selected = [e for e in entries if week_start <= e.work_date < week_end]
    selected.sort(key=lambda e: (e.clock_in_time, e.entry_id))
    return selected


def compute_weekly_summary(
    worker: Worker,
    entries: Iterable[TimeClockEntry],
    attributions: Mapping[int, Optional[WorkOrder]],
    *,
    now: datetime,
    week_start: date,
    week_end: date,
    calculator: IntervalCalculator,
    policy: OvertimePolicy,
    current_work_order: Optional[WorkOrder] = None,
) -> WorkerWeeklySummary:
    """Build one worker's weekly summary from an explicit snapshot.

    No I/O: entries, attributions and now are supplied by the caller. A work
    order is active only when it is the worker's current work order, whichever
    week holds the open session.
    """

    total_hours = 0.0
    unattributed_hours = 0.0
    flagged: list[int] = []
    daily_hours: dict[date, float] = {}

    # work_order_id -> [work_order, hours], insertion ordered
    groups: dict[int, list] = {}

    for entry in entries_in_week(entries, week_start, week_end):
        elapsed = calculator.elapsed(entry, now)
        if elapsed.anomaly is not None:
            flagged.append(entry.entry_id)

        total_hours += elapsed.hours
        daily_hours[entry.work_date] = daily_hours.get(entry.work_date, 0.0) + elapsed.hours

        work_order = attributions.get(entry.entry_id)
        if work_order is None:
            unattributed_hours += elapsed.hours
            continue

        group = groups.get(work_order.work_order_id)
        if group is None:
            groups[work_order.work_order_id] = [work_order, elapsed.hours]
        else:
            group[1] += elapsed.hours

    decision = policy.evaluate(total_hours)
    current_id = current_work_order.work_order_id if current_work_order is not None else None

    return WorkerWeeklySummary(
        worker=worker,
        week_start=week_start,
        week_end=week_end,
        total_hours=total_hours,
        work_orders=tuple(
            WorkOrderSummary(
                work_order=wo,
                hours_worked=hours,
                is_active=wo.work_order_id == current_id,
                status=wo.status,
            )
            for wo, hours in groups.values()
        ),
        is_overtime=decision.is_overtime,
        overtime_hours=decision.overtime_hours,
        regular_hours=decision.regular_hours,
        current_work_order=current_work_order,
        unattributed_hours=unattributed_hours,
        flagged_entry_ids=tuple(flagged),
        daily_hours=dict(sorted(daily_hours.items())),
    )
