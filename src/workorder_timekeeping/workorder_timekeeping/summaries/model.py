from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_DAILY_OVERTIME_HOURS
from ..core.enums import WorkOrderStatus
from ..work_orders.model import WorkOrder
from ..workers.model import Worker


@dataclass(frozen=True)
class WorkOrderSummary:
    """Hours one worker put into one work order during one week."""

    work_order: WorkOrder
    hours_worked: float
    is_active: bool
    status: WorkOrderStatus


@dataclass(frozen=True)
class WorkerWeeklySummary:
    """Read-model recomputed from store state on every query, never persisted.

    total_hours == sum(work_orders.hours_worked) + unattributed_hours, and
    daily_hours (keyed by work_date) sums to total_hours as well.
    """

    worker: Worker
    week_start: date
    week_end: date
    total_hours: float
    work_orders: tuple[WorkOrderSummary, ...]
    is_overtime: bool
    overtime_hours: float
    regular_hours: float
    current_work_order: Optional[WorkOrder] = None
    unattributed_hours: float = 0.0
    flagged_entry_ids: tuple[int, ...] = ()
    daily_hours: dict[date, float] = field(default_factory=dict)

    @property
    def attributed_hours(self) -> float:
        return sum(s.hours_worked for s in self.work_orders)

    def daily_overtime(self, threshold: float = DEFAULT_DAILY_OVERTIME_HOURS) -> dict[date, float]:
        """Hours past threshold on each day that went over it. Informational only."""
        return {day: hours - threshold for day, hours in self.daily_hours.items() if hours > threshold}


@dataclass(frozen=True)
class WorkerHours:
    worker: Worker
    hours: float


@dataclass
class WorkOrderHoursBreakdown:
    """One work order's weekly hours across all workers."""

    work_order: WorkOrder
    total_hours: float = 0.0
    worker_hours: list[WorkerHours] = field(default_factory=list)


@dataclass(frozen=True)
class OvertimeReport:
    summaries: tuple[WorkerWeeklySummary, ...]
    daily_threshold: float = DEFAULT_DAILY_OVERTIME_HOURS

    @property
    def total_overtime_hours(self) -> float:
        return sum(s.overtime_hours for s in self.summaries)

    @property
    def worker_count(self) -> int:
        return len(self.summaries)

    def daily_overtime_breakdown(self) -> dict[int, dict[date, float]]:
        """worker_id -> {day: hours over the daily threshold}."""
        return {s.worker.worker_id: s.daily_overtime(self.daily_threshold) for s in self.summaries}
