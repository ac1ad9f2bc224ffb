from __future__ import annotations

from typing import Iterable, Optional

from ..timeclock.model import TimeClockEntry
from ..work_orders.model import WorkOrder
from ..work_orders.repository import AssignmentRepository


class WorkOrderAttributionResolver:
    """Attribute each entry to the work order assigned at its clock-in.

    One entry maps to exactly one work order, or to None when the worker had no
    assignment at that instant. Hours are never split across work orders: a
    worker switching orders mid-session is expected to clock out and back in.
    """

    def __init__(self, assignments: AssignmentRepository):
        self._assignments = assignments

    def resolve(self, entry: TimeClockEntry) -> Optional[WorkOrder]:
        return self._assignments.fetch_active_assignment(entry.worker_id, entry.clock_in_time)

    def resolve_all(self, entries: Iterable[TimeClockEntry]) -> dict[int, Optional[WorkOrder]]:
        return {e.entry_id: self.resolve(e) for e in entries}
