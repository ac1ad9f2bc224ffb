from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from workorder_timekeeping.common.datetime_utils import FixedClock
from workorder_timekeeping.container import build_services
from workorder_timekeeping.core.enums import WorkOrderStatus
from workorder_timekeeping.core.exceptions import ConcurrentWriteError, StoreUnavailable
from workorder_timekeeping.timeclock.model import TimeClockEntry
from workorder_timekeeping.work_orders.model import WorkOrder
from workorder_timekeeping.workers.model import Worker


@dataclass
class InMemoryWorkers:
    workers_by_id: dict[int, Worker] = field(default_factory=dict)

    def add(self, worker: Worker) -> Worker:
        self.workers_by_id[worker.worker_id] = worker
        return worker

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self.workers_by_id.get(worker_id)

    def fetch_all_workers(self):
        return list(self.workers_by_id.values())


@dataclass
class InMemoryAssignments:
    # (worker_id, work_order, assigned_at, unassigned_at)
    windows: list[tuple[int, WorkOrder, datetime, Optional[datetime]]] = field(default_factory=list)
    calls: int = 0

    def assign(self, worker_id: int, work_order: WorkOrder, start: datetime, end: Optional[datetime] = None) -> None:
        self.windows.append((worker_id, work_order, start, end))

    def fetch_active_assignment(self, worker_id: int, at: datetime) -> Optional[WorkOrder]:
        self.calls += 1
        for wid, wo, start, end in reversed(self.windows):
            if wid == worker_id and start <= at and (end is None or at < end):
                return wo
        return None


class InMemoryTimeEntries:
    def __init__(self):
        self._by_id: dict[int, TimeClockEntry] = {}
        self._id = 0
        self.writes = 0
        self.unavailable = False
        # entry_id -> how many upcoming writes fail as concurrent
        self.conflicts: dict[int, int] = {}

    def _check(self):
        if self.unavailable:
            raise StoreUnavailable("store offline")

    def add(
        self,
        worker_id: int,
        clock_in: datetime,
        clock_out: Optional[datetime] = None,
        *,
        is_active: Optional[bool] = None,
        work_date: Optional[date] = None,
    ) -> TimeClockEntry:
        self._id += 1
        entry = TimeClockEntry(
            entry_id=self._id,
            worker_id=worker_id,
            work_date=work_date or clock_in.date(),
            clock_in_time=clock_in,
            clock_out_time=clock_out,
            is_active=(clock_out is None) if is_active is None else is_active,
        )
        self._by_id[entry.entry_id] = entry
        return entry

    def all(self) -> list[TimeClockEntry]:
        return list(self._by_id.values())

    def fetch_entries(self, worker_id: int):
        self._check()
        return [e for e in self._by_id.values() if e.worker_id == worker_id]

    def fetch_active_entries(self):
        self._check()
        return [e for e in self._by_id.values() if e.is_active]

    def get_entry(self, entry_id: int) -> Optional[TimeClockEntry]:
        self._check()
        return self._by_id.get(entry_id)

    def create_entry(self, *, worker_id: int, work_date: date, clock_in_time: datetime, is_active: bool = True):
        self._check()
        return self.add(worker_id, clock_in_time, is_active=is_active, work_date=work_date)

    def write_entry(self, entry: TimeClockEntry) -> TimeClockEntry:
        self._check()
        stored = self._by_id[entry.entry_id]
        if self.conflicts.get(entry.entry_id, 0) > 0:
            self.conflicts[entry.entry_id] -= 1
            # someone else touched the row in between
            self._by_id[entry.entry_id] = replace(stored, version=stored.version + 1)
            raise ConcurrentWriteError(f"entry {entry.entry_id} changed")
        if stored.version != entry.version:
            raise ConcurrentWriteError(f"entry {entry.entry_id} changed")
        assert entry.clock_in_time == stored.clock_in_time
        new = replace(entry, version=entry.version + 1)
        self._by_id[entry.entry_id] = new
        self.writes += 1
        return new


@pytest.fixture
def tomato() -> WorkOrder:
    return WorkOrder(work_order_id=1, title="Tomato Harvesting", status=WorkOrderStatus.IN_PROGRESS)


@pytest.fixture
def irrigation() -> WorkOrder:
    return WorkOrder(work_order_id=2, title="Irrigation Repair", status=WorkOrderStatus.ASSIGNED)


@pytest.fixture
def workers() -> InMemoryWorkers:
    repo = InMemoryWorkers()
    repo.add(Worker(worker_id=1, name="Maria", position="Harvest Lead"))
    repo.add(Worker(worker_id=2, name="Ana", position="Field Hand"))
    repo.add(Worker(worker_id=3, name="Zed", position="Field Hand", is_active=False))
    return repo


@pytest.fixture
def assignments() -> InMemoryAssignments:
    return InMemoryAssignments()


@pytest.fixture
def entries() -> InMemoryTimeEntries:
    return InMemoryTimeEntries()


@pytest.fixture
def clock() -> FixedClock:
    # Wednesday of the test week
    return FixedClock(datetime(2025, 6, 11, 10, 0))


@pytest.fixture
def container(entries, workers, assignments, clock):
    return build_services(entries=entries, workers=workers, assignments=assignments, clock=clock)
