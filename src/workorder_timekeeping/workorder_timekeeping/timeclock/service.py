from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock
from ..core.exceptions import AlreadyClockedInError, NotClockedInError, ValidationError, WorkerNotFoundError
from ..workers.repository import WorkerRepository
from .model import TimeClockEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class TimeClockService:
    def __init__(
        self,
        entries: TimeEntryRepository,
        workers: WorkerRepository,
        *,
        clock: Clock | None = None,
    ):
        self._entries = entries
        self._workers = workers
        self._clock = clock or SystemClock()

    def current_entry(self, worker_id: int) -> Optional[TimeClockEntry]:
        open_entries = [e for e in self._entries.fetch_entries(worker_id) if e.is_open]
        if not open_entries:
            return None
        return max(open_entries, key=lambda e: e.clock_in_time)

    def clock_in(self, worker_id: int, *, now: datetime | None = None) -> TimeClockEntry:
        now = now or self._clock.now()

        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise WorkerNotFoundError(f"Worker {worker_id} does not exist")
        if not worker.is_active:
            raise ValidationError(f"Worker {worker_id} is not active")

        if self.current_entry(worker_id) is not None:
            raise AlreadyClockedInError("Worker is already clocked in")

        entry = self._entries.create_entry(
            worker_id=worker_id,
            work_date=now.date(),
            clock_in_time=now,
            is_active=True,
        )
        logger.info("worker %s clocked in at %s (entry %s)", worker_id, now.isoformat(), entry.entry_id)
        return entry

    def clock_out(self, worker_id: int, *, now: datetime | None = None) -> TimeClockEntry:
        now = now or self._clock.now()

        if not self._workers.get_by_id(worker_id):
            raise WorkerNotFoundError(f"Worker {worker_id} does not exist")

        entry = self.current_entry(worker_id)
        if entry is None:
            raise NotClockedInError("Worker is not currently clocked in")

        stored = self._entries.write_entry(entry.close(now))
        logger.info("worker %s clocked out at %s (entry %s)", worker_id, now.isoformat(), entry.entry_id)
        return stored
