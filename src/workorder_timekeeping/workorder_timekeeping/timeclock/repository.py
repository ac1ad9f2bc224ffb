from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import TimeClockEntry


class TimeEntryRepository(Protocol):
    """Durable record of time-clock entries.

    Implementations raise StoreUnavailable when the backing store cannot be
    reached and ConcurrentWriteError when write_entry() finds a stored version
    different from entry.version.
    """

    def fetch_entries(self, worker_id: int) -> Sequence[TimeClockEntry]:
        raise NotImplementedError

    def fetch_active_entries(self) -> Sequence[TimeClockEntry]:
        raise NotImplementedError

    def get_entry(self, entry_id: int) -> Optional[TimeClockEntry]:
        raise NotImplementedError

    def create_entry(
        self,
        *,
        worker_id: int,
        work_date: date,
        clock_in_time: datetime,
        is_active: bool = True,
    ) -> TimeClockEntry:
        raise NotImplementedError

    def write_entry(self, entry: TimeClockEntry) -> TimeClockEntry:
        """Persist clock-out / active / review fields; returns the stored entry."""

        raise NotImplementedError
