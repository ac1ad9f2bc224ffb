from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class TimeClockEntry:
    """Domain entity: one clock-in, optionally paired with a clock-out.

    clock_in_time never changes after creation. clock_out_time, is_active and the
    review fields change only through close() / deactivate(), which both the
    clock-out and the repair path use. version is bumped by the store on each
    successful write and is used to detect concurrent writes.
    """

    entry_id: int
    worker_id: int
    work_date: date
    clock_in_time: datetime
    clock_out_time: Optional[datetime] = None
    is_active: bool = False
    needs_review: bool = False
    note: Optional[str] = None
    version: int = 0

    @property
    def is_open(self) -> bool:
        return self.is_active and self.clock_out_time is None

    def close(self, at: datetime, *, needs_review: bool = False, note: Optional[str] = None) -> "TimeClockEntry":
        """Return the entry closed at ``at`` (never earlier than clock-in)."""
        clock_out = at if at >= self.clock_in_time else self.clock_in_time
        return replace(
            self,
            clock_out_time=clock_out,
            is_active=False,
            needs_review=self.needs_review or needs_review,
            note=note if note is not None else self.note,
        )

    def deactivate(self, *, note: Optional[str] = None) -> "TimeClockEntry":
        return replace(self, is_active=False, note=note if note is not None else self.note)
