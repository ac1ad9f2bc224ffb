from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..common.datetime_utils import end_of_day
from ..core.constants import DEFAULT_MAX_SHIFT_HOURS
from ..core.exceptions import ValidationError
from ..timeclock.model import TimeClockEntry
from .model import Anomaly


@dataclass(frozen=True)
class ClosingTimePolicy:
    """Where a repair closes a session the worker never clocked out of.

    The earliest of: end of the clock-in day, clock-in + max shift, the
    worker's next clock-in, and now. Never before clock-in.
    """

    max_shift_hours: float = DEFAULT_MAX_SHIFT_HOURS

    def __post_init__(self):
        if self.max_shift_hours <= 0:
            raise ValidationError("Max shift must be positive")

    @property
    def max_shift(self) -> timedelta:
        return timedelta(hours=self.max_shift_hours)

    def closing_time(self, entry: TimeClockEntry, *, now: datetime, next_clock_in: datetime | None = None) -> datetime:
        candidates = [end_of_day(entry.clock_in_time), entry.clock_in_time + self.max_shift, now]
        if next_clock_in is not None:
            candidates.append(next_clock_in)
        return max(min(candidates), entry.clock_in_time)

    def for_anomaly(self, anomaly: Anomaly, *, now: datetime) -> datetime:
        return self.closing_time(anomaly.entry, now=now, next_clock_in=anomaly.next_clock_in)
