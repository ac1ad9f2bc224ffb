from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import hours_between
from ...core.enums import AnomalyKind
from ..model import TimeClockEntry
from .base import ElapsedTime, IntervalCalculator


class StandardIntervalCalculator(IntervalCalculator):
    """Standard rule: (out - in), or (now - in) for an open session, not below 0.

    An entry that is neither closed nor active counts 0 hours, as does a closed
    entry whose clock-out precedes its clock-in; both come back with an anomaly.
    """

    def elapsed(self, entry: TimeClockEntry, now: datetime) -> ElapsedTime:
        if entry.clock_out_time is not None:
            hours = hours_between(entry.clock_in_time, entry.clock_out_time)
            if hours < 0:
                return ElapsedTime(hours=0.0, anomaly=AnomalyKind.NEGATIVE_DURATION)
            return ElapsedTime(hours=hours)

        if not entry.is_active:
            return ElapsedTime(hours=0.0, anomaly=AnomalyKind.MISSING_CLOCK_OUT)

        return ElapsedTime(hours=max(hours_between(entry.clock_in_time, now), 0.0))
