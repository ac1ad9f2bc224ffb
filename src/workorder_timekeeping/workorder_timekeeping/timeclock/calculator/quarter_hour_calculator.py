from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import round_to_quarter_hour
from ..model import TimeClockEntry
from .base import ElapsedTime, IntervalCalculator
from .standard_calculator import StandardIntervalCalculator


class QuarterHourIntervalCalculator(IntervalCalculator):
    """Standard rule, then rounded to the nearest 15 minutes per entry."""

    def __init__(self, inner: IntervalCalculator | None = None):
        self._inner = inner or StandardIntervalCalculator()

    def elapsed(self, entry: TimeClockEntry, now: datetime) -> ElapsedTime:
        result = self._inner.elapsed(entry, now)
        return ElapsedTime(hours=round_to_quarter_hour(result.hours), anomaly=result.anomaly)
