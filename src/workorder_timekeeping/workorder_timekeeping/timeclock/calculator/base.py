from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AnomalyKind
from ..model import TimeClockEntry


@dataclass(frozen=True)
class ElapsedTime:
    hours: float
    anomaly: Optional[AnomalyKind] = None


class IntervalCalculator(ABC):
    """Calculator interface (Strategy Pattern for entry durations)."""

    @abstractmethod
    def elapsed(self, entry: TimeClockEntry, now: datetime) -> ElapsedTime:
        raise NotImplementedError
