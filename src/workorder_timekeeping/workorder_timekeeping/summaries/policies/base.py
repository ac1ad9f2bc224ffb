from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OvertimeDecision:
    is_overtime: bool
    overtime_hours: float
    regular_hours: float


class OvertimePolicy(ABC):
    """Strategy Pattern: classify a week's hours into regular and overtime."""

    @abstractmethod
    def evaluate(self, total_hours: float) -> OvertimeDecision:
        raise NotImplementedError
