from __future__ import annotations

from dataclasses import dataclass

from ...core.constants import DEFAULT_OVERTIME_THRESHOLD_HOURS
from ...core.exceptions import ValidationError
from .base import OvertimeDecision, OvertimePolicy


@dataclass(frozen=True)
class WeeklyThresholdPolicy(OvertimePolicy):
    """Hours above a fixed weekly threshold are overtime."""

    threshold: float = DEFAULT_OVERTIME_THRESHOLD_HOURS

    def __post_init__(self):
        if self.threshold < 0:
            raise ValidationError("Overtime threshold must not be negative")

    def evaluate(self, total_hours: float) -> OvertimeDecision:
        overtime = max(0.0, total_hours - self.threshold)
        return OvertimeDecision(
            is_overtime=overtime > 0,
            overtime_hours=overtime,
            regular_hours=min(max(total_hours, 0.0), self.threshold),
        )
