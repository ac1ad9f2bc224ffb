from __future__ import annotations

from enum import Enum


class WorkOrderStatus(str, Enum):
    """Work order lifecycle states as stored by the work-order system."""

    CREATED = "created"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AnomalyKind(str, Enum):
    """Inconsistent clock states found by the repair scan."""

    STALE_OPEN_SESSION = "STALE_OPEN_SESSION"
    CONCURRENT_OPEN_SESSION = "CONCURRENT_OPEN_SESSION"
    NEGATIVE_DURATION = "NEGATIVE_DURATION"
    MISSING_CLOCK_OUT = "MISSING_CLOCK_OUT"
    CLOSED_BUT_ACTIVE = "CLOSED_BUT_ACTIVE"

    @property
    def needs_review(self) -> bool:
        return self in (AnomalyKind.NEGATIVE_DURATION, AnomalyKind.MISSING_CLOCK_OUT)


class RepairOutcome(str, Enum):
    FIXED = "FIXED"
    FLAGGED_FOR_REVIEW = "FLAGGED_FOR_REVIEW"
    SKIPPED = "SKIPPED"
    ABANDONED = "ABANDONED"
