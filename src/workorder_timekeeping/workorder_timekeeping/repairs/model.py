from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AnomalyKind, RepairOutcome
from ..timeclock.model import TimeClockEntry


@dataclass(frozen=True)
class Anomaly:
    kind: AnomalyKind
    entry: TimeClockEntry
    # clock-in of the same worker's next session, bounds any synthesized clock-out
    next_clock_in: Optional[datetime] = None


@dataclass(frozen=True)
class RepairAction:
    entry_id: int
    worker_id: int
    kind: AnomalyKind
    outcome: RepairOutcome
    clock_out_time: Optional[datetime] = None


@dataclass
class RepairReport:
    entries_fixed: int = 0
    entries_flagged_for_review: int = 0
    abandoned_entry_ids: list[int] = field(default_factory=list)
    actions: list[RepairAction] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.entries_fixed or self.entries_flagged_for_review or self.abandoned_entry_ids)

    def record(self, action: RepairAction) -> None:
        self.actions.append(action)
        if action.outcome == RepairOutcome.FIXED:
            self.entries_fixed += 1
        elif action.outcome == RepairOutcome.FLAGGED_FOR_REVIEW:
            self.entries_flagged_for_review += 1
        elif action.outcome == RepairOutcome.ABANDONED:
            self.abandoned_entry_ids.append(action.entry_id)
