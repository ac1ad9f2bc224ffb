from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import DEFAULT_REPAIR_RETRIES
from ..core.enums import AnomalyKind, RepairOutcome
from ..core.exceptions import ConcurrentWriteError
from ..timeclock.model import TimeClockEntry
from ..timeclock.repository import TimeEntryRepository
from ..workers.repository import WorkerRepository
from .detector import detect_anomalies
from .model import Anomaly, RepairAction, RepairReport
from .policy import ClosingTimePolicy

logger = logging.getLogger(__name__)

_NOTES = {
    AnomalyKind.STALE_OPEN_SESSION: "Closed by clock repair: session exceeded max shift",
    AnomalyKind.CONCURRENT_OPEN_SESSION: "Closed by clock repair: newer session already open",
    AnomalyKind.NEGATIVE_DURATION: "Zeroed by clock repair: clock-out before clock-in, needs review",
    AnomalyKind.MISSING_CLOCK_OUT: "Zeroed by clock repair: closed without clock-out, needs review",
    AnomalyKind.CLOSED_BUT_ACTIVE: "Deactivated by clock repair: clocked out but still active",
}


class ClockRepairService:
    """Operator-triggered "fix clock issues" action.

    Every repair is a read-modify-write of a single entry through the same
    write path as clock-out. A conflicting concurrent write is retried against
    the freshly read entry once, then abandoned and reported.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        workers: WorkerRepository,
        *,
        policy: ClosingTimePolicy | None = None,
        clock: Clock | None = None,
        retries: int = DEFAULT_REPAIR_RETRIES,
    ):
        self._entries = entries
        self._workers = workers
        self._policy = policy or ClosingTimePolicy()
        self._clock = clock or SystemClock()
        self._retries = max(int(retries), 0)

    def _snapshot(self) -> list[TimeClockEntry]:
        seen: dict[int, TimeClockEntry] = {}
        for worker in self._workers.fetch_all_workers():
            for entry in self._entries.fetch_entries(worker.worker_id):
                seen[entry.entry_id] = entry
        # open sessions of workers missing from the worker store
        for entry in self._entries.fetch_active_entries():
            seen.setdefault(entry.entry_id, entry)
        return list(seen.values())

    def detect(self, reference: Optional[datetime] = None) -> list[Anomaly]:
        now = reference or self._clock.now()
        return detect_anomalies(self._snapshot(), now=now, max_shift=self._policy.max_shift)

    def _fresh_anomaly(self, entry_id: int, worker_id: int, now: datetime) -> Optional[Anomaly]:
        worker_entries = self._entries.fetch_entries(worker_id)
        for anomaly in detect_anomalies(worker_entries, now=now, max_shift=self._policy.max_shift):
            if anomaly.entry.entry_id == entry_id:
                return anomaly
        return None

    def _repaired(self, anomaly: Anomaly, now: datetime) -> TimeClockEntry:
        entry = anomaly.entry
        note = _NOTES[anomaly.kind]
        if anomaly.kind.needs_review:
            return entry.close(entry.clock_in_time, needs_review=True, note=note)
        if anomaly.kind == AnomalyKind.CLOSED_BUT_ACTIVE:
            return entry.deactivate(note=note)
        return entry.close(self._policy.for_anomaly(anomaly, now=now), note=note)

    def _repair_one(self, anomaly: Anomaly, now: datetime) -> RepairAction:
        entry_id = anomaly.entry.entry_id
        worker_id = anomaly.entry.worker_id

        for attempt in range(self._retries + 1):
            fresh = self._fresh_anomaly(entry_id, worker_id, now)
            if fresh is None:
                return RepairAction(entry_id, worker_id, anomaly.kind, RepairOutcome.SKIPPED)

            repaired = self._repaired(fresh, now)
            try:
                stored = self._entries.write_entry(repaired)
            except ConcurrentWriteError as exc:
                logger.warning("repair of entry %s conflicted (attempt %d): %s", entry_id, attempt + 1, exc)
                continue

            outcome = RepairOutcome.FLAGGED_FOR_REVIEW if fresh.kind.needs_review else RepairOutcome.FIXED
            logger.info(
                "repaired entry %s of worker %s: %s -> %s (clock_out=%s)",
                entry_id,
                worker_id,
                fresh.kind.value,
                outcome.value,
                stored.clock_out_time,
            )
            return RepairAction(entry_id, worker_id, fresh.kind, outcome, stored.clock_out_time)

        logger.error("repair of entry %s abandoned after %d attempts", entry_id, self._retries + 1)
        return RepairAction(entry_id, worker_id, anomaly.kind, RepairOutcome.ABANDONED)

    def repair_anomalies(self, reference: Optional[datetime] = None) -> RepairReport:
        """Detect and repair every anomaly, most recent first.

        reference is the shared "now" of the whole batch. StoreUnavailable
        propagates; conflicts on single entries do not.
        """
        now = reference or self._clock.now()
        report = RepairReport()
        for anomaly in detect_anomalies(self._snapshot(), now=now, max_shift=self._policy.max_shift):
            action = self._repair_one(anomaly, now)
            if action.outcome != RepairOutcome.SKIPPED:
                report.record(action)

        logger.info(
            "clock repair finished: fixed=%d flagged=%d abandoned=%d",
            report.entries_fixed,
            report.entries_flagged_for_review,
            len(report.abandoned_entry_ids),
        )
        return report
