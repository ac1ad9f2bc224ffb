from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..core.enums import AnomalyKind
from ..timeclock.model import TimeClockEntry
from .model import Anomaly


def _classify(entry: TimeClockEntry, *, now: datetime, max_shift: timedelta, latest_open_id: Optional[int]) -> Optional[AnomalyKind]:
    if entry.clock_out_time is not None:
        if entry.clock_out_time < entry.clock_in_time:
            return AnomalyKind.NEGATIVE_DURATION
        if entry.is_active:
            return AnomalyKind.CLOSED_BUT_ACTIVE
        return None

    if not entry.is_active:
        return AnomalyKind.MISSING_CLOCK_OUT

    if entry.entry_id != latest_open_id:
        return AnomalyKind.CONCURRENT_OPEN_SESSION
    if now - entry.clock_in_time > max_shift:
        return AnomalyKind.STALE_OPEN_SESSION
    return None


def detect_anomalies(
    entries: Iterable[TimeClockEntry],
    *,
    now: datetime,
    max_shift: timedelta,
) -> list[Anomaly]:
    """Scan entries of any number of workers; most recent clock-in first.

    Each entry yields at most one anomaly. Of a worker's open sessions only the
    most recently opened one may stay open; it is still reported when stale.
    """

    by_worker: dict[int, list[TimeClockEntry]] = defaultdict(list)
    for entry in entries:
        by_worker[entry.worker_id].append(entry)

    found: list[Anomaly] = []
    for worker_entries in by_worker.values():
        worker_entries.sort(key=lambda e: (e.clock_in_time, e.entry_id))
        open_entries = [e for e in worker_entries if e.is_open]
        latest_open_id = open_entries[-1].entry_id if open_entries else None

        for idx, entry in enumerate(worker_entries):
            kind = _classify(entry, now=now, max_shift=max_shift, latest_open_id=latest_open_id)
            if kind is None:
                continue
            next_clock_in = worker_entries[idx + 1].clock_in_time if idx + 1 < len(worker_entries) else None
            found.append(Anomaly(kind=kind, entry=entry, next_clock_in=next_clock_in))

    found.sort(key=lambda a: (a.entry.clock_in_time, a.entry.entry_id), reverse=True)
    return found
