from __future__ import annotations

from collections import Counter
from datetime import datetime

import pytest

from workorder_timekeeping.core.enums import AnomalyKind, RepairOutcome
from workorder_timekeeping.core.exceptions import StoreUnavailable


def _active_counts(entries):
    return Counter(e.worker_id for e in entries.all() if e.is_active)


def test_stale_session_is_closed_at_bound_not_now(container, entries):
    stale = entries.add(1, datetime(2025, 6, 9, 8, 0))  # Monday, now is Wednesday 10:00

    report = container.repair_service.repair_anomalies()

    fixed = entries.get_entry(stale.entry_id)
    assert report.entries_fixed == 1
    assert report.entries_flagged_for_review == 0
    assert fixed.clock_out_time == datetime(2025, 6, 10, 0, 0)
    assert not fixed.is_active
    assert report.actions[0].kind == AnomalyKind.STALE_OPEN_SESSION


def test_repaired_stale_session_counts_bounded_hours(container, entries, assignments, tomato):
    assignments.assign(1, tomato, datetime(2025, 6, 1))
    entries.add(1, datetime(2025, 6, 9, 8, 0))

    container.repair_service.repair_anomalies()
    summary = container.summary_service.weekly_summary(1, datetime(2025, 6, 11).date())

    assert summary.total_hours == pytest.approx(16.0)


def test_concurrent_sessions_keep_most_recent_open(container, entries):
    older = entries.add(2, datetime(2025, 6, 11, 6, 0))
    newer = entries.add(2, datetime(2025, 6, 11, 7, 0))

    report = container.repair_service.repair_anomalies()

    assert report.entries_fixed == 1
    assert entries.get_entry(newer.entry_id).is_active
    closed = entries.get_entry(older.entry_id)
    assert closed.clock_out_time == datetime(2025, 6, 11, 7, 0)
    assert _active_counts(entries)[2] == 1


def test_negative_duration_is_zeroed_and_flagged(container, entries):
    bad = entries.add(1, datetime(2025, 6, 10, 16, 0), datetime(2025, 6, 10, 8, 0))

    report = container.repair_service.repair_anomalies()

    fixed = entries.get_entry(bad.entry_id)
    assert report.entries_flagged_for_review == 1
    assert report.entries_fixed == 0
    assert fixed.clock_out_time == fixed.clock_in_time
    assert fixed.needs_review


def test_missing_clock_out_is_flagged(container, entries):
    bad = entries.add(1, datetime(2025, 6, 10, 8, 0), is_active=False)

    report = container.repair_service.repair_anomalies()

    assert report.entries_flagged_for_review == 1
    assert entries.get_entry(bad.entry_id).needs_review


def test_repair_is_idempotent(container, entries):
    entries.add(1, datetime(2025, 6, 9, 8, 0))
    entries.add(2, datetime(2025, 6, 11, 6, 0))
    entries.add(2, datetime(2025, 6, 11, 7, 0))
    entries.add(1, datetime(2025, 6, 10, 16, 0), datetime(2025, 6, 10, 8, 0))

    first = container.repair_service.repair_anomalies()
    writes = entries.writes
    second = container.repair_service.repair_anomalies()

    assert not first.is_empty
    assert second.is_empty
    assert second.entries_fixed == 0
    assert entries.writes == writes


def test_single_active_session_after_repair(container, entries):
    for hour in (1, 3, 5, 7):
        entries.add(1, datetime(2025, 6, 11, hour, 0))
    entries.add(2, datetime(2025, 6, 8, 9, 0))
    entries.add(2, datetime(2025, 6, 10, 9, 0))

    container.repair_service.repair_anomalies()

    assert all(count <= 1 for count in _active_counts(entries).values())


def test_conflict_is_retried_once_against_fresh_entry(container, entries):
    stale = entries.add(1, datetime(2025, 6, 9, 8, 0))
    entries.conflicts[stale.entry_id] = 1

    report = container.repair_service.repair_anomalies()

    assert report.entries_fixed == 1
    assert report.abandoned_entry_ids == []
    assert not entries.get_entry(stale.entry_id).is_active


def test_repeated_conflict_is_abandoned_and_reported(container, entries):
    stale = entries.add(1, datetime(2025, 6, 9, 8, 0))
    entries.conflicts[stale.entry_id] = 2

    report = container.repair_service.repair_anomalies()

    assert report.entries_fixed == 0
    assert report.abandoned_entry_ids == [stale.entry_id]
    assert report.actions[0].outcome == RepairOutcome.ABANDONED
    assert entries.get_entry(stale.entry_id).is_active


def test_entry_clocked_out_meanwhile_is_skipped(container, entries):
    stale = entries.add(1, datetime(2025, 6, 9, 8, 0))
    anomalies = container.repair_service.detect()
    assert [a.entry.entry_id for a in anomalies] == [stale.entry_id]

    # worker clocks out through the normal path before the repair runs
    container.time_clock_service.clock_out(1, now=datetime(2025, 6, 9, 17, 0))
    report = container.repair_service.repair_anomalies()

    assert report.is_empty
    assert entries.get_entry(stale.entry_id).clock_out_time == datetime(2025, 6, 9, 17, 0)


def test_store_failure_propagates(container, entries):
    entries.add(1, datetime(2025, 6, 9, 8, 0))
    entries.unavailable = True

    with pytest.raises(StoreUnavailable):
        container.repair_service.repair_anomalies()
