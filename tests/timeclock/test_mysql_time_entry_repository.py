from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from workorder_timekeeping.core.exceptions import ConcurrentWriteError, StoreUnavailable
from workorder_timekeeping.timeclock.model import TimeClockEntry
from workorder_timekeeping.timeclock.mysql_time_entry_repository import MySQLTimeEntryRepository


class FakeCursor:
    def __init__(self, *, rows=None, rowcount=1, error=None):
        self._rows = rows or []
        self.rowcount = rowcount
        self.lastrowid = 7
        self._error = error
        self.executed = []

    def execute(self, sql, params=None):
        if self._error:
            raise self._error
        self.executed.append((sql, params))

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def _entry(version=3):
    return TimeClockEntry(
        entry_id=5,
        worker_id=1,
        work_date=date(2025, 6, 9),
        clock_in_time=datetime(2025, 6, 9, 8, 0),
        clock_out_time=datetime(2025, 6, 9, 16, 0),
        is_active=False,
        version=version,
    )


def test_fetch_entries_maps_rows():
    row = {
        "entry_id": 5,
        "worker_id": 1,
        "work_date": date(2025, 6, 9),
        "clock_in_time": datetime(2025, 6, 9, 8, 0),
        "clock_out_time": None,
        "is_active": 1,
        "needs_review": 0,
        "note": None,
        "version": 2,
    }
    repo = MySQLTimeEntryRepository(FakeFactory(FakeConn(FakeCursor(rows=[row]))))

    (entry,) = repo.fetch_entries(1)

    assert entry.is_open
    assert entry.version == 2


def test_write_entry_bumps_version_and_commits():
    conn = FakeConn(FakeCursor(rowcount=1))
    repo = MySQLTimeEntryRepository(FakeFactory(conn))

    stored = repo.write_entry(_entry(version=3))

    assert stored.version == 4
    assert conn.committed


def test_write_entry_with_stale_version_conflicts():
    conn = FakeConn(FakeCursor(rowcount=0))
    repo = MySQLTimeEntryRepository(FakeFactory(conn))

    with pytest.raises(ConcurrentWriteError):
        repo.write_entry(_entry())
    assert conn.rolled_back


def test_driver_errors_surface_as_store_unavailable():
    conn = FakeConn(FakeCursor(error=mysql.connector.Error("gone away")))
    repo = MySQLTimeEntryRepository(FakeFactory(conn))

    with pytest.raises(StoreUnavailable):
        repo.fetch_entries(1)
    assert conn.rolled_back
