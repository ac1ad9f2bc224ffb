from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.exceptions import ConcurrentWriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeClockEntry
from .repository import TimeEntryRepository

_COLUMNS = """
    entry_id, worker_id, work_date, clock_in_time, clock_out_time,
    is_active, needs_review, note, version
"""


def _to_entry(r: dict) -> TimeClockEntry:
    return TimeClockEntry(
        entry_id=int(r["entry_id"]),
        worker_id=int(r["worker_id"]),
        work_date=r["work_date"],
        clock_in_time=r["clock_in_time"],
        clock_out_time=r.get("clock_out_time"),
        is_active=bool(r["is_active"]),
        needs_review=bool(r.get("needs_review") or 0),
        note=r.get("note"),
        version=int(r.get("version") or 0),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_entries(self, worker_id: int) -> Sequence[TimeClockEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_clock_entries
                WHERE worker_id=%s
                ORDER BY clock_in_time ASC
                """,
                (int(worker_id),),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def fetch_active_entries(self) -> Sequence[TimeClockEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_clock_entries
                WHERE is_active=1
                ORDER BY worker_id ASC, clock_in_time ASC
                """
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def get_entry(self, entry_id: int) -> Optional[TimeClockEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM time_clock_entries WHERE entry_id=%s",
                (int(entry_id),),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def create_entry(
        self,
        *,
        worker_id: int,
        work_date: date,
        clock_in_time: datetime,
        is_active: bool = True,
    ) -> TimeClockEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_clock_entries(worker_id, work_date, clock_in_time, is_active, needs_review, version)
                VALUES(%s,%s,%s,%s,0,0)
                """,
                (int(worker_id), work_date, clock_in_time, int(is_active)),
            )
            entry_id = int(cur.lastrowid)

        return TimeClockEntry(
            entry_id=entry_id,
            worker_id=int(worker_id),
            work_date=work_date,
            clock_in_time=clock_in_time,
            is_active=is_active,
        )

    def write_entry(self, entry: TimeClockEntry) -> TimeClockEntry:
        # Compare-and-set on version; clock_in_time is never written.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_clock_entries
                SET clock_out_time=%s, is_active=%s, needs_review=%s, note=%s, version=version+1
                WHERE entry_id=%s AND version=%s
                """,
                (
                    entry.clock_out_time,
                    int(entry.is_active),
                    int(entry.needs_review),
                    entry.note,
                    int(entry.entry_id),
                    int(entry.version),
                ),
            )
            if cur.rowcount == 0:
                raise ConcurrentWriteError(f"Time entry {entry.entry_id} changed since version {entry.version}")

        return replace(entry, version=entry.version + 1)
