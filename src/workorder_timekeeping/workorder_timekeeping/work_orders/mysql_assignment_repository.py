from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import WorkOrderStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import WorkOrder
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    """Reads work order assignments as [assigned_at, unassigned_at) windows."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_active_assignment(self, worker_id: int, at: datetime) -> Optional[WorkOrder]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT wo.work_order_id, wo.title, wo.status
                FROM work_order_assignments a
                JOIN work_orders wo ON wo.work_order_id = a.work_order_id
                WHERE a.worker_id=%s
                  AND a.assigned_at <= %s
                  AND (a.unassigned_at IS NULL OR a.unassigned_at > %s)
                ORDER BY a.assigned_at DESC
                LIMIT 1
                """,
                (int(worker_id), at, at),
            )
            r = fetchone(cur)
            if not r:
                return None
            return WorkOrder(
                work_order_id=int(r["work_order_id"]),
                title=r["title"],
                status=WorkOrderStatus(r["status"]),
            )
