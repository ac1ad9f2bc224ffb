from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import WorkOrderStatus


@dataclass(frozen=True)
class WorkOrder:
    """Domain entity: Work order (read-only for the engine)."""

    work_order_id: int
    title: str
    status: WorkOrderStatus = WorkOrderStatus.CREATED
