from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import WorkOrder


class AssignmentRepository(Protocol):
    def fetch_active_assignment(self, worker_id: int, at: datetime) -> Optional[WorkOrder]:
        """Work order the worker was assigned to at the given instant, if any."""

        raise NotImplementedError
