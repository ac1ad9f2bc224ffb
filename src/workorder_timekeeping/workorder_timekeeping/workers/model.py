from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    """Domain entity: Worker.

    Note: plain data object owned by the worker store; the engine only reads it.
    """

    worker_id: int
    name: str
    position: Optional[str] = None
    is_active: bool = True
