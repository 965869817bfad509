"""
Store State - Immutable state snapshots published by the todo store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.domain.entities import Todo


class StoreStatus(str, Enum):
    """Lifecycle status of the most recent store action."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class StoreStats:
    """Counts derived from the current collection."""

    total: int = 0
    active: int = 0
    completed: int = 0


@dataclass(frozen=True)
class StoreState:
    """
    Complete store state.

    `filter` keeps the raw value passed to set_filter(); values other
    than all/active/completed behave as all.
    """

    todos: tuple[Todo, ...] = ()
    filter: str = "all"
    status: StoreStatus = StoreStatus.IDLE
    error: Optional[str] = None
