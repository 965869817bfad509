"""
Store - Client-side optimistic mutation store.
"""

from .state import StoreState, StoreStats, StoreStatus
from .todo_store import FALLBACK_MESSAGES, TodoStore

__all__ = [
    "TodoStore",
    "StoreState",
    "StoreStats",
    "StoreStatus",
    "FALLBACK_MESSAGES",
]
