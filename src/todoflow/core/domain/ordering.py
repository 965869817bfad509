"""
Ordering - Urgency and priority rules over todos.

Pure functions evaluated against a supplied `now`; when it is omitted
the current UTC time is used.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from .entities import Todo
from .value_objects import Priority, ensure_utc, utc_now


OVERDUE_AFTER = timedelta(days=7)
AGE_STEP = timedelta(days=7)
MAX_AGE_MULTIPLIER = 3
DEFAULT_PRIORITY_WEIGHT = 2


@dataclass(frozen=True)
class CompletionCheck:
    """Outcome of asking whether a todo may be completed."""

    can_complete: bool
    reason: Optional[str] = None


def _resolve_now(now: Optional[datetime]) -> datetime:
    return utc_now() if now is None else ensure_utc(now)


def priority_weight(priority: Any) -> int:
    """Weight for a priority; undefined or invalid priorities weigh 2."""
    key = getattr(priority, "value", priority)
    if not isinstance(key, str):
        return DEFAULT_PRIORITY_WEIGHT
    try:
        return Priority(key.lower()).weight
    except ValueError:
        return DEFAULT_PRIORITY_WEIGHT


def is_overdue(todo: Todo, now: Optional[datetime] = None) -> bool:
    """
    True if an open todo is older than seven days.

    A todo created exactly seven days ago is not yet overdue.
    """
    if todo.completed:
        return False
    return _resolve_now(now) - todo.created_at > OVERDUE_AFTER


def urgency_score(todo: Todo, now: Optional[datetime] = None) -> int:
    """
    Rank an open todo by priority weight and age.

    score = weight * (1 + min(full weeks since creation, 3)).
    Completed todos score 0; todos dated in the future count as new.
    """
    if todo.completed:
        return 0
    age = max(_resolve_now(now) - todo.created_at, timedelta(0))
    weeks = min(age // AGE_STEP, MAX_AGE_MULTIPLIER)
    return priority_weight(getattr(todo, "priority", None)) * (1 + weeks)


def can_complete(todo: Todo) -> CompletionCheck:
    if todo.completed:
        return CompletionCheck(can_complete=False, reason="Todo is already completed")
    return CompletionCheck(can_complete=True)


def sort_by_priority(
    todos: Iterable[Todo],
    now: Optional[datetime] = None,
) -> list[Todo]:
    """
    Order todos for presentation.

    Open todos come first by descending urgency, ties keeping their
    original relative order; completed todos follow in original order.
    The input is never modified.
    """
    current = _resolve_now(now)
    items = list(todos)
    open_todos = [t for t in items if not t.completed]
    done_todos = [t for t in items if t.completed]

    # sorted() is stable, so equal scores keep input order
    open_todos = sorted(open_todos, key=lambda t: -urgency_score(t, current))
    return open_todos + done_todos
