"""
Domain Entities - The todo item and its state transitions.

Entities are immutable: every transition returns a new instance built
through the constructor, so holders of an earlier reference never see
a change and every new value is re-validated.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..exceptions import TodoAlreadyCompletedError, ValidationError
from .value_objects import (
    Priority,
    ensure_utc,
    normalize_title,
    parse_timestamp,
    utc_now,
)


UPDATABLE_FIELDS = frozenset({"title", "completed", "priority", "due_date"})


@dataclass(frozen=True)
class Todo:
    """
    A single todo item.

    `id` stays None until the item is first persisted and never
    changes after that.
    """

    title: str
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    id: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", normalize_title(self.title))
        object.__setattr__(self, "completed", bool(self.completed))
        object.__setattr__(self, "priority", Priority.parse(self.priority))

        if not isinstance(self.created_at, datetime):
            raise ValidationError("created_at must be a datetime")
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))

        if self.due_date is not None:
            object.__setattr__(self, "due_date", parse_timestamp(self.due_date))

        if self.id is not None:
            todo_id = str(self.id).strip()
            if not todo_id:
                raise ValidationError("Todo id cannot be empty")
            object.__setattr__(self, "id", todo_id)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def is_persisted(self) -> bool:
        """True once the todo has been assigned an id."""
        return self.id is not None

    @property
    def can_be_completed(self) -> bool:
        return not self.completed

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def copy(self) -> "Todo":
        """Structural copy: a new, equal instance."""
        return replace(self)

    def with_id(self, todo_id: str) -> "Todo":
        """Return this todo carrying a persistence id."""
        return replace(self, id=todo_id)

    def toggle(self) -> "Todo":
        return replace(self, completed=not self.completed)

    def complete(self) -> "Todo":
        """
        Return a completed version of this todo.

        Raises:
            TodoAlreadyCompletedError: If it is already completed.
        """
        if not self.can_be_completed:
            raise TodoAlreadyCompletedError(todo_id=self.id)
        return replace(self, completed=True)

    def update_title(self, title: str) -> "Todo":
        return replace(self, title=title)

    def update_priority(self, priority: Any) -> "Todo":
        return replace(self, priority=Priority.parse(priority))

    def update_due_date(self, due_date: Any) -> "Todo":
        return replace(self, due_date=parse_timestamp(due_date))

    def apply_changes(self, changes: Mapping[str, Any]) -> "Todo":
        """
        Apply a partial update through the transition methods.

        Args:
            changes: Mapping with keys among title, completed, priority
                and due_date. A due_date of None clears the date.

        Raises:
            ValidationError: On unknown keys or invalid values.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown fields: {', '.join(sorted(unknown))}", todo_id=self.id
            )

        updated = self
        if "title" in changes:
            updated = updated.update_title(changes["title"])
        if "priority" in changes:
            updated = updated.update_priority(changes["priority"])
        if "completed" in changes:
            completed = changes["completed"]
            if not isinstance(completed, bool):
                raise ValidationError("completed must be a boolean", todo_id=self.id)
            if completed and not updated.completed:
                updated = updated.complete()
            elif not completed and updated.completed:
                updated = updated.toggle()
        if "due_date" in changes:
            updated = updated.update_due_date(changes["due_date"])
        return updated
