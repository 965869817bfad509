"""
Todo Commands - Create, update, delete and toggle todos.

Each command returns the canonical post-operation todo (None for
delete) so callers holding a speculative copy can reconcile with it.
"""

from typing import Any, Mapping, Optional

from ...core.domain.entities import Todo
from ...core.domain.events import (
    EventBus,
    TodoCompleted,
    TodoCreated,
    TodoDeleted,
    TodoReopened,
    TodoUpdated,
)
from ...core.domain.value_objects import Priority, parse_timestamp
from ...core.ports.todo_repository import TodoRepositoryPort
from ..validation import (
    validate_changes,
    validate_due_date,
    validate_priority,
    validate_title,
    validate_todo_id,
)
from .base import Command


class CreateTodoCommand(Command):
    """Command to create a new todo."""

    def __init__(
        self,
        repository: TodoRepositoryPort,
        title: str,
        priority: Any = None,
        due_date: Any = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(repository, event_bus)
        self.title = title
        self.priority = priority
        self.due_date = due_date

    @property
    def name(self) -> str:
        return "Create todo"

    def validate(self) -> Optional[str]:
        return (
            validate_title(self.title)
            or validate_priority(self.priority)
            or validate_due_date(self.due_date)
        )

    def _execute(self) -> Todo:
        # New todos are always incomplete
        todo = Todo(
            title=self.title,
            completed=False,
            priority=Priority.parse(self.priority),
            due_date=parse_timestamp(self.due_date),
        )
        todo_id = self.repository.create(todo)
        created = todo.with_id(todo_id)

        self.logger.info(f"Created todo {todo_id}: {created.title}")
        self._publish(TodoCreated(
            todo_id=todo_id,
            title=created.title,
            priority=created.priority.value,
        ))
        return created


class UpdateTodoCommand(Command):
    """Command to apply a partial update to an existing todo."""

    def __init__(
        self,
        repository: TodoRepositoryPort,
        todo_id: str,
        changes: Mapping[str, Any],
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(repository, event_bus)
        self.todo_id = todo_id
        self.changes = changes

    @property
    def name(self) -> str:
        return f"Update todo {self.todo_id}"

    def validate(self) -> Optional[str]:
        return validate_todo_id(self.todo_id) or validate_changes(self.changes)

    def _execute(self) -> Todo:
        existing = self._require(self.todo_id)
        updated = existing.apply_changes(self.changes)

        persisted = {
            key: getattr(updated, key) for key in self.changes
        }
        stored = self.repository.update(self.todo_id, persisted)
        canonical = stored if stored is not None else updated

        self.logger.info(f"Updated todo {self.todo_id}: {', '.join(sorted(persisted))}")
        self._publish(TodoUpdated(todo_id=self.todo_id, changes=dict(persisted)))
        return canonical


class DeleteTodoCommand(Command):
    """Command to delete an existing todo."""

    def __init__(
        self,
        repository: TodoRepositoryPort,
        todo_id: str,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(repository, event_bus)
        self.todo_id = todo_id

    @property
    def name(self) -> str:
        return f"Delete todo {self.todo_id}"

    def validate(self) -> Optional[str]:
        return validate_todo_id(self.todo_id)

    def _execute(self) -> None:
        self._require(self.todo_id)
        self.repository.delete(self.todo_id)

        self.logger.info(f"Deleted todo {self.todo_id}")
        self._publish(TodoDeleted(todo_id=self.todo_id))


class ToggleTodoCommand(Command):
    """Command to flip the completion state of a todo."""

    def __init__(
        self,
        repository: TodoRepositoryPort,
        todo_id: str,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(repository, event_bus)
        self.todo_id = todo_id

    @property
    def name(self) -> str:
        return f"Toggle todo {self.todo_id}"

    def validate(self) -> Optional[str]:
        return validate_todo_id(self.todo_id)

    def _execute(self) -> Todo:
        existing = self._require(self.todo_id)
        toggled = existing.toggle()

        stored = self.repository.update(self.todo_id, {"completed": toggled.completed})
        canonical = stored if stored is not None else toggled

        state = "completed" if canonical.completed else "active"
        self.logger.info(f"Toggled todo {self.todo_id} to {state}")
        if canonical.completed:
            self._publish(TodoCompleted(todo_id=self.todo_id))
        else:
            self._publish(TodoReopened(todo_id=self.todo_id))
        return canonical
