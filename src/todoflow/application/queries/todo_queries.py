"""
Todo Queries - Read-only handlers over the repository.

Handlers never write to the repository and validate nothing beyond the
shape of an identifier.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.domain.entities import Todo
from ...core.domain.ordering import sort_by_priority
from ...core.domain.specifications import (
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    HighPriorityTodoSpecification,
    OverdueTodoSpecification,
)
from ...core.domain.value_objects import TodoFilter
from ...core.exceptions import NotFoundError, ValidationError
from ...core.ports.todo_repository import TodoRepositoryPort
from ..validation import validate_todo_id


SORT_FIELDS = ("priority", "urgency", "created_at")


@dataclass(frozen=True)
class TodoStats:
    """Aggregate counts over the stored todos."""

    total: int = 0
    active: int = 0
    completed: int = 0
    overdue: int = 0
    high_priority: int = 0


class GetAllTodosQuery:
    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository

    def execute(self) -> list[Todo]:
        return self.repository.get_all()


class GetActiveTodosQuery:
    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository

    def execute(self) -> list[Todo]:
        return self.repository.get_active()


class GetCompletedTodosQuery:
    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository

    def execute(self) -> list[Todo]:
        return self.repository.get_completed()


class GetTodoByIdQuery:
    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository

    def execute(self, todo_id: str) -> Todo:
        """
        Raises:
            ValidationError: If the id is empty
            NotFoundError: If no todo has this id
        """
        error = validate_todo_id(todo_id)
        if error:
            raise ValidationError(error)

        todo = self.repository.get_by_id(todo_id)
        if todo is None:
            raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)
        return todo


class GetFilteredTodosQuery:
    """Filter by visibility, then optionally sort."""

    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository

    def execute(
        self,
        todo_filter: str = "all",
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        now: Optional[datetime] = None,
    ) -> list[Todo]:
        if sort_by is not None and sort_by not in SORT_FIELDS:
            raise ValidationError(
                f"Invalid sort field: {sort_by!r} (expected one of {', '.join(SORT_FIELDS)})"
            )
        if sort_order not in ("asc", "desc"):
            raise ValidationError(f"Invalid sort order: {sort_order!r}")

        selected = TodoFilter.from_string(todo_filter)
        if selected is TodoFilter.ACTIVE:
            todos = self.repository.find_by_specification(ActiveTodoSpecification())
        elif selected is TodoFilter.COMPLETED:
            todos = self.repository.find_by_specification(CompletedTodoSpecification())
        else:
            todos = self.repository.get_all()

        if sort_by in ("priority", "urgency"):
            todos = sort_by_priority(todos, now)
            if sort_order == "desc":
                todos.reverse()
        elif sort_by == "created_at":
            todos = sorted(
                todos,
                key=lambda t: t.created_at,
                reverse=(sort_order == "desc"),
            )
        return list(todos)


class GetTodoStatsQuery:
    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository

    def execute(self, now: Optional[datetime] = None) -> TodoStats:
        todos = self.repository.get_all()

        active = ActiveTodoSpecification()
        completed = CompletedTodoSpecification()
        overdue = OverdueTodoSpecification(now)
        high_priority = HighPriorityTodoSpecification()

        return TodoStats(
            total=len(todos),
            active=sum(1 for t in todos if active.is_satisfied_by(t)),
            completed=sum(1 for t in todos if completed.is_satisfied_by(t)),
            overdue=sum(1 for t in todos if overdue.is_satisfied_by(t)),
            high_priority=sum(1 for t in todos if high_priority.is_satisfied_by(t)),
        )
