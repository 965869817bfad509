"""
Services - Command and query facades over the repository.

TodoCommandService handles every write, TodoQueryService every read.
Both are synchronous; the store runs them off the event loop.
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.domain.entities import Todo
from ..core.domain.events import EventBus
from ..core.ports.todo_repository import TodoRepositoryPort
from .commands import (
    CreateTodoCommand,
    DeleteTodoCommand,
    ToggleTodoCommand,
    UpdateTodoCommand,
)
from .queries import (
    GetActiveTodosQuery,
    GetAllTodosQuery,
    GetCompletedTodosQuery,
    GetFilteredTodosQuery,
    GetTodoByIdQuery,
    GetTodoStatsQuery,
    TodoStats,
)


class TodoCommandService:
    """
    Executes validated write operations.

    Every method either returns the canonical todo or raises one of
    ValidationError, NotFoundError or TransportError.
    """

    def __init__(
        self,
        repository: TodoRepositoryPort,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the command service.

        Args:
            repository: Todo repository port
            event_bus: Optional event bus shared by all commands
        """
        self.repository = repository
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("TodoCommandService")

    def create_todo(
        self,
        title: str,
        priority: Any = "medium",
        due_date: Any = None,
    ) -> Todo:
        return CreateTodoCommand(
            repository=self.repository,
            title=title,
            priority=priority,
            due_date=due_date,
            event_bus=self.event_bus,
        ).execute()

    def update_todo(self, todo_id: str, changes: Mapping[str, Any]) -> Todo:
        return UpdateTodoCommand(
            repository=self.repository,
            todo_id=todo_id,
            changes=changes,
            event_bus=self.event_bus,
        ).execute()

    def delete_todo(self, todo_id: str) -> None:
        DeleteTodoCommand(
            repository=self.repository,
            todo_id=todo_id,
            event_bus=self.event_bus,
        ).execute()

    def toggle_todo(self, todo_id: str) -> Todo:
        return ToggleTodoCommand(
            repository=self.repository,
            todo_id=todo_id,
            event_bus=self.event_bus,
        ).execute()


class TodoQueryService:
    """Executes read operations; never writes to the repository."""

    def __init__(self, repository: TodoRepositoryPort):
        self.repository = repository
        self.logger = logging.getLogger("TodoQueryService")

    def get_all_todos(self) -> list[Todo]:
        todos = GetAllTodosQuery(self.repository).execute()
        self.logger.debug(f"Fetched {len(todos)} todos from {self.repository.name}")
        return todos

    def get_active_todos(self) -> list[Todo]:
        return GetActiveTodosQuery(self.repository).execute()

    def get_completed_todos(self) -> list[Todo]:
        return GetCompletedTodosQuery(self.repository).execute()

    def get_todo_by_id(self, todo_id: str) -> Todo:
        return GetTodoByIdQuery(self.repository).execute(todo_id)

    def get_filtered_todos(
        self,
        todo_filter: str = "all",
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
        now: Optional[datetime] = None,
    ) -> list[Todo]:
        return GetFilteredTodosQuery(self.repository).execute(
            todo_filter, sort_by=sort_by, sort_order=sort_order, now=now
        )

    def get_todo_stats(self, now: Optional[datetime] = None) -> TodoStats:
        return GetTodoStatsQuery(self.repository).execute(now)
