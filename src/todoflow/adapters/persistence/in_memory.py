"""
In-Memory Repository - TodoRepositoryPort backed by a dict.

Useful for tests and throwaway sessions; nothing survives the process.
"""

import logging
import threading
from typing import Any, Mapping, Optional
from uuid import uuid4

from ...core.domain.entities import Todo
from ...core.exceptions import NotFoundError
from ...core.ports.todo_repository import TodoRepositoryPort


class InMemoryTodoRepository(TodoRepositoryPort):
    """Dict-backed repository; ids are uuid4 strings."""

    def __init__(self, todos: Optional[list[Todo]] = None):
        """
        Initialize the repository.

        Args:
            todos: Optional seed todos (those without an id get one)
        """
        self._todos: dict[str, Todo] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger("InMemoryTodoRepository")

        for todo in todos or []:
            todo_id = todo.id or str(uuid4())
            self._todos[todo_id] = todo.with_id(todo_id)

    @property
    def name(self) -> str:
        return "memory"

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_all(self) -> list[Todo]:
        with self._lock:
            return list(reversed(self._todos.values()))

    def get_active(self) -> list[Todo]:
        return [t for t in self.get_all() if not t.completed]

    def get_completed(self) -> list[Todo]:
        return [t for t in self.get_all() if t.completed]

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        with self._lock:
            return self._todos.get(todo_id)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def create(self, todo: Todo) -> str:
        todo_id = str(uuid4())
        with self._lock:
            self._todos[todo_id] = todo.with_id(todo_id)
        self.logger.debug(f"Stored todo {todo_id}")
        return todo_id

    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[Todo]:
        with self._lock:
            existing = self._todos.get(todo_id)
            if existing is None:
                raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)
            updated = existing.apply_changes(changes)
            self._todos[todo_id] = updated
        return updated

    def delete(self, todo_id: str) -> None:
        with self._lock:
            if self._todos.pop(todo_id, None) is None:
                raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)
