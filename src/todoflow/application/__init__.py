"""
Application Layer - Use cases, services and the client store.

This layer contains:
- commands/: Write operations (CreateTodo, UpdateTodo, DeleteTodo, ToggleTodo)
- queries/: Read-only query handlers
- services: Command and query facades over the repository
- store/: Optimistic mutation store consumed by user interfaces
"""

from .commands import (
    Command,
    CreateTodoCommand,
    UpdateTodoCommand,
    DeleteTodoCommand,
    ToggleTodoCommand,
)
from .queries import TodoStats
from .services import TodoCommandService, TodoQueryService
from .store import TodoStore, StoreState, StoreStats, StoreStatus

__all__ = [
    "Command",
    "CreateTodoCommand",
    "UpdateTodoCommand",
    "DeleteTodoCommand",
    "ToggleTodoCommand",
    "TodoStats",
    "TodoCommandService",
    "TodoQueryService",
    "TodoStore",
    "StoreState",
    "StoreStats",
    "StoreStatus",
]
