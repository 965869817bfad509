"""
Persistence Adapters - Local storage implementations of the repository port.
"""

from .in_memory import InMemoryTodoRepository
from .mapping import TodoMapper
from .sqlite import SqliteTodoRepository

__all__ = ["InMemoryTodoRepository", "SqliteTodoRepository", "TodoMapper"]
