"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Persistence: in-memory and SQLite repositories
- API: todo REST API repository
- Config: Environment variables
"""

from .api import ApiTodoRepository, TodoApiClient
from .config import EnvironmentConfigProvider
from .factory import build_store, create_repository
from .persistence import InMemoryTodoRepository, SqliteTodoRepository, TodoMapper

__all__ = [
    "ApiTodoRepository",
    "TodoApiClient",
    "EnvironmentConfigProvider",
    "InMemoryTodoRepository",
    "SqliteTodoRepository",
    "TodoMapper",
    "build_store",
    "create_repository",
]
