"""
Queries - Read-only operations.
"""

from .todo_queries import (
    SORT_FIELDS,
    TodoStats,
    GetAllTodosQuery,
    GetActiveTodosQuery,
    GetCompletedTodosQuery,
    GetTodoByIdQuery,
    GetFilteredTodosQuery,
    GetTodoStatsQuery,
)

__all__ = [
    "SORT_FIELDS",
    "TodoStats",
    "GetAllTodosQuery",
    "GetActiveTodosQuery",
    "GetCompletedTodosQuery",
    "GetTodoByIdQuery",
    "GetFilteredTodosQuery",
    "GetTodoStatsQuery",
]
