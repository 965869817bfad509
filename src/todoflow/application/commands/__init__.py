"""
Commands - Individual write operations that can be executed.

Commands represent write operations and:
- Validate their input before touching persistence
- Return the canonical todo after the operation
- Publish a domain event on success
"""

from .base import Command
from .todo_commands import (
    CreateTodoCommand,
    UpdateTodoCommand,
    DeleteTodoCommand,
    ToggleTodoCommand,
)

__all__ = [
    "Command",
    "CreateTodoCommand",
    "UpdateTodoCommand",
    "DeleteTodoCommand",
    "ToggleTodoCommand",
]
