"""
Exceptions - Centralized exception hierarchy for todoflow.

Every error raised on purpose by the domain, the application services
or the adapters derives from TodoflowError, so callers can tell
recognized failures apart from unexpected ones.
"""

from typing import Optional


class TodoflowError(Exception):
    """Base exception for all todoflow errors."""

    def __init__(
        self,
        message: str,
        todo_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.todo_id = todo_id
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ValidationError(TodoflowError):
    """Input fails an entity invariant before any persistence attempt."""
    pass


class TodoAlreadyCompletedError(ValidationError):
    """Completing a todo that is already completed."""

    def __init__(self, todo_id: Optional[str] = None):
        super().__init__("Todo is already completed", todo_id=todo_id)


class NotFoundError(TodoflowError):
    """Target id has no corresponding record."""
    pass


class TransportError(TodoflowError):
    """Network, timeout or storage backend failure."""
    pass


class UnknownError(TodoflowError):
    """Any unexpected failure, normalized to a fixed message."""
    pass


class ConfigError(TodoflowError):
    """Invalid or incomplete configuration."""
    pass


__all__ = [
    "TodoflowError",
    "ValidationError",
    "TodoAlreadyCompletedError",
    "NotFoundError",
    "TransportError",
    "UnknownError",
    "ConfigError",
]
