"""
Todo Repository Port - Abstract interface for todo persistence.

Implementations may back onto a relational store, a remote API or plain
memory. They must preserve the boolean `completed` semantics even when
the storage encodes it differently.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ..domain.entities import Todo
from ..domain.specifications import Specification


class TodoRepositoryPort(ABC):
    """
    Abstract interface for todo storage.

    Errors from the underlying storage are raised as TransportError;
    operations on a missing id raise NotFoundError.
    """

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the backend name (e.g., 'memory', 'sqlite', 'api')."""
        ...

    def test_connection(self) -> bool:
        """Check the backend is reachable. Local backends always are."""
        return True

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_all(self) -> list[Todo]:
        """Get every todo, most recent first."""
        ...

    @abstractmethod
    def get_active(self) -> list[Todo]:
        ...

    @abstractmethod
    def get_completed(self) -> list[Todo]:
        ...

    @abstractmethod
    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        """
        Get a single todo.

        Returns:
            The todo, or None if no record has this id.
        """
        ...

    def find_by_specification(self, specification: Specification) -> list[Todo]:
        """Get every todo satisfying a specification."""
        return [todo for todo in self.get_all() if specification.is_satisfied_by(todo)]

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @abstractmethod
    def create(self, todo: Todo) -> str:
        """
        Persist a new todo.

        Returns:
            The id assigned by the store.
        """
        ...

    @abstractmethod
    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[Todo]:
        """
        Apply a partial update.

        Args:
            todo_id: Target id
            changes: Field values keyed by title, completed, priority, due_date

        Returns:
            The stored todo when the backend returns one, otherwise None.
        """
        ...

    @abstractmethod
    def delete(self, todo_id: str) -> None:
        ...
