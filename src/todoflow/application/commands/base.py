"""
Command Base - Shared behavior for write operations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ...core.domain.entities import Todo
from ...core.domain.events import DomainEvent, EventBus
from ...core.exceptions import NotFoundError, ValidationError
from ...core.ports.todo_repository import TodoRepositoryPort


class Command(ABC):
    """
    Base class for commands.

    A command validates its input first; only a valid command reaches
    the repository. Subclasses implement validate() and _execute().
    """

    def __init__(
        self,
        repository: TodoRepositoryPort,
        event_bus: Optional[EventBus] = None,
    ):
        self.repository = repository
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable command name."""
        ...

    def validate(self) -> Optional[str]:
        """
        Validate the command input.

        Returns:
            Error message if invalid, None if valid
        """
        return None

    def execute(self) -> Any:
        """
        Validate, then run the command.

        Raises:
            ValidationError: If validate() reports a problem
            NotFoundError: If the target todo does not exist
            TransportError: If the repository fails
        """
        error = self.validate()
        if error:
            self.logger.warning(f"{self.name} rejected: {error}")
            raise ValidationError(error, todo_id=getattr(self, "todo_id", None))

        result = self._execute()
        self.logger.debug(f"{self.name} completed")
        return result

    @abstractmethod
    def _execute(self) -> Any:
        ...

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require(self, todo_id: str) -> Todo:
        """Fetch the current record or raise NotFoundError."""
        existing = self.repository.get_by_id(todo_id)
        if existing is None:
            raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)
        return existing

    def _publish(self, event: DomainEvent) -> None:
        self.event_bus.publish(event)
