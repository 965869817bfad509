"""
Domain Events - Things that happened to todos.

Events are immutable records of something that occurred.
They enable loose coupling and audit trails.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from .value_objects import utc_now


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class TodoCreated(DomainEvent):
    """Event: A todo was persisted for the first time."""

    todo_id: Optional[str] = None
    title: str = ""
    priority: str = "medium"


@dataclass(frozen=True)
class TodoUpdated(DomainEvent):
    """Event: Fields of a todo changed."""

    todo_id: Optional[str] = None
    changes: dict = field(default_factory=dict)


@dataclass(frozen=True)
class TodoCompleted(DomainEvent):
    """Event: A todo was marked completed."""

    todo_id: Optional[str] = None


@dataclass(frozen=True)
class TodoReopened(DomainEvent):
    """Event: A completed todo was marked active again."""

    todo_id: Optional[str] = None


@dataclass(frozen=True)
class TodoDeleted(DomainEvent):
    """Event: A todo was removed."""

    todo_id: Optional[str] = None


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    Handlers subscribed to DomainEvent receive every event.
    """

    def __init__(self):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: list[DomainEvent] = []
        self.logger = logging.getLogger("EventBus")

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)
        self.logger.debug(f"Published {event.event_type}")

        # Call specific handlers
        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Call catch-all handlers
        if type(event) is not DomainEvent:
            for handler in self._handlers.get(DomainEvent, []):
                handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()
