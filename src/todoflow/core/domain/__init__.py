"""
Domain - Entities, value objects, specifications and ordering rules.
"""

from .entities import Todo, UPDATABLE_FIELDS
from .value_objects import (
    Priority,
    TodoFilter,
    normalize_title,
    parse_timestamp,
    format_timestamp,
    utc_now,
)
from .ordering import (
    CompletionCheck,
    priority_weight,
    is_overdue,
    urgency_score,
    can_complete,
    sort_by_priority,
)
from .specifications import (
    Specification,
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    OverdueTodoSpecification,
    HighPriorityTodoSpecification,
)
from .events import (
    DomainEvent,
    TodoCreated,
    TodoUpdated,
    TodoCompleted,
    TodoReopened,
    TodoDeleted,
    EventBus,
)

__all__ = [
    "Todo",
    "UPDATABLE_FIELDS",
    "Priority",
    "TodoFilter",
    "normalize_title",
    "parse_timestamp",
    "format_timestamp",
    "utc_now",
    "CompletionCheck",
    "priority_weight",
    "is_overdue",
    "urgency_score",
    "can_complete",
    "sort_by_priority",
    "Specification",
    "ActiveTodoSpecification",
    "CompletedTodoSpecification",
    "OverdueTodoSpecification",
    "HighPriorityTodoSpecification",
    "DomainEvent",
    "TodoCreated",
    "TodoUpdated",
    "TodoCompleted",
    "TodoReopened",
    "TodoDeleted",
    "EventBus",
]
