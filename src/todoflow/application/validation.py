"""
Validation - Input checks run by commands before touching persistence.

Each check returns an error message, or None when the input is valid.
The rules themselves live with the domain value objects.
"""

from typing import Any, Mapping, Optional

from ..core.domain.entities import UPDATABLE_FIELDS
from ..core.domain.value_objects import Priority, normalize_title, parse_timestamp
from ..core.exceptions import ValidationError


def _message(check, value: Any) -> Optional[str]:
    try:
        check(value)
    except ValidationError as e:
        return e.message
    return None


def validate_todo_id(todo_id: Any) -> Optional[str]:
    if not isinstance(todo_id, str) or not todo_id.strip():
        return "ID cannot be empty"
    return None


def validate_title(title: Any) -> Optional[str]:
    return _message(normalize_title, title)


def validate_priority(priority: Any) -> Optional[str]:
    return _message(Priority.parse, priority)


def validate_due_date(due_date: Any) -> Optional[str]:
    return _message(parse_timestamp, due_date)


def validate_changes(changes: Any) -> Optional[str]:
    """Check a partial update mapping field by field."""
    if not isinstance(changes, Mapping):
        return "Changes must be a mapping"

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        return f"Unknown fields: {', '.join(sorted(unknown))}"

    if "title" in changes:
        error = validate_title(changes["title"])
        if error:
            return error
    if "priority" in changes:
        error = validate_priority(changes["priority"])
        if error:
            return error
    if "completed" in changes and not isinstance(changes["completed"], bool):
        return "completed must be a boolean"
    if "due_date" in changes:
        error = validate_due_date(changes["due_date"])
        if error:
            return error
    return None
