"""
Todo Mapper - Converts todos to and from wire DTOs and storage records.

DTOs are the camelCase JSON objects exchanged with the todo API.
Records are SQLite rows, where `completed` is stored as 0/1.
"""

from typing import Any, Mapping, Optional

from ...core.domain.entities import Todo
from ...core.domain.value_objects import (
    Priority,
    format_timestamp,
    parse_timestamp,
)
from ...core.exceptions import TransportError, ValidationError


class TodoMapper:
    """Mapping between Todo entities and external representations."""

    # -------------------------------------------------------------------------
    # API DTOs
    # -------------------------------------------------------------------------

    @staticmethod
    def to_dto(todo: Todo) -> dict[str, Any]:
        dto: dict[str, Any] = {
            "id": todo.id or "",
            "title": todo.title,
            "completed": todo.completed,
            "priority": todo.priority.value,
            "createdAt": format_timestamp(todo.created_at),
        }
        if todo.due_date is not None:
            dto["dueDate"] = format_timestamp(todo.due_date)
        return dto

    @staticmethod
    def from_dto(dto: Mapping[str, Any]) -> Todo:
        """
        Build a todo from an API DTO.

        Raises:
            TransportError: If the payload is malformed.
        """
        completed = dto.get("completed", False)
        if not isinstance(completed, bool):
            raise TransportError(
                f"Invalid completed value {completed!r} for todo {dto.get('id')}"
            )
        try:
            return Todo(
                title=dto["title"],
                completed=completed,
                created_at=parse_timestamp(dto["createdAt"]),
                id=dto.get("id") or None,
                priority=dto.get("priority") or Priority.MEDIUM,
                due_date=parse_timestamp(dto.get("dueDate")),
            )
        except (KeyError, TypeError, ValidationError) as e:
            raise TransportError(f"Malformed todo payload: {e}", cause=e)

    @staticmethod
    def changes_to_dto(changes: Mapping[str, Any]) -> dict[str, Any]:
        """Convert a partial update to the API request body."""
        body: dict[str, Any] = {}
        if "title" in changes:
            body["title"] = changes["title"]
        if "completed" in changes:
            body["completed"] = bool(changes["completed"])
        if "priority" in changes:
            body["priority"] = Priority.parse(changes["priority"]).value
        if "due_date" in changes:
            body["dueDate"] = format_timestamp(parse_timestamp(changes["due_date"]))
        return body

    # -------------------------------------------------------------------------
    # Storage Records
    # -------------------------------------------------------------------------

    @staticmethod
    def to_record(todo: Todo, todo_id: Optional[str] = None) -> dict[str, Any]:
        return {
            "id": todo_id or todo.id,
            "title": todo.title,
            "completed": 1 if todo.completed else 0,
            "priority": todo.priority.value,
            "created_at": format_timestamp(todo.created_at),
            "due_date": format_timestamp(todo.due_date),
        }

    @staticmethod
    def from_record(record: Mapping[str, Any]) -> Todo:
        completed = record["completed"]
        if completed not in (0, 1):
            raise TransportError(
                f"Invalid completed value {completed!r} for todo {record['id']}"
            )
        return Todo(
            title=record["title"],
            completed=completed == 1,
            created_at=parse_timestamp(record["created_at"]),
            id=record["id"],
            priority=record["priority"] or Priority.MEDIUM,
            due_date=parse_timestamp(record["due_date"]),
        )

    @staticmethod
    def changes_to_record(changes: Mapping[str, Any]) -> dict[str, Any]:
        """Convert a partial update to column values."""
        columns: dict[str, Any] = {}
        if "title" in changes:
            columns["title"] = changes["title"]
        if "completed" in changes:
            columns["completed"] = 1 if changes["completed"] else 0
        if "priority" in changes:
            columns["priority"] = Priority.parse(changes["priority"]).value
        if "due_date" in changes:
            columns["due_date"] = format_timestamp(parse_timestamp(changes["due_date"]))
        return columns
