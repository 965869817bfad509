"""
API Repository - TodoRepositoryPort backed by the todo REST API.
"""

import logging
from typing import Any, Mapping, Optional

from ...core.domain.entities import Todo
from ...core.domain.specifications import (
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    Specification,
)
from ...core.exceptions import NotFoundError, TransportError
from ...core.ports.todo_repository import TodoRepositoryPort
from ..persistence.mapping import TodoMapper
from .client import TodoApiClient


class ApiTodoRepository(TodoRepositoryPort):
    """
    Remote implementation of the todo repository.

    Wraps TodoApiClient and maps DTOs to domain entities.
    """

    def __init__(self, client: TodoApiClient):
        self._client = client
        self.logger = logging.getLogger("ApiTodoRepository")

    @property
    def name(self) -> str:
        return "api"

    @property
    def client(self) -> TodoApiClient:
        return self._client

    def test_connection(self) -> bool:
        return self._client.test_connection()

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_all(self) -> list[Todo]:
        return self._to_todos(self._client.list_todos())

    def get_active(self) -> list[Todo]:
        return self._to_todos(self._client.list_active_todos())

    def get_completed(self) -> list[Todo]:
        return self._to_todos(self._client.list_completed_todos())

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        try:
            data = self._client.get_todo(todo_id)
        except NotFoundError:
            return None
        return TodoMapper.from_dto(data) if data else None

    def find_by_specification(self, specification: Specification) -> list[Todo]:
        if isinstance(specification, ActiveTodoSpecification):
            return self.get_active()
        if isinstance(specification, CompletedTodoSpecification):
            return self.get_completed()
        return super().find_by_specification(specification)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def create(self, todo: Todo) -> str:
        dto = TodoMapper.to_dto(todo)
        body = {key: dto[key] for key in ("title", "priority", "dueDate") if key in dto}

        data = self._client.create_todo(body)
        if not isinstance(data, dict) or not data.get("id"):
            raise TransportError("Create response did not include an id")

        self.logger.debug(f"Created todo {data['id']}")
        return str(data["id"])

    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[Todo]:
        data = self._client.update_todo(todo_id, TodoMapper.changes_to_dto(changes))
        if isinstance(data, dict):
            return TodoMapper.from_dto(data)
        return None

    def delete(self, todo_id: str) -> None:
        self._client.delete_todo(todo_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _to_todos(self, payload: Any) -> list[Todo]:
        if not isinstance(payload, list):
            raise TransportError("Expected a list of todos")
        return [TodoMapper.from_dto(item) for item in payload]
