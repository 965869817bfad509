"""
SQLite Repository - TodoRepositoryPort backed by a SQLite database.

`completed` is stored as INTEGER 0/1 so it can be indexed; the mapper
converts it back to a bool on every read.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Mapping, Optional, Union
from uuid import uuid4

from ...core.domain.entities import Todo
from ...core.domain.specifications import (
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    Specification,
)
from ...core.exceptions import NotFoundError, TransportError
from ...core.ports.todo_repository import TodoRepositoryPort
from .mapping import TodoMapper


SCHEMA = """
CREATE TABLE IF NOT EXISTS todos (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    completed INTEGER NOT NULL DEFAULT 0 CHECK (completed IN (0, 1)),
    priority TEXT NOT NULL DEFAULT 'medium',
    created_at TEXT NOT NULL,
    due_date TEXT
);
CREATE INDEX IF NOT EXISTS idx_todos_completed ON todos (completed);
"""

COLUMNS = "id, title, completed, priority, created_at, due_date"


class SqliteTodoRepository(TodoRepositoryPort):
    """
    SQLite implementation of the todo repository.

    One connection is shared across threads and guarded by a lock,
    since the store calls the repository from worker threads.
    """

    def __init__(self, path: Union[str, Path] = ":memory:"):
        """
        Open (and create if needed) the database.

        Args:
            path: Database file path, or ":memory:"
        """
        self.path = str(path)
        self.logger = logging.getLogger("SqliteTodoRepository")
        self._lock = threading.Lock()

        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise TransportError(f"Cannot open database {self.path}: {e}", cause=e)

        self.logger.debug(f"Opened database {self.path}")

    @property
    def name(self) -> str:
        return "sqlite"

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_all(self) -> list[Todo]:
        return self._select("")

    def get_active(self) -> list[Todo]:
        return self._select("WHERE completed = 0")

    def get_completed(self) -> list[Todo]:
        return self._select("WHERE completed = 1")

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        rows = self._query(f"SELECT {COLUMNS} FROM todos WHERE id = ?", (todo_id,))
        return TodoMapper.from_record(rows[0]) if rows else None

    def find_by_specification(self, specification: Specification) -> list[Todo]:
        # Push the common filters down to an indexed query
        if isinstance(specification, ActiveTodoSpecification):
            return self.get_active()
        if isinstance(specification, CompletedTodoSpecification):
            return self.get_completed()
        return super().find_by_specification(specification)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def create(self, todo: Todo) -> str:
        todo_id = str(uuid4())
        record = TodoMapper.to_record(todo, todo_id)
        self._write(
            f"INSERT INTO todos ({COLUMNS}) VALUES "
            "(:id, :title, :completed, :priority, :created_at, :due_date)",
            record,
        )
        self.logger.debug(f"Inserted todo {todo_id}")
        return todo_id

    def update(self, todo_id: str, changes: Mapping[str, Any]) -> Optional[Todo]:
        columns = TodoMapper.changes_to_record(changes)
        if columns:
            assignments = ", ".join(f"{column} = :{column}" for column in columns)
            changed = self._write(
                f"UPDATE todos SET {assignments} WHERE id = :id",
                {**columns, "id": todo_id},
            )
            if changed == 0:
                raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)

        updated = self.get_by_id(todo_id)
        if updated is None:
            raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)
        return updated

    def delete(self, todo_id: str) -> None:
        if self._write("DELETE FROM todos WHERE id = ?", (todo_id,)) == 0:
            raise NotFoundError(f"Todo with ID {todo_id} not found", todo_id=todo_id)

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._conn.close()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _select(self, where: str) -> list[Todo]:
        rows = self._query(f"SELECT {COLUMNS} FROM todos {where} ORDER BY rowid DESC")
        return [TodoMapper.from_record(row) for row in rows]

    def _query(
        self,
        sql: str,
        params: Union[tuple, Mapping[str, Any]] = (),
    ) -> list[sqlite3.Row]:
        with self._lock:
            try:
                return self._conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise TransportError(f"Database error: {e}", cause=e)

    def _write(
        self,
        sql: str,
        params: Union[tuple, Mapping[str, Any]] = (),
    ) -> int:
        """Execute a statement and commit; returns the affected row count."""
        with self._lock:
            try:
                cursor = self._conn.execute(sql, params)
                self._conn.commit()
                return cursor.rowcount
            except sqlite3.Error as e:
                self._conn.rollback()
                raise TransportError(f"Database error: {e}", cause=e)
