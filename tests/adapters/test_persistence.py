"""Tests for the in-memory and SQLite repositories."""

import sqlite3
from datetime import datetime, timezone

import pytest

from todoflow.adapters.persistence import InMemoryTodoRepository, SqliteTodoRepository
from todoflow.core.domain import (
    HighPriorityTodoSpecification,
    Priority,
    Todo,
)
from todoflow.core.exceptions import NotFoundError, TransportError


CREATED = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    if request.param == "memory":
        yield InMemoryTodoRepository()
    else:
        repo = SqliteTodoRepository(tmp_path / "todos.db")
        yield repo
        repo.close()


class TestRepositoryContract:
    """Behavior shared by every local repository."""

    def test_create_assigns_id(self, repository):
        todo_id = repository.create(Todo(title="Buy milk", created_at=CREATED))

        stored = repository.get_by_id(todo_id)
        assert stored.id == todo_id
        assert stored.title == "Buy milk"
        assert stored.created_at == CREATED

    def test_ids_are_unique(self, repository):
        ids = {repository.create(Todo(title=f"Task {i}")) for i in range(5)}
        assert len(ids) == 5

    def test_get_all_newest_first(self, repository):
        first = repository.create(Todo(title="First"))
        second = repository.create(Todo(title="Second"))

        assert [t.id for t in repository.get_all()] == [second, first]

    def test_active_and_completed(self, repository):
        open_id = repository.create(Todo(title="Open"))
        done_id = repository.create(Todo(title="Done", completed=True))

        assert [t.id for t in repository.get_active()] == [open_id]
        assert [t.id for t in repository.get_completed()] == [done_id]

    def test_completed_is_a_bool(self, repository):
        done_id = repository.create(Todo(title="Done", completed=True))
        assert repository.get_by_id(done_id).completed is True

    def test_get_missing_returns_none(self, repository):
        assert repository.get_by_id("missing") is None

    def test_update(self, repository):
        todo_id = repository.create(Todo(title="Buy milk"))

        updated = repository.update(todo_id, {
            "title": "Buy bread",
            "completed": True,
            "priority": "high",
            "due_date": "2024-02-01T00:00:00Z",
        })

        assert updated.title == "Buy bread"
        assert updated.completed is True
        assert updated.priority is Priority.HIGH
        assert updated.due_date == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert repository.get_by_id(todo_id) == updated

    def test_update_missing(self, repository):
        with pytest.raises(NotFoundError):
            repository.update("missing", {"title": "Anything"})

    def test_delete(self, repository):
        todo_id = repository.create(Todo(title="Buy milk"))

        repository.delete(todo_id)

        assert repository.get_by_id(todo_id) is None

    def test_delete_missing(self, repository):
        with pytest.raises(NotFoundError):
            repository.delete("missing")

    def test_find_by_specification(self, repository):
        repository.create(Todo(title="Low", priority="low"))
        high_id = repository.create(Todo(title="High", priority="high"))

        found = repository.find_by_specification(HighPriorityTodoSpecification())

        assert [t.id for t in found] == [high_id]


class TestSqliteTodoRepository:
    """SQLite-specific behavior."""

    def test_completed_stored_as_integer(self, tmp_path):
        path = tmp_path / "todos.db"
        repo = SqliteTodoRepository(path)
        repo.create(Todo(title="Done", completed=True))
        repo.create(Todo(title="Open"))
        repo.close()

        conn = sqlite3.connect(path)
        values = sorted(row[0] for row in conn.execute("SELECT completed FROM todos"))
        conn.close()

        assert values == [0, 1]

    def test_data_survives_reopen(self, tmp_path):
        path = tmp_path / "todos.db"
        repo = SqliteTodoRepository(path)
        todo_id = repo.create(Todo(title="Persist me", priority="low"))
        repo.close()

        reopened = SqliteTodoRepository(path)
        assert reopened.get_by_id(todo_id).title == "Persist me"
        reopened.close()

    def test_invalid_completed_value_is_rejected(self, tmp_path):
        path = tmp_path / "todos.db"
        SqliteTodoRepository(path).close()

        conn = sqlite3.connect(path)
        conn.execute("DROP TABLE todos")
        conn.execute(
            "CREATE TABLE todos (id TEXT PRIMARY KEY, title TEXT, completed INTEGER, "
            "priority TEXT, created_at TEXT, due_date TEXT)"
        )
        conn.execute(
            "INSERT INTO todos VALUES ('x', 'Broken', 2, 'low', '2024-01-01T00:00:00Z', NULL)"
        )
        conn.commit()
        conn.close()

        repo = SqliteTodoRepository(path)
        with pytest.raises(TransportError, match="Invalid completed value"):
            repo.get_all()
        repo.close()

    def test_unopenable_path(self, tmp_path):
        with pytest.raises(TransportError):
            SqliteTodoRepository(tmp_path / "missing-dir" / "todos.db")

    def test_name(self):
        repo = SqliteTodoRepository()
        assert repo.name == "sqlite"
        repo.close()


class TestInMemoryTodoRepository:
    """In-memory specific behavior."""

    def test_seed_todos(self):
        repo = InMemoryTodoRepository([Todo(title="Seeded", id="s1"), Todo(title="No id")])

        assert repo.get_by_id("s1").title == "Seeded"
        assert len(repo.get_all()) == 2
        assert all(t.id for t in repo.get_all())
