"""Tests for todo specifications."""

from datetime import datetime, timedelta, timezone

from todoflow.core.domain import (
    ActiveTodoSpecification,
    CompletedTodoSpecification,
    HighPriorityTodoSpecification,
    OverdueTodoSpecification,
    Todo,
)


NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


class TestSpecifications:
    """Tests for the built-in specifications and their combinators."""

    def test_active_and_completed_partition(self):
        todos = [Todo(title="Open"), Todo(title="Done", completed=True)]
        active, completed = ActiveTodoSpecification(), CompletedTodoSpecification()

        for todo in todos:
            assert active(todo) != completed(todo)

    def test_overdue_uses_supplied_now(self):
        old = Todo(title="Old", created_at=NOW - timedelta(days=8))
        spec = OverdueTodoSpecification(now=NOW)

        assert spec.is_satisfied_by(old)
        assert not OverdueTodoSpecification(now=NOW - timedelta(days=2)).is_satisfied_by(old)

    def test_and_or_invert(self):
        high_open = Todo(title="Urgent", priority="high")
        high_done = Todo(title="Shipped", priority="high", completed=True)
        low_open = Todo(title="Someday", priority="low")

        spec = HighPriorityTodoSpecification() & ActiveTodoSpecification()
        assert spec(high_open)
        assert not spec(high_done)
        assert not spec(low_open)

        either = HighPriorityTodoSpecification() | CompletedTodoSpecification()
        assert either(high_done)
        assert not either(low_open)

        assert (~ActiveTodoSpecification())(high_done)
