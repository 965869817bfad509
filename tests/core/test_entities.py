"""Tests for the Todo entity and value objects."""

from datetime import datetime, timedelta, timezone

import pytest

from todoflow.core.domain import Priority, Todo, TodoFilter
from todoflow.core.domain.value_objects import (
    format_timestamp,
    normalize_title,
    parse_timestamp,
)
from todoflow.core.exceptions import TodoAlreadyCompletedError, ValidationError


CREATED = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestTitleRules:
    """Tests for title normalization."""

    def test_trims_whitespace(self):
        assert normalize_title("  Buy milk  ") == "Buy milk"

    def test_rejects_blank(self):
        with pytest.raises(ValidationError, match="Title cannot be empty"):
            normalize_title("   ")

    def test_rejects_single_character_after_trim(self):
        with pytest.raises(ValidationError, match="at least 2"):
            normalize_title(" a ")

    def test_accepts_bounds(self):
        assert normalize_title("ab") == "ab"
        assert normalize_title("x" * 255) == "x" * 255

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError, match="exceed 255"):
            normalize_title("x" * 256)

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            normalize_title(42)


class TestPriority:
    """Tests for Priority parsing and weights."""

    def test_parse_is_case_insensitive(self):
        assert Priority.parse("HIGH") is Priority.HIGH

    def test_parse_none_defaults_to_medium(self):
        assert Priority.parse(None) is Priority.MEDIUM

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValidationError, match="Invalid priority"):
            Priority.parse("urgent")

    def test_weights(self):
        assert [p.weight for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH)] == [1, 2, 3]


class TestTodoFilter:
    """Tests for TodoFilter."""

    def test_known_values(self):
        assert TodoFilter.from_string("active") is TodoFilter.ACTIVE
        assert TodoFilter.from_string("Completed") is TodoFilter.COMPLETED

    def test_unknown_value_falls_back_to_all(self):
        assert TodoFilter.from_string("archived") is TodoFilter.ALL
        assert TodoFilter.from_string(None) is TodoFilter.ALL


class TestTimestamps:
    """Tests for timestamp parsing and formatting."""

    def test_parse_z_suffix(self):
        assert parse_timestamp("2024-01-01T12:00:00Z") == CREATED

    def test_naive_is_treated_as_utc(self):
        assert parse_timestamp("2024-01-01T12:00:00") == CREATED

    def test_offset_is_converted(self):
        assert parse_timestamp("2024-01-01T14:00:00+02:00") == CREATED

    def test_invalid_string(self):
        with pytest.raises(ValidationError, match="Invalid date format"):
            parse_timestamp("next tuesday")

    def test_format_uses_z_suffix(self):
        assert format_timestamp(CREATED) == "2024-01-01T12:00:00Z"
        assert format_timestamp(None) is None


class TestTodo:
    """Tests for the Todo entity."""

    def test_defaults(self):
        todo = Todo(title="Buy milk")

        assert todo.id is None
        assert not todo.completed
        assert todo.priority is Priority.MEDIUM
        assert todo.due_date is None
        assert todo.created_at.tzinfo is not None
        assert not todo.is_persisted

    def test_title_is_normalized(self):
        assert Todo(title="  Buy milk ").title == "Buy milk"

    def test_invalid_title_rejected(self):
        with pytest.raises(ValidationError):
            Todo(title="")

    def test_priority_string_is_parsed(self):
        assert Todo(title="Buy milk", priority="high").priority is Priority.HIGH

    def test_due_date_string_is_parsed(self):
        todo = Todo(title="Buy milk", due_date="2024-02-01T00:00:00Z")
        assert todo.due_date == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Todo(title="Buy milk", id="  ")

    def test_is_immutable(self):
        todo = Todo(title="Buy milk")
        with pytest.raises(AttributeError):
            todo.title = "Other"  # type: ignore[misc]

    def test_toggle_returns_new_instance(self):
        todo = Todo(title="Buy milk", id="1", created_at=CREATED)
        toggled = todo.toggle()

        assert toggled.completed
        assert not todo.completed
        assert toggled.id == "1"
        assert toggled.created_at == CREATED

    def test_toggle_twice_is_identity(self):
        todo = Todo(title="Buy milk", id="1", created_at=CREATED)
        assert todo.toggle().toggle() == todo

    def test_complete_already_completed_raises(self):
        todo = Todo(title="Buy milk", completed=True)
        with pytest.raises(TodoAlreadyCompletedError, match="already completed"):
            todo.complete()

    def test_copy_is_equal_but_distinct(self):
        todo = Todo(title="Buy milk", id="1")
        copied = todo.copy()

        assert copied == todo
        assert copied is not todo

    def test_with_id(self):
        assert Todo(title="Buy milk").with_id("abc").id == "abc"


class TestApplyChanges:
    """Tests for Todo.apply_changes()."""

    @pytest.fixture
    def todo(self):
        return Todo(title="Buy milk", id="1", created_at=CREATED)

    def test_title_and_priority(self, todo):
        updated = todo.apply_changes({"title": " Buy bread ", "priority": "low"})

        assert updated.title == "Buy bread"
        assert updated.priority is Priority.LOW
        assert updated.id == todo.id

    def test_complete(self, todo):
        assert todo.apply_changes({"completed": True}).completed

    def test_reopen(self, todo):
        done = todo.toggle()
        assert not done.apply_changes({"completed": False}).completed

    def test_clear_due_date(self, todo):
        dated = todo.update_due_date("2024-02-01")
        assert dated.apply_changes({"due_date": None}).due_date is None

    def test_unknown_field(self, todo):
        with pytest.raises(ValidationError, match="Unknown fields: id"):
            todo.apply_changes({"id": "2"})

    def test_non_bool_completed(self, todo):
        with pytest.raises(ValidationError):
            todo.apply_changes({"completed": "yes"})

    def test_invalid_title(self, todo):
        with pytest.raises(ValidationError):
            todo.apply_changes({"title": "x"})
