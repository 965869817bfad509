"""Tests for domain events and the event bus."""

from todoflow.core.domain import (
    DomainEvent,
    EventBus,
    TodoCompleted,
    TodoCreated,
    TodoDeleted,
)


class TestEventBus:
    """Tests for EventBus."""

    def test_specific_handler(self):
        bus = EventBus()
        received = []
        bus.subscribe(TodoCreated, received.append)

        bus.publish(TodoCreated(todo_id="1", title="Buy milk"))
        bus.publish(TodoDeleted(todo_id="1"))

        assert len(received) == 1
        assert received[0].title == "Buy milk"

    def test_catch_all_handler(self):
        bus = EventBus()
        received = []
        bus.subscribe(DomainEvent, received.append)

        bus.publish(TodoCompleted(todo_id="1"))
        bus.publish(TodoDeleted(todo_id="1"))

        assert [e.event_type for e in received] == ["TodoCompleted", "TodoDeleted"]

    def test_history(self):
        bus = EventBus()
        bus.publish(TodoCreated(todo_id="1"))

        history = bus.get_history()
        assert len(history) == 1

        history.clear()
        assert len(bus.get_history()) == 1

        bus.clear_history()
        assert bus.get_history() == []

    def test_events_have_ids(self):
        first, second = TodoDeleted(todo_id="1"), TodoDeleted(todo_id="1")
        assert first.event_id != second.event_id
