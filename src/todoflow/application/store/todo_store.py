"""
Todo Store - Optimistic mutation store for the local session.

The store holds the in-memory collection, the visibility filter and a
status flag. Mutating actions apply their change locally first, then
run the matching command off the event loop, and finally either
reconcile with the canonical todo or restore the snapshot taken before
the change.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime
from typing import Any, AsyncIterator, Callable, Mapping, Optional

from ...core.domain.entities import Todo
from ...core.domain.ordering import is_overdue, sort_by_priority
from ...core.domain.value_objects import TodoFilter
from ...core.exceptions import TodoflowError, UnknownError
from ..services import TodoCommandService, TodoQueryService
from .state import StoreState, StoreStats, StoreStatus


FALLBACK_MESSAGES = {
    "load": "Failed to load todos",
    "create": "Failed to create todo",
    "update": "Failed to update todo",
    "delete": "Failed to delete todo",
    "toggle": "Failed to toggle todo",
}

Todos = tuple[Todo, ...]
Listener = Callable[[StoreState], None]


class TodoStore:
    """
    Client-side store with optimistic updates and rollback.

    Actions:
    - load(): replace the collection with the repository contents
    - create() / update() / delete() / toggle(): optimistic mutations
    - set_filter() / clear_error(): synchronous state changes

    Every mutation restores the full pre-action collection when its
    command fails, records the error, and re-raises it. load() records
    its failure but does not raise.
    """

    def __init__(
        self,
        command_service: TodoCommandService,
        query_service: TodoQueryService,
        serialize_per_id: bool = True,
    ):
        """
        Initialize the store.

        Args:
            command_service: Service used for create/update/delete/toggle
            query_service: Service used by load()
            serialize_per_id: Queue mutations that target the same todo id
                so each one snapshots the result of the previous one
        """
        self.command_service = command_service
        self.query_service = query_service
        self.serialize_per_id = serialize_per_id
        self.logger = logging.getLogger("TodoStore")

        self._state = StoreState()
        self._listeners: list[Listener] = []
        self._id_locks: dict[str, asyncio.Lock] = {}
        self._id_waiters: dict[str, int] = {}

    # -------------------------------------------------------------------------
    # State Access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def todos(self) -> Todos:
        return self._state.todos

    @property
    def filter(self) -> str:
        return self._state.filter

    @property
    def status(self) -> StoreStatus:
        return self._state.status

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    def get(self, todo_id: str) -> Optional[Todo]:
        """Find a todo in the current collection by id."""
        for todo in self._state.todos:
            if todo.id == todo_id:
                return todo
        return None

    # -------------------------------------------------------------------------
    # Derived Reads
    # -------------------------------------------------------------------------

    def filtered(self) -> list[Todo]:
        """Todos visible under the current filter."""
        todos = self._state.todos
        selected = TodoFilter.from_string(self._state.filter)
        if selected is TodoFilter.ACTIVE:
            return [t for t in todos if not t.completed]
        if selected is TodoFilter.COMPLETED:
            return [t for t in todos if t.completed]
        return list(todos)

    def stats(self) -> StoreStats:
        todos = self._state.todos
        completed = sum(1 for t in todos if t.completed)
        return StoreStats(
            total=len(todos),
            active=len(todos) - completed,
            completed=completed,
        )

    def is_loading(self) -> bool:
        return self._state.status is StoreStatus.LOADING

    def is_idle(self) -> bool:
        return self._state.status is StoreStatus.IDLE

    def has_error(self) -> bool:
        return self._state.status is StoreStatus.FAILED

    def sorted_by_priority(self, now: Optional[datetime] = None) -> list[Todo]:
        """Filtered todos, most urgent first, completed last."""
        return sort_by_priority(self.filtered(), now)

    def overdue(self, now: Optional[datetime] = None) -> list[Todo]:
        return [t for t in self._state.todos if is_overdue(t, now)]

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new state after every change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Synchronous Actions
    # -------------------------------------------------------------------------

    def set_filter(self, value: str) -> None:
        self._set(filter=value)

    def clear_error(self) -> None:
        """Drop the error; a failed store returns to idle."""
        if self._state.status is StoreStatus.FAILED:
            self._set(status=StoreStatus.IDLE, error=None)
        else:
            self._set(error=None)

    # -------------------------------------------------------------------------
    # Asynchronous Actions
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """
        Replace the collection with the repository contents.

        Failures are recorded in `status`/`error` and not raised; call
        load() again to retry.
        """
        self._set(status=StoreStatus.LOADING, error=None)
        try:
            todos = await asyncio.to_thread(self.query_service.get_all_todos)
        except Exception as e:
            message = self._error_message("load", e)
            self.logger.error(f"Load failed: {message}")
            self._set(status=StoreStatus.FAILED, error=message)
            return

        self._set(todos=tuple(todos), status=StoreStatus.SUCCEEDED)
        self.logger.info(f"Loaded {len(todos)} todos")

    async def create(
        self,
        title: str,
        priority: Any = "medium",
        due_date: Any = None,
    ) -> Todo:
        """
        Create a todo, showing a provisional entry at the head meanwhile.

        Returns:
            The canonical todo carrying its assigned id.
        """
        provisional: Optional[Todo] = None

        def apply_local(todos: Todos) -> Todos:
            nonlocal provisional
            provisional = Todo(title=title, priority=priority, due_date=due_date)
            return (provisional,) + todos

        def reconcile(todos: Todos, created: Todo) -> Todos:
            remaining = list(todos)
            for index, todo in enumerate(remaining):
                if todo.id is None and todo == provisional:
                    del remaining[index]
                    break
            # a load() that finished meanwhile may already hold the stored row
            return (created,) + tuple(t for t in remaining if t.id != created.id)

        return await self._mutate(
            "create",
            None,
            apply_local,
            lambda: self.command_service.create_todo(title, priority, due_date),
            reconcile,
        )

    async def update(self, todo_id: str, changes: Mapping[str, Any]) -> Todo:
        """Apply a partial update; returns the canonical todo."""
        changes = dict(changes)

        def apply_local(todos: Todos) -> Todos:
            return tuple(
                t.apply_changes(changes) if t.id == todo_id else t for t in todos
            )

        return await self._mutate(
            "update",
            todo_id,
            apply_local,
            lambda: self.command_service.update_todo(todo_id, changes),
            lambda todos, updated: _replace_by_id(todos, todo_id, updated),
        )

    async def delete(self, todo_id: str) -> None:
        await self._mutate(
            "delete",
            todo_id,
            lambda todos: tuple(t for t in todos if t.id != todo_id),
            lambda: self.command_service.delete_todo(todo_id),
            lambda todos, _: todos,
        )

    async def toggle(self, todo_id: str) -> Todo:
        """Flip completion; returns the canonical todo."""
        return await self._mutate(
            "toggle",
            todo_id,
            lambda todos: tuple(t.toggle() if t.id == todo_id else t for t in todos),
            lambda: self.command_service.toggle_todo(todo_id),
            lambda todos, toggled: _replace_by_id(todos, todo_id, toggled),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _mutate(
        self,
        action: str,
        todo_id: Optional[str],
        apply_local: Callable[[Todos], Todos],
        remote: Callable[[], Any],
        reconcile: Callable[[Todos, Any], Todos],
    ) -> Any:
        """Run one optimistic action: snapshot, apply, call, reconcile or roll back."""
        async with self._serialized(todo_id):
            snapshot = self._snapshot()
            try:
                local = apply_local(self._state.todos)
                self._set(todos=local, status=StoreStatus.LOADING, error=None)
                result = await asyncio.to_thread(remote)
            except TodoflowError as e:
                self._rollback(action, snapshot, self._error_message(action, e))
                raise
            except Exception as e:
                message = self._error_message(action, e)
                self._rollback(action, snapshot, message)
                raise UnknownError(message, todo_id=todo_id, cause=e) from e

            self._set(
                todos=reconcile(self._state.todos, result),
                status=StoreStatus.SUCCEEDED,
            )
            self.logger.info(f"{action.capitalize()} succeeded" + (f" for {todo_id}" if todo_id else ""))
            return result

    def _rollback(self, action: str, snapshot: Todos, message: str) -> None:
        self._set(todos=snapshot, status=StoreStatus.FAILED, error=message)
        self.logger.warning(f"{action.capitalize()} failed, rolled back: {message}")

    def _snapshot(self) -> Todos:
        return tuple(todo.copy() for todo in self._state.todos)

    def _error_message(self, action: str, error: BaseException) -> str:
        if isinstance(error, TodoflowError) and error.message:
            return error.message
        return FALLBACK_MESSAGES[action]

    def _set(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                self.logger.error(f"Store listener failed: {e}")

    @asynccontextmanager
    async def _serialized(self, todo_id: Optional[str]) -> AsyncIterator[None]:
        """Hold the per-id lock for the duration of one mutation."""
        if todo_id is None or not self.serialize_per_id:
            yield
            return

        lock = self._id_locks.setdefault(todo_id, asyncio.Lock())
        self._id_waiters[todo_id] = self._id_waiters.get(todo_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._id_waiters[todo_id] -= 1
            if not self._id_waiters[todo_id]:
                del self._id_waiters[todo_id]
                del self._id_locks[todo_id]


def _replace_by_id(todos: Todos, todo_id: str, canonical: Todo) -> Todos:
    """Swap in the canonical todo; no-op when the id is gone."""
    return tuple(canonical if t.id == todo_id else t for t in todos)
