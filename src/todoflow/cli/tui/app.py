"""
TUI App - Textual terminal interface over the todo store.

The table re-renders from every store state change, so optimistic
entries appear at once and disappear again on rollback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional


try:
    from textual import on
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import DataTable, Footer, Header, Input, Static

    TEXTUAL_AVAILABLE = True
except ImportError:
    TEXTUAL_AVAILABLE = False
    if TYPE_CHECKING:
        from textual.app import App, ComposeResult

from todoflow.application.store import StoreState, TodoStore
from todoflow.core.domain.value_objects import TodoFilter
from todoflow.core.exceptions import TodoflowError


FILTER_CYCLE = [TodoFilter.ALL.value, TodoFilter.ACTIVE.value, TodoFilter.COMPLETED.value]

TODOFLOW_CSS = """
Screen {
    background: $surface;
}

#todo-table {
    height: 1fr;
}

#new-title {
    dock: bottom;
    margin: 0 1;
}

#status-bar {
    height: 1;
    background: $primary-darken-3;
    padding: 0 1;
}
"""


def next_filter(current: str) -> str:
    """Cycle all -> active -> completed -> all; unknown values restart at all."""
    if current not in FILTER_CYCLE:
        return FILTER_CYCLE[0]
    return FILTER_CYCLE[(FILTER_CYCLE.index(current) + 1) % len(FILTER_CYCLE)]


def status_line(state: StoreState, stats: Any) -> str:
    line = (
        f"Filter: {state.filter} | {stats.total} total, {stats.active} active, "
        f"{stats.completed} completed | {state.status.value}"
    )
    if state.error:
        line += f" | Error: {state.error}"
    return line


if TEXTUAL_AVAILABLE:

    class TodoflowTUI(App):
        """Interactive todo list driven by a TodoStore."""

        TITLE = "todoflow"
        SUB_TITLE = "Optimistic todo list"
        CSS = TODOFLOW_CSS

        BINDINGS = [
            Binding("a", "add", "Add", show=True),
            Binding("t", "toggle", "Toggle", show=True),
            Binding("d", "delete", "Delete", show=True),
            Binding("f", "cycle_filter", "Filter", show=True),
            Binding("r", "refresh", "Refresh", show=True),
            Binding("e", "clear_error", "Clear Error", show=False),
            Binding("escape", "cancel_add", "Cancel", show=False),
            Binding("q", "quit", "Quit", show=True),
        ]

        def __init__(self, store: TodoStore, *args: Any, **kwargs: Any) -> None:
            super().__init__(*args, **kwargs)
            self.store = store
            self._unsubscribe: Optional[Callable[[], None]] = None

        def compose(self) -> ComposeResult:
            yield Header(show_clock=True)
            yield DataTable(id="todo-table", cursor_type="row")
            yield Input(placeholder="New todo title, Enter to save", id="new-title")
            yield Static("", id="status-bar")
            yield Footer()

        def on_mount(self) -> None:
            table = self.query_one("#todo-table", DataTable)
            table.add_columns("Done", "Priority", "Title", "Due")
            self.query_one("#new-title", Input).display = False

            self._unsubscribe = self.store.subscribe(self._render_state)
            self._render_state(self.store.state)
            self.run_worker(self.store.load(), exclusive=True)

        def on_unmount(self) -> None:
            if self._unsubscribe:
                self._unsubscribe()

        # ---------------------------------------------------------------------
        # Rendering
        # ---------------------------------------------------------------------

        def _render_state(self, state: StoreState) -> None:
            table = self.query_one("#todo-table", DataTable)
            table.clear()
            for todo in self.store.filtered():
                table.add_row(
                    "✓" if todo.completed else "",
                    todo.priority.value,
                    todo.title,
                    todo.due_date.strftime("%Y-%m-%d") if todo.due_date else "",
                    key=todo.id,
                )
            status = self.query_one("#status-bar", Static)
            status.update(status_line(state, self.store.stats()))

        def _selected_id(self) -> Optional[str]:
            table = self.query_one("#todo-table", DataTable)
            if table.row_count == 0:
                return None
            row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
            return row_key.value

        # ---------------------------------------------------------------------
        # Actions
        # ---------------------------------------------------------------------

        def action_add(self) -> None:
            title_input = self.query_one("#new-title", Input)
            title_input.display = True
            title_input.focus()

        def action_cancel_add(self) -> None:
            title_input = self.query_one("#new-title", Input)
            title_input.value = ""
            title_input.display = False
            self.query_one("#todo-table", DataTable).focus()

        @on(Input.Submitted, "#new-title")
        async def handle_title_submitted(self, event: Input.Submitted) -> None:
            title = event.value
            self.action_cancel_add()
            await self._run(self.store.create(title))

        async def action_toggle(self) -> None:
            todo_id = self._selected_id()
            if todo_id:
                await self._run(self.store.toggle(todo_id))

        async def action_delete(self) -> None:
            todo_id = self._selected_id()
            if todo_id:
                await self._run(self.store.delete(todo_id))

        def action_cycle_filter(self) -> None:
            self.store.set_filter(next_filter(self.store.filter))

        async def action_refresh(self) -> None:
            await self.store.load()

        def action_clear_error(self) -> None:
            self.store.clear_error()

        async def _run(self, action: Any) -> None:
            """Await a store action; failures are already rolled back, just report them."""
            try:
                await action
            except TodoflowError as e:
                self.notify(e.message, severity="error")


# =============================================================================
# Entry Point
# =============================================================================


def run_tui(store: TodoStore) -> int:
    """
    Run the todoflow TUI against a store.

    Returns:
        Exit code (0 for success).
    """
    if not TEXTUAL_AVAILABLE:
        print("Error: Textual is not installed.")
        print("Install with: pip install todoflow[tui]")
        return 1

    app = TodoflowTUI(store)
    app.run()
    return 0


def check_textual_available() -> bool:
    """Check if Textual is available."""
    return TEXTUAL_AVAILABLE
