"""
Output - Console output formatting for the todoflow CLI.

Provides pretty-printed output with colors and formatting.
"""

import sys
from datetime import datetime
from typing import Optional, Sequence

from ..application.queries import TodoStats
from ..core.domain.entities import Todo
from ..core.domain.ordering import is_overdue, urgency_score
from ..core.domain.value_objects import Priority


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    WARN = "⚠"
    INFO = "ℹ"


PRIORITY_COLORS = {
    Priority.HIGH: Colors.RED,
    Priority.MEDIUM: Colors.YELLOW,
    Priority.LOW: Colors.DIM,
}


class Console:
    """Console output helper with colors and formatting."""

    def __init__(self, color: bool = True, verbose: bool = False):
        self.color = color and sys.stdout.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        print(text)

    def section(self, text: str) -> None:
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def debug(self, text: str) -> None:
        """Print debug message (only in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            self.print("  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            ))

    # -------------------------------------------------------------------------
    # Todo Output
    # -------------------------------------------------------------------------

    def todo(self, todo: Todo) -> None:
        """Print a single todo on one line."""
        mark = self._c(Symbols.CHECK, Colors.GREEN) if todo.completed else " "
        priority = self._c(todo.priority.value, PRIORITY_COLORS[todo.priority])
        self.print(f"  [{mark}] {todo.title} ({priority})")
        self.detail(f"id: {todo.id}")

    def todo_table(self, todos: Sequence[Todo], now: Optional[datetime] = None) -> None:
        """Print todos as a table, flagging overdue items."""
        if not todos:
            self.info("No todos")
            return

        rows = []
        for todo in todos:
            flags = []
            if is_overdue(todo, now):
                flags.append("overdue")
            rows.append([
                todo.id or "(pending)",
                Symbols.CHECK if todo.completed else "",
                todo.priority.value,
                str(urgency_score(todo, now)),
                todo.title,
                todo.created_at.strftime("%Y-%m-%d %H:%M"),
                todo.due_date.strftime("%Y-%m-%d") if todo.due_date else "",
                ", ".join(flags),
            ])

        self.table(
            ["ID", "Done", "Priority", "Urgency", "Title", "Created", "Due", "Flags"],
            rows,
        )

    def stats(self, stats: TodoStats) -> None:
        self.section("Todo Statistics")
        self.print()
        self.table(["Metric", "Count"], [
            ["Total", str(stats.total)],
            ["Active", str(stats.active)],
            ["Completed", str(stats.completed)],
            ["Overdue", str(stats.overdue)],
            ["High Priority", str(stats.high_priority)],
        ])

    def confirm(self, message: str) -> bool:
        """Ask for confirmation."""
        prompt = self._c(f"\n{Symbols.WARN} {message} (y/N): ", Colors.YELLOW)
        try:
            response = input(prompt).strip().lower()
            return response in ("y", "yes")
        except (EOFError, KeyboardInterrupt):
            self.print()
            return False
