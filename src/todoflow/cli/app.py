"""
CLI Application - Command line entry point for todoflow.

Examples:
    todoflow add "Buy milk" --priority high
    todoflow list --filter active --sort urgency
    todoflow toggle 3f0c...
    todoflow --backend api --api-url http://localhost:3000/api stats
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.factory import build_store, create_repository
from ..application.queries import SORT_FIELDS
from ..application.store import TodoStore
from ..core.domain.value_objects import Priority, TodoFilter
from ..core.exceptions import TodoflowError
from ..core.ports.config_provider import BACKENDS
from .exit_codes import ExitCode
from .output import Console


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoflow",
        description="Manage todos with optimistic updates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        help="Persistence backend (or set TODOFLOW_BACKEND)",
    )
    parser.add_argument(
        "--db",
        type=str,
        help="SQLite database path (or set TODOFLOW_DB_PATH)",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        help="Todo API root URL (or set TODOFLOW_API_URL)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="API request timeout in seconds",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Path to a .env file (defaults to ./.env)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=None,
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List todos")
    list_parser.add_argument(
        "--filter", "-f",
        choices=[f.value for f in TodoFilter],
        default="all",
        help="Visibility filter",
    )
    list_parser.add_argument(
        "--sort", "-s",
        choices=SORT_FIELDS,
        help="Sort field (priority and urgency put completed todos last)",
    )
    list_parser.add_argument(
        "--order",
        choices=("asc", "desc"),
        default="asc",
        help="Sort order",
    )

    add_parser = subparsers.add_parser("add", help="Create a todo")
    add_parser.add_argument("title", help="Todo title")
    add_parser.add_argument(
        "--priority", "-p",
        choices=[p.value for p in Priority],
        default="medium",
    )
    add_parser.add_argument("--due", help="Due date (ISO 8601)")

    update_parser = subparsers.add_parser("update", help="Update a todo")
    update_parser.add_argument("id", help="Todo id")
    update_parser.add_argument("--title", "-t")
    update_parser.add_argument("--priority", "-p", choices=[p.value for p in Priority])
    update_parser.add_argument("--due", help="Due date (ISO 8601)")
    state = update_parser.add_mutually_exclusive_group()
    state.add_argument("--complete", dest="completed", action="store_true", default=None)
    state.add_argument("--reopen", dest="completed", action="store_false")

    toggle_parser = subparsers.add_parser("toggle", help="Flip a todo's completion")
    toggle_parser.add_argument("id", help="Todo id")

    delete_parser = subparsers.add_parser("delete", help="Delete a todo")
    delete_parser.add_argument("id", help="Todo id")
    delete_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip the confirmation prompt",
    )

    subparsers.add_parser("stats", help="Show todo statistics")
    subparsers.add_parser("tui", help="Launch the interactive terminal UI")

    return parser


# -------------------------------------------------------------------------
# Subcommands
# -------------------------------------------------------------------------


async def run_command(store: TodoStore, args: argparse.Namespace, console: Console) -> int:
    """Run one subcommand against the store and return its exit code."""
    if args.command == "list":
        todos = await asyncio.to_thread(
            store.query_service.get_filtered_todos,
            args.filter,
            args.sort,
            args.order,
        )
        console.todo_table(todos)
        return ExitCode.SUCCESS

    if args.command == "stats":
        stats = await asyncio.to_thread(store.query_service.get_todo_stats)
        console.stats(stats)
        return ExitCode.SUCCESS

    if args.command == "add":
        todo = await store.create(args.title, args.priority, args.due)
        console.success(f"Created: {todo.title}")
        console.detail(f"id: {todo.id}")
        return ExitCode.SUCCESS

    if args.command == "update":
        changes = _collect_changes(args)
        if not changes:
            console.error("Nothing to update - pass --title, --priority, --due, --complete or --reopen")
            return ExitCode.VALIDATION_ERROR
        todo = await store.update(args.id, changes)
        console.success("Updated")
        console.todo(todo)
        return ExitCode.SUCCESS

    if args.command == "toggle":
        todo = await store.toggle(args.id)
        console.success("Completed" if todo.completed else "Reopened")
        console.todo(todo)
        return ExitCode.SUCCESS

    if args.command == "delete":
        if not args.yes and not console.confirm(f"Delete todo {args.id}?"):
            console.info("Aborted")
            return ExitCode.CANCELLED
        await store.delete(args.id)
        console.success(f"Deleted {args.id}")
        return ExitCode.SUCCESS

    console.error(f"Unknown command: {args.command}")
    return ExitCode.ERROR


def _collect_changes(args: argparse.Namespace) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    if args.title is not None:
        changes["title"] = args.title
    if args.priority is not None:
        changes["priority"] = args.priority
    if args.due is not None:
        changes["due_date"] = args.due
    if args.completed is not None:
        changes["completed"] = args.completed
    return changes


# -------------------------------------------------------------------------
# Entry Points
# -------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    Parse arguments, build the store and run one subcommand.

    Returns:
        Process exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    provider = EnvironmentConfigProvider(
        env_file=args.env_file,
        cli_overrides={
            "backend": args.backend,
            "db": args.db,
            "api_url": args.api_url,
            "timeout": args.timeout,
            "verbose": args.verbose,
        },
    )

    console = Console(color=not args.no_color)
    try:
        config = provider.load()
    except TodoflowError as e:
        setup_logging(bool(args.verbose))
        console.error(f"Configuration error: {e.message}")
        return ExitCode.CONFIG_ERROR

    setup_logging(config.verbose)
    console.verbose = config.verbose
    logger = logging.getLogger("main")

    try:
        repository = create_repository(config.repository)
    except TodoflowError as e:
        console.error(e.message)
        return ExitCode.from_exception(e)

    try:
        console.debug(f"Backend: {repository.name}")
        if not repository.test_connection():
            console.error(f"Cannot reach the {repository.name} backend")
            return ExitCode.TRANSPORT_ERROR

        store = build_store(config, repository)

        if args.command == "tui":
            from .tui import run_tui

            return run_tui(store)

        return asyncio.run(run_command(store, args, console))
    except TodoflowError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        console.error(e.message)
        return ExitCode.from_exception(e)
    except KeyboardInterrupt:
        console.print()
        return ExitCode.CANCELLED
    finally:
        close = getattr(repository, "close", None)
        if close is not None:
            close()


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
