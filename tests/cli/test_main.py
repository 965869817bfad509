"""Tests for the todoflow command line interface."""

import pytest

from todoflow.adapters.persistence import SqliteTodoRepository
from todoflow.cli import ExitCode, create_parser, main
from todoflow.core.exceptions import (
    ConfigError,
    NotFoundError,
    TransportError,
    UnknownError,
    ValidationError,
)


ENV_KEYS = (
    "TODOFLOW_BACKEND",
    "TODOFLOW_DB_PATH",
    "TODOFLOW_API_URL",
    "TODOFLOW_API_TIMEOUT",
    "TODOFLOW_SERIALIZE_MUTATIONS",
    "TODOFLOW_VERBOSE",
)


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path / "todos.db"


@pytest.fixture
def cli(db_path):
    def run(*args):
        return main(["--no-color", "--backend", "sqlite", "--db", str(db_path), *args])
    return run


def stored_todos(db_path):
    repository = SqliteTodoRepository(db_path)
    try:
        return repository.get_all()
    finally:
        repository.close()


class TestParser:
    """Tests for argument parsing."""

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_list_defaults(self):
        args = create_parser().parse_args(["list"])

        assert args.filter == "all"
        assert args.sort is None
        assert args.order == "asc"

    def test_update_flags(self):
        args = create_parser().parse_args(["update", "abc", "--complete"])
        assert args.completed is True

        args = create_parser().parse_args(["update", "abc", "--reopen"])
        assert args.completed is False

    def test_invalid_priority(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["add", "Buy milk", "--priority", "urgent"])


class TestExitCode:
    """Tests for ExitCode.from_exception()."""

    @pytest.mark.parametrize("error,expected", [
        (ConfigError("x"), ExitCode.CONFIG_ERROR),
        (ValidationError("x"), ExitCode.VALIDATION_ERROR),
        (NotFoundError("x"), ExitCode.NOT_FOUND),
        (TransportError("x"), ExitCode.TRANSPORT_ERROR),
        (UnknownError("x"), ExitCode.ERROR),
        (KeyboardInterrupt(), ExitCode.CANCELLED),
    ])
    def test_mapping(self, error, expected):
        assert ExitCode.from_exception(error) == expected


class TestCommands:
    """Tests for CLI subcommands against a SQLite database."""

    def test_add_and_list(self, cli, db_path, capsys):
        assert cli("add", "Buy milk", "--priority", "high") == ExitCode.SUCCESS
        assert cli("list") == ExitCode.SUCCESS

        output = capsys.readouterr().out
        assert "Created: Buy milk" in output
        assert "high" in output

        todos = stored_todos(db_path)
        assert [t.title for t in todos] == ["Buy milk"]

    def test_add_invalid_title(self, cli, db_path, capsys):
        assert cli("add", "a") == ExitCode.VALIDATION_ERROR
        assert "Title must be at least 2 characters" in capsys.readouterr().out
        assert stored_todos(db_path) == []

    def test_toggle(self, cli, db_path, capsys):
        cli("add", "Buy milk")
        todo_id = stored_todos(db_path)[0].id

        assert cli("toggle", todo_id) == ExitCode.SUCCESS
        assert "Completed" in capsys.readouterr().out
        assert stored_todos(db_path)[0].completed

    def test_toggle_missing(self, cli, capsys):
        assert cli("toggle", "missing") == ExitCode.NOT_FOUND
        assert "Todo with ID missing not found" in capsys.readouterr().out

    def test_update(self, cli, db_path):
        cli("add", "Buy milk")
        todo_id = stored_todos(db_path)[0].id

        assert cli("update", todo_id, "--title", "Buy bread", "--complete") == ExitCode.SUCCESS

        todo = stored_todos(db_path)[0]
        assert todo.title == "Buy bread"
        assert todo.completed

    def test_update_without_changes(self, cli, capsys):
        assert cli("update", "abc") == ExitCode.VALIDATION_ERROR
        assert "Nothing to update" in capsys.readouterr().out

    def test_delete(self, cli, db_path):
        cli("add", "Buy milk")
        todo_id = stored_todos(db_path)[0].id

        assert cli("delete", todo_id, "--yes") == ExitCode.SUCCESS
        assert stored_todos(db_path) == []

    def test_delete_declined(self, cli, db_path, monkeypatch):
        cli("add", "Buy milk")
        todo_id = stored_todos(db_path)[0].id
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert cli("delete", todo_id) == ExitCode.CANCELLED
        assert len(stored_todos(db_path)) == 1

    def test_list_filter_and_sort(self, cli, db_path, capsys):
        cli("add", "Low task", "--priority", "low")
        cli("add", "High task", "--priority", "high")
        cli("toggle", stored_todos(db_path)[0].id)
        capsys.readouterr()

        assert cli("list", "--filter", "active", "--sort", "priority") == ExitCode.SUCCESS

        output = capsys.readouterr().out
        assert "Low task" in output
        assert "High task" not in output

    def test_stats(self, cli, db_path, capsys):
        cli("add", "Buy milk", "--priority", "high")
        cli("add", "Walk dog")
        cli("toggle", stored_todos(db_path)[0].id)
        capsys.readouterr()

        assert cli("stats") == ExitCode.SUCCESS

        output = capsys.readouterr().out
        assert "Todo Statistics" in output
        assert "Total" in output

    def test_empty_list(self, cli, capsys):
        assert cli("list") == ExitCode.SUCCESS
        assert "No todos" in capsys.readouterr().out


class TestConfiguration:
    """Tests for configuration handling in main()."""

    def test_api_backend_without_url(self, db_path, capsys):
        assert main(["--no-color", "--backend", "api", "list"]) == ExitCode.CONFIG_ERROR
        assert "Configuration error" in capsys.readouterr().out

    def test_memory_backend(self, db_path, capsys):
        assert main(["--no-color", "--backend", "memory", "add", "Buy milk"]) == ExitCode.SUCCESS
        assert not db_path.exists()

    def test_backend_from_environment(self, db_path, monkeypatch):
        monkeypatch.setenv("TODOFLOW_BACKEND", "sqlite")
        monkeypatch.setenv("TODOFLOW_DB_PATH", str(db_path))

        assert main(["--no-color", "add", "Buy milk"]) == ExitCode.SUCCESS
        assert len(stored_todos(db_path)) == 1

    def test_tui_without_textual(self, db_path, monkeypatch):
        monkeypatch.setattr("todoflow.cli.tui.app.TEXTUAL_AVAILABLE", False)

        assert main(["--backend", "memory", "tui"]) == 1

    def test_unreachable_api_backend(self, db_path, monkeypatch, capsys):
        monkeypatch.setattr(
            "todoflow.adapters.api.client.TodoApiClient.test_connection",
            lambda self: False,
        )

        code = main(["--no-color", "--backend", "api", "--api-url", "http://api.test/api", "list"])

        assert code == ExitCode.TRANSPORT_ERROR
        assert "Cannot reach the api backend" in capsys.readouterr().out

    def test_verbose_prints_backend(self, db_path, capsys):
        assert main(["--no-color", "-v", "--backend", "memory", "stats"]) == ExitCode.SUCCESS
        assert "[DEBUG] Backend: memory" in capsys.readouterr().out
