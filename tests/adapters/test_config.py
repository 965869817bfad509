"""Tests for the environment config provider and composition factory."""

from unittest.mock import patch

import pytest

from todoflow.adapters import (
    ApiTodoRepository,
    EnvironmentConfigProvider,
    InMemoryTodoRepository,
    SqliteTodoRepository,
    build_store,
    create_repository,
)
from todoflow.application import TodoStore
from todoflow.core.exceptions import ConfigError
from todoflow.core.ports import AppConfig, RepositoryConfig, StoreConfig


@pytest.fixture
def missing_env_file(tmp_path):
    return tmp_path / "absent.env"


class TestEnvironmentConfigProvider:
    """Tests for EnvironmentConfigProvider."""

    def test_defaults(self, missing_env_file):
        config = EnvironmentConfigProvider(env_file=missing_env_file, environ={}).load()

        assert config.repository.backend == "sqlite"
        assert config.repository.sqlite_path == "todoflow.db"
        assert config.repository.api_url is None
        assert config.repository.api_timeout == 10.0
        assert config.store.serialize_per_id is True
        assert config.verbose is False

    def test_environment_values(self, missing_env_file):
        provider = EnvironmentConfigProvider(
            env_file=missing_env_file,
            environ={
                "TODOFLOW_BACKEND": "api",
                "TODOFLOW_API_URL": "http://localhost:3000/api",
                "TODOFLOW_API_TIMEOUT": "2.5",
                "TODOFLOW_SERIALIZE_MUTATIONS": "false",
                "TODOFLOW_VERBOSE": "yes",
            },
        )

        config = provider.load()

        assert config.repository.backend == "api"
        assert config.repository.api_url == "http://localhost:3000/api"
        assert config.repository.api_timeout == 2.5
        assert config.store.serialize_per_id is False
        assert config.verbose is True

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# local settings\n"
            "TODOFLOW_BACKEND=memory\n"
            'TODOFLOW_DB_PATH="/tmp/other.db"\n'
            "UNRELATED=value\n"
        )

        provider = EnvironmentConfigProvider(env_file=env_file, environ={})

        assert provider.get("backend") == "memory"
        assert provider.get("sqlite_path") == "/tmp/other.db"
        assert provider.get("unrelated") is None

    def test_precedence(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TODOFLOW_BACKEND=memory\nTODOFLOW_DB_PATH=file.db\n")

        provider = EnvironmentConfigProvider(
            env_file=env_file,
            environ={"TODOFLOW_DB_PATH": "env.db"},
            cli_overrides={"db": "cli.db", "backend": None},
        )

        assert provider.get("backend") == "memory"
        assert provider.get("sqlite_path") == "cli.db"

    def test_reads_os_environ_by_default(self, missing_env_file, monkeypatch):
        monkeypatch.setenv("TODOFLOW_BACKEND", "memory")

        provider = EnvironmentConfigProvider(env_file=missing_env_file)

        assert provider.get("backend") == "memory"

    def test_set_and_get_normalize_keys(self, missing_env_file):
        provider = EnvironmentConfigProvider(env_file=missing_env_file, environ={})
        provider.set("API-URL", "http://x")

        assert provider.get("api_url") == "http://x"

    def test_validate_unknown_backend(self, missing_env_file):
        provider = EnvironmentConfigProvider(
            env_file=missing_env_file, environ={"TODOFLOW_BACKEND": "postgres"}
        )

        errors = provider.validate()

        assert len(errors) == 1
        assert "Unknown backend" in errors[0]
        with pytest.raises(ConfigError):
            provider.load()

    def test_validate_api_requires_url(self, missing_env_file):
        provider = EnvironmentConfigProvider(
            env_file=missing_env_file, environ={"TODOFLOW_BACKEND": "api"}
        )

        assert any("TODOFLOW_API_URL" in e for e in provider.validate())

    def test_validate_bad_timeout(self, missing_env_file):
        provider = EnvironmentConfigProvider(
            env_file=missing_env_file, environ={"TODOFLOW_API_TIMEOUT": "soon"}
        )

        assert any("TODOFLOW_API_TIMEOUT" in e for e in provider.validate())


class TestFactory:
    """Tests for create_repository() and build_store()."""

    def test_memory(self):
        assert isinstance(create_repository(RepositoryConfig(backend="memory")), InMemoryTodoRepository)

    def test_sqlite(self, tmp_path):
        repository = create_repository(
            RepositoryConfig(backend="sqlite", sqlite_path=str(tmp_path / "todos.db"))
        )

        assert isinstance(repository, SqliteTodoRepository)
        repository.close()

    def test_api(self):
        repository = create_repository(
            RepositoryConfig(backend="api", api_url="http://localhost:3000/api", api_timeout=3)
        )

        assert isinstance(repository, ApiTodoRepository)
        assert repository.client.base_url == "http://localhost:3000/api"
        assert repository.client.timeout == 3

    def test_api_without_url(self):
        with pytest.raises(ConfigError):
            create_repository(RepositoryConfig(backend="api"))

    def test_unknown_backend(self):
        with pytest.raises(ConfigError, match="Unknown backend"):
            create_repository(RepositoryConfig(backend="postgres"))

    def test_build_store(self):
        config = AppConfig(
            repository=RepositoryConfig(backend="memory"),
            store=StoreConfig(serialize_per_id=False),
        )

        store = build_store(config)

        assert isinstance(store, TodoStore)
        assert store.serialize_per_id is False
        assert store.command_service.repository is store.query_service.repository

    def test_build_store_with_repository(self):
        repository = InMemoryTodoRepository()

        with patch("todoflow.adapters.factory.create_repository") as factory:
            store = build_store(AppConfig(), repository)

        factory.assert_not_called()
        assert store.query_service.repository is repository
