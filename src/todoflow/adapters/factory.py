"""
Factory - Compose repositories, services and the store from configuration.
"""

import logging
from typing import Optional

from ..application.services import TodoCommandService, TodoQueryService
from ..application.store import TodoStore
from ..core.domain.events import EventBus
from ..core.exceptions import ConfigError
from ..core.ports.config_provider import AppConfig, RepositoryConfig
from ..core.ports.todo_repository import TodoRepositoryPort
from .api import ApiTodoRepository, TodoApiClient
from .persistence import InMemoryTodoRepository, SqliteTodoRepository


logger = logging.getLogger("factory")


def create_repository(config: RepositoryConfig) -> TodoRepositoryPort:
    """
    Build the repository selected by `config.backend`.

    Raises:
        ConfigError: If the backend is unknown or incompletely configured.
    """
    backend = config.backend.lower()

    if backend == "memory":
        repository: TodoRepositoryPort = InMemoryTodoRepository()
    elif backend == "sqlite":
        repository = SqliteTodoRepository(config.sqlite_path)
    elif backend == "api":
        if not config.api_url:
            raise ConfigError("The api backend requires an API URL")
        repository = ApiTodoRepository(
            TodoApiClient(config.api_url, timeout=config.api_timeout)
        )
    else:
        raise ConfigError(f"Unknown backend: {config.backend}")

    logger.debug(f"Using {repository.name} repository")
    return repository


def build_store(
    config: AppConfig,
    repository: Optional[TodoRepositoryPort] = None,
    event_bus: Optional[EventBus] = None,
) -> TodoStore:
    """
    Wire a store to its services.

    Args:
        config: Application configuration
        repository: Use this repository instead of building one from config
        event_bus: Event bus shared by the commands
    """
    repository = repository or create_repository(config.repository)
    return TodoStore(
        TodoCommandService(repository, event_bus),
        TodoQueryService(repository),
        serialize_per_id=config.store.serialize_per_id,
    )
