"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .todo_repository import TodoRepositoryPort
from .config_provider import (
    BACKENDS,
    ConfigProviderPort,
    AppConfig,
    RepositoryConfig,
    StoreConfig,
)

__all__ = [
    "TodoRepositoryPort",
    "BACKENDS",
    "ConfigProviderPort",
    "AppConfig",
    "RepositoryConfig",
    "StoreConfig",
]
