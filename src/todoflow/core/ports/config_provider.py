"""
Config Provider Port - Abstract interface for configuration sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


BACKENDS = ("memory", "sqlite", "api")


@dataclass
class RepositoryConfig:
    """Which persistence backend to use and how to reach it."""

    backend: str = "sqlite"
    sqlite_path: str = "todoflow.db"
    api_url: Optional[str] = None
    api_timeout: float = 10.0


@dataclass
class StoreConfig:
    """Behavior of the optimistic mutation store."""

    serialize_per_id: bool = True


@dataclass
class AppConfig:
    """Complete application configuration."""

    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    verbose: bool = False


class ConfigProviderPort(ABC):
    """Abstract interface for loading configuration."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        ...
