"""
Environment Config Provider - Load configuration from environment variables.

Supports:
- Environment variables (TODOFLOW_BACKEND, TODOFLOW_DB_PATH, TODOFLOW_API_URL, ...)
- .env files
- Command line argument overrides

Later sources win: .env file, then the environment, then the command line.
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.exceptions import ConfigError
from ...core.ports.config_provider import (
    BACKENDS,
    AppConfig,
    ConfigProviderPort,
    RepositoryConfig,
    StoreConfig,
)


ENV_MAPPING = {
    "TODOFLOW_BACKEND": "backend",
    "TODOFLOW_DB_PATH": "sqlite_path",
    "TODOFLOW_API_URL": "api_url",
    "TODOFLOW_API_TIMEOUT": "api_timeout",
    "TODOFLOW_SERIALIZE_MUTATIONS": "serialize_per_id",
    "TODOFLOW_VERBOSE": "verbose",
}

CLI_MAPPING = {
    "backend": "backend",
    "db": "sqlite_path",
    "api_url": "api_url",
    "timeout": "api_timeout",
    "verbose": "verbose",
}


def _coerce(raw_value: str) -> Any:
    """Convert boolean-ish strings, leave everything else untouched."""
    lowered = raw_value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    return raw_value


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.
    """

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (defaults to ./.env when present)
            cli_overrides: Command line argument overrides
            environ: Environment to read (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._environ = os.environ if environ is None else environ

        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """
        Load complete configuration.

        Raises:
            ConfigError: If a value cannot be interpreted.
        """
        errors = self.validate()
        if errors:
            raise ConfigError("; ".join(errors))

        repository = RepositoryConfig(
            backend=str(self.get("backend", "sqlite")).lower(),
            sqlite_path=str(self.get("sqlite_path", "todoflow.db")),
            api_url=self.get("api_url") or None,
            api_timeout=float(self.get("api_timeout", 10.0)),
        )
        store = StoreConfig(
            serialize_per_id=self._as_bool(self.get("serialize_per_id", True)),
        )

        return AppConfig(
            repository=repository,
            store=store,
            verbose=self._as_bool(self.get("verbose", False)),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self) -> list[str]:
        """Validate configuration."""
        errors = []

        backend = str(self.get("backend", "sqlite")).lower()
        if backend not in BACKENDS:
            errors.append(
                f"Unknown backend '{backend}' - expected one of {', '.join(BACKENDS)}"
            )
        if backend == "api" and not self.get("api_url"):
            errors.append("Missing TODOFLOW_API_URL - required for the api backend")

        timeout = self.get("api_timeout", 10.0)
        try:
            if float(timeout) <= 0:
                errors.append("TODOFLOW_API_TIMEOUT must be positive")
        except (TypeError, ValueError):
            errors.append(f"Invalid TODOFLOW_API_TIMEOUT: {timeout!r}")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_env_file(self) -> None:
        """Load TODOFLOW_* values from the .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            config_key = ENV_MAPPING.get(key.strip())
            if config_key:
                self._values[config_key] = _coerce(value.strip().strip('"').strip("'"))

    def _find_env_file(self) -> Optional[Path]:
        if self._env_file is not None:
            return self._env_file if self._env_file.exists() else None

        cwd_env = Path.cwd() / ".env"
        return cwd_env if cwd_env.exists() else None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        for env_key, config_key in ENV_MAPPING.items():
            raw_value = self._environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = _coerce(raw_value)

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        for cli_key, config_key in CLI_MAPPING.items():
            if self._cli_overrides.get(cli_key) is not None:
                self._values[config_key] = self._cli_overrides[cli_key]

    @staticmethod
    def _as_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)
