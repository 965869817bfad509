"""
Exit Codes - Process exit statuses for the todoflow CLI.
"""

from enum import IntEnum

from ..core.exceptions import (
    ConfigError,
    NotFoundError,
    TransportError,
    ValidationError,
)


class ExitCode(IntEnum):
    """Exit statuses returned by `todoflow` subcommands."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    VALIDATION_ERROR = 3
    NOT_FOUND = 4
    TRANSPORT_ERROR = 5
    CANCELLED = 130

    @classmethod
    def from_exception(cls, error: BaseException) -> "ExitCode":
        """Pick the exit code for an error raised by a command."""
        if isinstance(error, ConfigError):
            return cls.CONFIG_ERROR
        if isinstance(error, ValidationError):
            return cls.VALIDATION_ERROR
        if isinstance(error, NotFoundError):
            return cls.NOT_FOUND
        if isinstance(error, TransportError):
            return cls.TRANSPORT_ERROR
        if isinstance(error, KeyboardInterrupt):
            return cls.CANCELLED
        return cls.ERROR
