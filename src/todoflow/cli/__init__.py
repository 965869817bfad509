"""
CLI Module - Command Line Interface for todoflow.
"""

from .app import create_parser, main, run
from .exit_codes import ExitCode
from .output import Console

__all__ = ["create_parser", "main", "run", "ExitCode", "Console"]
