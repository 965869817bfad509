"""
API Adapter - Todo REST API implementation of the repository port.
"""

from .client import TodoApiClient
from .repository import ApiTodoRepository

__all__ = ["TodoApiClient", "ApiTodoRepository"]
