"""
Value Objects - Small immutable values with their own rules.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from ..exceptions import ValidationError


TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 255


class Priority(str, Enum):
    """Todo priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        """Numeric weight used for urgency ranking."""
        return {"low": 1, "medium": 2, "high": 3}[self.value]

    @classmethod
    def parse(cls, value: Union[str, "Priority", None]) -> "Priority":
        """
        Parse a priority from a string.

        None maps to the default (medium); anything else that is not
        one of low/medium/high raises ValidationError.
        """
        if value is None:
            return cls.MEDIUM
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValidationError(
            f"Invalid priority: {value!r} (expected low, medium or high)"
        )


class TodoFilter(str, Enum):
    """Visibility filter over a todo collection."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def from_string(cls, value: Any) -> "TodoFilter":
        """Parse a filter value; unrecognized values fall back to ALL."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.ALL


def normalize_title(value: Any) -> str:
    """
    Trim and validate a todo title.

    Raises:
        ValidationError: If the title is not a string or its trimmed
            length is outside 2-255 characters.
    """
    if not isinstance(value, str):
        raise ValidationError("Title must be a string")

    title = value.strip()
    if not title:
        raise ValidationError("Title cannot be empty")
    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(
            f"Title must be at least {TITLE_MIN_LENGTH} characters"
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters"
        )
    return title


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp (or pass a datetime through).

    Raises:
        ValidationError: If the string is not a valid ISO-8601 timestamp.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(
            f"Invalid date format: {value!r} (expected ISO-8601)"
        )
    return ensure_utc(parsed)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as ISO-8601 with a Z suffix."""
    if value is None:
        return None
    return ensure_utc(value).isoformat().replace("+00:00", "Z")
