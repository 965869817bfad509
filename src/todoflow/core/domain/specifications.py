"""
Specifications - Composable predicates over todos.

Repositories accept a specification in find_by_specification(), and
the query handlers use them to filter and count.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional

from .entities import Todo
from .ordering import is_overdue
from .value_objects import Priority


class Specification(ABC):
    """A predicate over todos that can be combined with &, | and ~."""

    @abstractmethod
    def is_satisfied_by(self, todo: Todo) -> bool:
        ...

    def __call__(self, todo: Todo) -> bool:
        return self.is_satisfied_by(todo)

    def __and__(self, other: "Specification") -> "Specification":
        return _PredicateSpecification(
            lambda t: self.is_satisfied_by(t) and other.is_satisfied_by(t)
        )

    def __or__(self, other: "Specification") -> "Specification":
        return _PredicateSpecification(
            lambda t: self.is_satisfied_by(t) or other.is_satisfied_by(t)
        )

    def __invert__(self) -> "Specification":
        return _PredicateSpecification(lambda t: not self.is_satisfied_by(t))


class _PredicateSpecification(Specification):
    def __init__(self, predicate: Callable[[Todo], bool]):
        self._predicate = predicate

    def is_satisfied_by(self, todo: Todo) -> bool:
        return self._predicate(todo)


class ActiveTodoSpecification(Specification):
    def is_satisfied_by(self, todo: Todo) -> bool:
        return not todo.completed


class CompletedTodoSpecification(Specification):
    def is_satisfied_by(self, todo: Todo) -> bool:
        return todo.completed


class OverdueTodoSpecification(Specification):
    """Open todos older than seven days at `now`."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now

    def is_satisfied_by(self, todo: Todo) -> bool:
        return is_overdue(todo, self.now)


class HighPriorityTodoSpecification(Specification):
    def is_satisfied_by(self, todo: Todo) -> bool:
        return todo.priority is Priority.HIGH
