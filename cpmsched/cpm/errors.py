"""
Errors raised while building or scheduling a task network.

Input problems derive from SchedulingError (a ValueError) so callers can
catch every user-facing failure in one place. InvariantViolation signals a
broken traversal and is never caused by valid or invalid input alone.
"""

from typing import Sequence


class SchedulingError(ValueError):
    """Base class for task-set errors detected before or during scheduling."""


class InvalidTaskRecord(SchedulingError):
    """Raised when a single task record has an unusable field."""

    def __init__(self, name: str, message: str):
        super().__init__(f"Task {name!r}: {message}")
        self.name = name
        self.reason = message


class DuplicateTask(SchedulingError):
    """Raised when two task records share a name."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate task name: {name!r}")
        self.name = name


class UnresolvedDependency(SchedulingError):
    """Raised when a dependency names a task that does not exist."""

    def __init__(self, task_name: str, missing_name: str):
        super().__init__(
            f"Task {task_name!r}: dependency {missing_name!r} does not exist"
        )
        self.task_name = task_name
        self.missing_name = missing_name


class CyclicDependency(SchedulingError):
    """
    Raised when the dependency graph contains a cycle.

    `cycle` lists the member names in edge order, closed by repeating the
    first member, e.g. ['a', 'b', 'a'].
    """

    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.cycle)}")

    @property
    def members(self) -> list[str]:
        """Distinct task names on the cycle."""
        return self.cycle[:-1]


class InvariantViolation(RuntimeError):
    """Raised when a timing pass finds its own results inconsistent."""
