"""
Data models for CPM calculations.

Defines the immutable task input, the engine's per-task node, and the
schedule returned to callers.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .errors import InvalidTaskRecord


@dataclass(frozen=True)
class TaskRecord:
    """A task as read from input: name, duration and dependency names."""

    name: str
    duration: int
    dependencies: tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidTaskRecord(str(self.name), "name must be a non-empty string")
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise InvalidTaskRecord(self.name, "duration must be an integer")
        if self.duration < 0:
            raise InvalidTaskRecord(self.name, "duration must be >= 0")
        # Accept any sequence of names but store a tuple so the record stays hashable
        object.__setattr__(self, 'dependencies', tuple(self.dependencies))


@dataclass
class Node:
    """
    Engine-side wrapper around a TaskRecord.

    Adjacency is owned by the TaskNetwork; the timing fields are written
    once by the engine passes and are None until then.
    """

    record: TaskRecord

    # CPM Results (calculated by engine)
    es: Optional[int] = None
    ef: Optional[int] = None
    ls: Optional[int] = None
    lf: Optional[int] = None
    slack: Optional[int] = None
    is_critical: bool = False

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def duration(self) -> int:
        return self.record.duration

    def is_milestone(self) -> bool:
        """Check if task is a milestone (zero duration)."""
        return self.record.duration == 0

    def reset_timing(self) -> None:
        """Clear all calculated values."""
        self.es = self.ef = self.ls = self.lf = self.slack = None
        self.is_critical = False

    def to_timing(self) -> 'TaskTiming':
        return TaskTiming(
            name=self.name,
            duration=self.duration,
            es=self.es,
            ef=self.ef,
            ls=self.ls,
            lf=self.lf,
            slack=self.slack,
            is_critical=self.is_critical,
        )


@dataclass(frozen=True)
class TaskTiming:
    """Calculated timing for one task."""

    name: str
    duration: int
    es: int
    ef: int
    ls: int
    lf: int
    slack: int
    is_critical: bool

    def is_active_at(self, time_unit: int) -> bool:
        """True while the task runs, i.e. for es <= time_unit < ef."""
        return self.es <= time_unit < self.ef

    def to_row(self) -> dict[str, Any]:
        """Row for the task table (output.csv layout)."""
        return {
            'task': self.name,
            'duration': self.duration,
            'ES': self.es,
            'EF': self.ef,
            'LS': self.ls,
            'LF': self.lf,
            'slack': self.slack,
        }


@dataclass(frozen=True)
class Schedule:
    """Results from a CPM calculation."""

    timings: tuple[TaskTiming, ...]
    project_finish: int
    critical_path: tuple[str, ...] = ()    # task names in topological order
    _index: dict[str, int] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'timings', tuple(self.timings))
        object.__setattr__(self, 'critical_path', tuple(self.critical_path))
        object.__setattr__(self, '_index', {t.name: i for i, t in enumerate(self.timings)})

    def __getitem__(self, name: str) -> TaskTiming:
        return self.timings[self._index[name]]

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[TaskTiming]:
        return iter(self.timings)

    def __len__(self) -> int:
        return len(self.timings)

    def get(self, name: str) -> Optional[TaskTiming]:
        """Get a task's timing by name, or None."""
        if name not in self._index:
            return None
        return self[name]

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.timings]

    def get_critical_tasks(self) -> list[TaskTiming]:
        """Get TaskTiming objects on the critical path."""
        return [self[name] for name in self.critical_path]

    def get_tasks_by_slack(self, max_slack: int = None) -> list[TaskTiming]:
        """Get tasks sorted by slack (ascending), optionally capped."""
        timings = list(self.timings)
        if max_slack is not None:
            timings = [t for t in timings if t.slack <= max_slack]
        return sorted(timings, key=lambda t: t.slack)

    def to_records(self) -> list[dict[str, Any]]:
        """Task table rows in input order."""
        return [t.to_row() for t in self.timings]

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            'project_finish': self.project_finish,
            'critical_path': list(self.critical_path),
            'tasks': [
                {**t.to_row(), 'critical': t.is_critical}
                for t in self.timings
            ],
        }
