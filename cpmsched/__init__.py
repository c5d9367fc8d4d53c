"""
Critical Path Method scheduler.

Provides CPM calculations for task lists with durations and dependencies,
plus loading and writing of the delimited task, schedule and timeline files.
"""

from .cpm import (
    TaskRecord,
    TaskTiming,
    Schedule,
    TaskNetwork,
    CPMEngine,
    schedule,
    SchedulingError,
    InvalidTaskRecord,
    DuplicateTask,
    UnresolvedDependency,
    CyclicDependency,
    InvariantViolation,
)
from .data_loader import TaskFileError, load_tasks, records_from_dicts
from .exporters import write_task_table, write_timeline

__version__ = '1.0.0'

__all__ = [
    # Models
    'TaskRecord',
    'TaskTiming',
    'Schedule',
    # Core
    'TaskNetwork',
    'CPMEngine',
    'schedule',
    # Errors
    'SchedulingError',
    'InvalidTaskRecord',
    'DuplicateTask',
    'UnresolvedDependency',
    'CyclicDependency',
    'InvariantViolation',
    'TaskFileError',
    # Loading / writing
    'load_tasks',
    'records_from_dicts',
    'write_task_table',
    'write_timeline',
]
