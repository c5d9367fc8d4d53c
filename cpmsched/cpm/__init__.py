"""
CPM (Critical Path Method) scheduling core.

This module provides:
- Task network construction with dependency resolution and cycle checks
- Forward/backward pass CPM calculations
- Slack and critical path identification
"""

from .errors import (
    SchedulingError,
    InvalidTaskRecord,
    DuplicateTask,
    UnresolvedDependency,
    CyclicDependency,
    InvariantViolation,
)
from .models import TaskRecord, Node, TaskTiming, Schedule
from .network import TaskNetwork
from .engine import CPMEngine, schedule

__all__ = [
    # Errors
    'SchedulingError',
    'InvalidTaskRecord',
    'DuplicateTask',
    'UnresolvedDependency',
    'CyclicDependency',
    'InvariantViolation',
    # Models
    'TaskRecord',
    'Node',
    'TaskTiming',
    'Schedule',
    # Core
    'TaskNetwork',
    'CPMEngine',
    'schedule',
]
