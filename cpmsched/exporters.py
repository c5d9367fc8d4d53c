"""
Writers for schedule output files.

Produces the per-task timing table and a simplified Gantt-style timeline:
one column per time unit, one row per task, with each cell marking the
task as critical (C), active (X) or inactive (O) at that time.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from .cpm.models import Schedule
from .schemas import (
    ACTIVE_MARK,
    CRITICAL_MARK,
    INACTIVE_MARK,
    TASK_TABLE_COLUMNS,
    TIMELINE_LABEL_COLUMN,
    ScheduleRow,
)

logger = logging.getLogger(__name__)


def build_task_frame(schedule: Schedule) -> pd.DataFrame:
    """Task timing table, one row per task in input order."""
    rows = [ScheduleRow(**row).model_dump() for row in schedule.to_records()]
    return pd.DataFrame(rows, columns=TASK_TABLE_COLUMNS)


def build_timeline_frame(schedule: Schedule) -> pd.DataFrame:
    """
    Timeline table for a schedule.

    Columns are 'Task' followed by time units 0 .. project_finish - 1.
    A task occupies the half-open interval [ES, EF); zero-duration tasks
    therefore have no active cells.
    """
    time_units = range(schedule.project_finish)
    rows = []
    for timing in schedule:
        active = CRITICAL_MARK if timing.is_critical else ACTIVE_MARK
        row = {TIMELINE_LABEL_COLUMN: timing.name}
        for t in time_units:
            row[str(t)] = active if timing.is_active_at(t) else INACTIVE_MARK
        rows.append(row)

    columns = [TIMELINE_LABEL_COLUMN] + [str(t) for t in time_units]
    return pd.DataFrame(rows, columns=columns)


def _write_frame(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path


def write_task_table(schedule: Schedule, path: Union[str, Path]) -> Path:
    """
    Write task details (task, duration, ES, EF, LS, LF, slack) to CSV.

    Returns:
        Path written
    """
    path = _write_frame(build_task_frame(schedule), path)
    logger.info(f'Task details written to {path}')
    return path


def write_timeline(schedule: Schedule, path: Union[str, Path]) -> Path:
    """
    Write the C/X/O timeline to CSV.

    Returns:
        Path written
    """
    path = _write_frame(build_timeline_frame(schedule), path)
    logger.info(f'Timeline written to {path}')
    return path
