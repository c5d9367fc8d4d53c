"""
Data Loader for task files.

Reads a delimited task file into TaskRecord objects ready for the
CPM engine. The expected layout is

    task,duration,dependencies
    a,2,
    b,3,a
    c,2,a
    d,5,b;c

with dependency names separated by ';' (configurable).
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

import pandas as pd
from pydantic import ValidationError

from .config.settings import settings
from .cpm.errors import SchedulingError
from .cpm.models import TaskRecord
from .schemas import TaskRow

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('task', 'duration')


class TaskFileError(SchedulingError):
    """Raised when a task file row cannot be turned into a TaskRecord."""

    def __init__(self, source: str, line: Optional[int], message: str):
        where = f"{source}, line {line}" if line is not None else source
        super().__init__(f"{where}: {message}")
        self.source = source
        self.line = line
        self.reason = message


def split_dependencies(value: Any, separator: str = None) -> list[str]:
    """Split a dependency cell into names, skipping empty items."""
    if separator is None:
        separator = settings.DEPENDENCY_SEPARATOR
    if value is None or (not isinstance(value, (list, tuple)) and pd.isna(value)):
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(separator)
    return [item.strip() for item in map(str, items) if item.strip()]


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        field = '.'.join(str(p) for p in err['loc'])
        parts.append(f"{field}: {err['msg']}")
    return '; '.join(parts)


def records_from_dicts(rows: Iterable[Mapping[str, Any]], separator: str = None,
                       source: str = '<records>', first_line: int = 1) -> list[TaskRecord]:
    """
    Convert raw row mappings into TaskRecords.

    Args:
        rows: Mappings with 'task', 'duration' and optional 'dependencies'
              (a separated string or a list of names)
        separator: Dependency separator for string cells
        source: Label used in error messages
        first_line: Line number of the first row, for error messages

    Returns:
        List of TaskRecord objects in input order
    """
    records = []
    for line, row in enumerate(rows, start=first_line):
        duration = row.get('duration')
        if isinstance(duration, str):
            duration = duration.strip()
        data = {
            'task': row.get('task'),
            'duration': duration,
            'dependencies': split_dependencies(row.get('dependencies'), separator),
        }
        try:
            parsed = TaskRow.model_validate(data)
        except ValidationError as e:
            raise TaskFileError(source, line, _format_validation_error(e)) from e

        records.append(TaskRecord(
            name=parsed.task,
            duration=parsed.duration,
            dependencies=tuple(parsed.dependencies),
        ))
    return records


def load_tasks(path: Union[str, Path], separator: str = None) -> list[TaskRecord]:
    """
    Load task records from a CSV file.

    Args:
        path: Task file path
        separator: Dependency separator (default: settings.DEPENDENCY_SEPARATOR)

    Returns:
        List of TaskRecord objects in file order
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Task file not found: {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise TaskFileError(str(path), None, "file is empty") from e
    except pd.errors.ParserError as e:
        raise TaskFileError(str(path), None, f"cannot parse CSV: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise TaskFileError(str(path), 1, f"missing column(s): {', '.join(missing)}")

    if 'dependencies' not in df.columns:
        df['dependencies'] = ''

    # Header is line 1
    records = records_from_dicts(
        df.to_dict('records'),
        separator=separator,
        source=str(path),
        first_line=2,
    )

    logger.info(f'Loaded {len(records)} tasks from {path}')
    for record in records:
        logger.debug(
            f'Task: {record.name}, Duration: {record.duration}, '
            f'Dependencies: {"; ".join(record.dependencies)}'
        )
    return records
