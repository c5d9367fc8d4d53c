"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
from typing import List

from cpmsched.cpm.models import TaskRecord


SAMPLE_TASKS_CSV = """task,duration,dependencies
a,2,
b,3,a
c,2,a
d,5,b;c
"""


@pytest.fixture
def diamond_records() -> List[TaskRecord]:
    """a -> (b, c) -> d; critical path a, b, d with finish 10."""
    return [
        TaskRecord('a', 2, ()),
        TaskRecord('b', 3, ('a',)),
        TaskRecord('c', 2, ('a',)),
        TaskRecord('d', 5, ('b', 'c')),
    ]


@pytest.fixture
def eight_task_records() -> List[TaskRecord]:
    """
    Two start tasks feeding a shared pair, with two end tasks.

    A(3) -> B(11) -> E(4)/F(6) -> G(2)
    C(13) -------^              H(1) depends on D(5), E, F
    """
    return [
        TaskRecord('A', 3, ()),
        TaskRecord('B', 11, ('A',)),
        TaskRecord('C', 13, ()),
        TaskRecord('D', 5, ('A',)),
        TaskRecord('E', 4, ('B', 'C')),
        TaskRecord('F', 6, ('B', 'C')),
        TaskRecord('G', 2, ('F',)),
        TaskRecord('H', 1, ('D', 'E', 'F')),
    ]


@pytest.fixture
def tasks_csv(tmp_path) -> Path:
    """Task file in the standard layout."""
    path = tmp_path / 'tasks.csv'
    path.write_text(SAMPLE_TASKS_CSV)
    return path
