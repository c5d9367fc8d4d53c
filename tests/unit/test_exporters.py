"""Unit tests for schedule writers."""
import pandas as pd
import pytest

from cpmsched.cpm.engine import schedule
from cpmsched.cpm.models import TaskRecord
from cpmsched.exporters import (
    build_task_frame,
    build_timeline_frame,
    write_task_table,
    write_timeline,
)


@pytest.fixture
def diamond_schedule(diamond_records):
    return schedule(diamond_records)


class TestTaskTable:
    """Test the per-task timing table."""

    def test_columns_and_rows(self, diamond_schedule):
        df = build_task_frame(diamond_schedule)
        assert list(df.columns) == ['task', 'duration', 'ES', 'EF', 'LS', 'LF', 'slack']
        assert df['task'].tolist() == ['a', 'b', 'c', 'd']
        assert df.loc[df['task'] == 'c'].iloc[0].tolist() == ['c', 2, 2, 4, 3, 5, 1]

    def test_write(self, diamond_schedule, tmp_path):
        path = write_task_table(diamond_schedule, tmp_path / 'out' / 'output.csv')
        lines = path.read_text().splitlines()
        assert lines[0] == 'task,duration,ES,EF,LS,LF,slack'
        assert lines[1:] == [
            'a,2,0,2,0,2,0',
            'b,3,2,5,2,5,0',
            'c,2,2,4,3,5,1',
            'd,5,5,10,5,10,0',
        ]

    def test_write_logs_destination(self, diamond_schedule, tmp_path, caplog):
        with caplog.at_level('INFO', logger='cpmsched'):
            path = write_task_table(diamond_schedule, tmp_path / 'output.csv')
        assert f'Task details written to {path}' in caplog.text


class TestTimeline:
    """Test the C/X/O timeline."""

    def test_header(self, diamond_schedule):
        df = build_timeline_frame(diamond_schedule)
        assert list(df.columns) == ['Task'] + [str(t) for t in range(10)]

    def test_cells(self, diamond_schedule):
        df = build_timeline_frame(diamond_schedule).set_index('Task')
        assert ''.join(df.loc['a']) == 'CCOOOOOOOO'
        assert ''.join(df.loc['b']) == 'OOCCCOOOOO'
        assert ''.join(df.loc['c']) == 'OOXXOOOOOO'
        assert ''.join(df.loc['d']) == 'OOOOOCCCCC'

    def test_milestone_has_no_active_cells(self):
        df = build_timeline_frame(schedule([
            TaskRecord('work', 2),
            TaskRecord('done', 0, ('work',)),
        ])).set_index('Task')
        assert set(df.loc['done']) == {'O'}

    def test_empty_schedule(self):
        df = build_timeline_frame(schedule([]))
        assert list(df.columns) == ['Task']
        assert df.empty

    def test_write(self, diamond_schedule, tmp_path):
        path = write_timeline(diamond_schedule, tmp_path / 'timeline.csv')
        lines = path.read_text().splitlines()
        assert lines[0] == 'Task,0,1,2,3,4,5,6,7,8,9'
        assert lines[3] == 'c,O,O,X,X,O,O,O,O,O,O'

    def test_written_file_reads_back(self, diamond_schedule, tmp_path):
        path = write_timeline(diamond_schedule, tmp_path / 'timeline.csv')
        df = pd.read_csv(path, dtype=str)
        assert df['Task'].tolist() == ['a', 'b', 'c', 'd']
        assert df['9'].tolist() == ['O', 'O', 'O', 'C']
