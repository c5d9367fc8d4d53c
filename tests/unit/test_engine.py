"""Unit tests for the CPM engine passes."""
import pytest

from cpmsched.cpm.engine import CPMEngine, schedule
from cpmsched.cpm.errors import CyclicDependency, InvariantViolation, UnresolvedDependency
from cpmsched.cpm.models import TaskRecord
from cpmsched.cpm.network import TaskNetwork


def assert_consistent(network, result):
    """Check the timing relations every valid schedule must satisfy."""
    for timing in result:
        assert timing.ef == timing.es + timing.duration
        assert timing.lf == timing.ls + timing.duration
        assert timing.slack == timing.ls - timing.es == timing.lf - timing.ef
        assert timing.slack >= 0
        assert timing.is_critical == (timing.slack == 0)

        preds = network.predecessor_names(timing.name)
        assert timing.es == max((result[p].ef for p in preds), default=0)
        succs = network.successor_names(timing.name)
        assert timing.lf == min((result[s].ls for s in succs), default=result.project_finish)

    if len(result):
        assert result.project_finish == max(t.ef for t in result)
        assert result.project_finish == max(t.lf for t in result)
        assert result.critical_path


class TestScenarios:
    """Known schedules."""

    def test_diamond(self, diamond_records):
        result = schedule(diamond_records)
        expected = {
            'a': (0, 2, 0, 2, 0),
            'b': (2, 5, 2, 5, 0),
            'c': (2, 4, 3, 5, 1),
            'd': (5, 10, 5, 10, 0),
        }
        for name, (es, ef, ls, lf, slack) in expected.items():
            timing = result[name]
            assert (timing.es, timing.ef, timing.ls, timing.lf, timing.slack) == (es, ef, ls, lf, slack)
        assert result.project_finish == 10
        assert set(result.critical_path) == {'a', 'b', 'd'}

    def test_single_task(self):
        result = schedule([TaskRecord('only', 4)])
        timing = result['only']
        assert (timing.es, timing.ef, timing.ls, timing.lf, timing.slack) == (0, 4, 0, 4, 0)
        assert result.project_finish == 4
        assert result.critical_path == ('only',)

    def test_eight_tasks(self, eight_task_records):
        result = schedule(eight_task_records)
        expected = {
            'A': (0, 3, 0, 3, 0),
            'B': (3, 14, 3, 14, 0),
            'C': (0, 13, 1, 14, 1),
            'D': (3, 8, 16, 21, 13),
            'E': (14, 18, 17, 21, 3),
            'F': (14, 20, 14, 20, 0),
            'G': (20, 22, 20, 22, 0),
            'H': (20, 21, 21, 22, 1),
        }
        for name, values in expected.items():
            timing = result[name]
            assert (timing.es, timing.ef, timing.ls, timing.lf, timing.slack) == values, name
        assert result.critical_path == ('A', 'B', 'F', 'G')
        assert result.project_finish == 22

    def test_linear_chain_all_critical(self):
        result = schedule([
            TaskRecord('A', 2),
            TaskRecord('B', 3, ('A',)),
            TaskRecord('C', 4, ('B',)),
        ])
        assert result.project_finish == 9
        assert result.critical_path == ('A', 'B', 'C')

    def test_independent_tasks(self):
        result = schedule([TaskRecord('short', 2), TaskRecord('long', 7)])
        assert result['short'].slack == 5
        assert result['long'].is_critical
        assert result.project_finish == 7

    def test_zero_duration_milestone(self):
        result = schedule([
            TaskRecord('start', 0),
            TaskRecord('work', 3, ('start',)),
            TaskRecord('done', 0, ('work',)),
        ])
        assert result['done'].es == result['done'].ef == 3
        assert result.critical_path == ('start', 'work', 'done')

    def test_empty_input(self):
        result = schedule([])
        assert len(result) == 0
        assert result.project_finish == 0
        assert result.critical_path == ()

    def test_output_keeps_input_order(self, diamond_records):
        result = schedule(list(reversed(diamond_records)))
        assert result.names == ['d', 'c', 'b', 'a']


class TestInvariants:
    """Relations between the passes."""

    def test_consistency_on_samples(self, diamond_records, eight_task_records):
        for records in (diamond_records, eight_task_records):
            network = TaskNetwork.from_records(records)
            assert_consistent(network, CPMEngine(network).run())

    def test_critical_chain_durations_sum_to_finish(self, eight_task_records):
        result = schedule(eight_task_records)
        assert sum(result[name].duration for name in result.critical_path) == result.project_finish

    def test_idempotent(self, eight_task_records):
        assert schedule(eight_task_records) == schedule(eight_task_records)

    def test_rerun_on_same_network(self, diamond_records):
        engine = CPMEngine(TaskNetwork.from_records(diamond_records))
        assert engine.run() == engine.run()

    def test_wide_diamond_ladder(self):
        # each level fans out to two tasks that join again; path count doubles per level
        records = [TaskRecord('j0', 1)]
        for level in range(1, 41):
            prev = f'j{level - 1}'
            records.append(TaskRecord(f'l{level}', 1, (prev,)))
            records.append(TaskRecord(f'r{level}', 2, (prev,)))
            records.append(TaskRecord(f'j{level}', 1, (f'l{level}', f'r{level}')))
        network = TaskNetwork.from_records(records)
        result = CPMEngine(network).run()
        assert result.project_finish == 1 + 40 * 3
        assert result['l1'].slack == 1
        assert_consistent(network, result)


class TestErrors:
    """Errors surfaced by the engine."""

    def test_cycle_rejected_before_timing(self):
        network = TaskNetwork.from_records([
            TaskRecord('a', 1, ('b',)),
            TaskRecord('b', 1, ('a',)),
        ])
        with pytest.raises(CyclicDependency):
            CPMEngine(network).run()
        assert all(node.es is None for node in network)

    def test_unresolved_dependency(self):
        with pytest.raises(UnresolvedDependency):
            schedule([TaskRecord('a', 1, ('ghost',))])

    def test_backward_pass_requires_forward_pass(self, diamond_records):
        engine = CPMEngine(TaskNetwork.from_records(diamond_records))
        with pytest.raises(InvariantViolation):
            engine.backward_pass()

    def test_slack_mismatch_detected(self, diamond_records):
        network = TaskNetwork.from_records(diamond_records)
        engine = CPMEngine(network)
        engine.backward_pass(engine.forward_pass())
        network.get_node('c').lf += 1
        with pytest.raises(InvariantViolation):
            engine.calculate_slack()

    def test_slack_requires_passes(self, diamond_records):
        engine = CPMEngine(TaskNetwork.from_records(diamond_records))
        with pytest.raises(InvariantViolation):
            engine.calculate_slack()

    def test_finish_before_early_finish_is_negative_slack(self, diamond_records):
        engine = CPMEngine(TaskNetwork.from_records(diamond_records))
        finish = engine.forward_pass()
        engine.backward_pass(finish - 1)
        with pytest.raises(InvariantViolation):
            engine.calculate_slack()
