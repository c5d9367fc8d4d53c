"""
Critical Path Analysis.

Traces the chain(s) of zero-slack tasks through the network, identifies
near-critical tasks and summarises the slack distribution.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from ..config.settings import settings
from ..cpm.engine import CPMEngine
from ..cpm.models import Schedule, TaskRecord, TaskTiming
from ..cpm.network import TaskNetwork


@dataclass
class CriticalPathResult:
    """Results from critical path analysis."""

    schedule: Schedule
    critical_chain: list[str]
    near_critical_tasks: list[TaskTiming]
    slack_distribution: dict[str, int]   # slack bucket -> count
    near_critical_threshold: int
    total_tasks: int

    def get_critical_path_length(self) -> int:
        """Number of tasks on the traced critical chain."""
        return len(self.critical_chain)

    def get_risk_summary(self) -> str:
        """Get summary of schedule risk."""
        critical = len(self.schedule.critical_path)
        near_critical = len(self.near_critical_tasks)
        return (f"{critical} critical tasks, {near_critical} near-critical "
                f"(slack <= {self.near_critical_threshold})")


def _tight_critical_successors(network: TaskNetwork, schedule: Schedule, name: str) -> list[str]:
    """Critical successors that start exactly when `name` finishes."""
    finish = schedule[name].ef
    return [
        succ for succ in network.successor_names(name)
        if schedule[succ].is_critical and schedule[succ].es == finish
    ]


def trace_critical_chain(network: TaskNetwork, schedule: Schedule) -> list[str]:
    """
    Return one root-to-leaf chain of critical tasks.

    Consecutive tasks are joined by a dependency edge with EF(pred) ==
    ES(succ), so the chain's durations add up to the project finish.
    Where the chain branches, the first successor in input order is taken.
    """
    starts = [name for name in network.roots() if schedule[name].is_critical]
    if not starts:
        return []

    chain = [starts[0]]
    while True:
        nxt = _tight_critical_successors(network, schedule, chain[-1])
        if not nxt:
            break
        chain.append(nxt[0])
    return chain


def find_critical_chains(network: TaskNetwork, schedule: Schedule, limit: int = 100) -> list[list[str]]:
    """
    Enumerate root-to-leaf critical chains, up to `limit` of them.

    Chains are produced depth-first in input order.
    """
    chains: list[list[str]] = []
    starts = [name for name in network.roots() if schedule[name].is_critical]

    for start in starts:
        stack = [[start]]
        while stack and len(chains) < limit:
            chain = stack.pop()
            nxt = _tight_critical_successors(network, schedule, chain[-1])
            if not nxt:
                chains.append(chain)
                continue
            # reversed so the first successor is explored first
            for succ in reversed(nxt):
                stack.append(chain + [succ])
        if len(chains) >= limit:
            break

    return chains


def _slack_bucket(slack: int) -> str:
    if slack == 0:
        return '0 (critical)'
    elif slack <= 2:
        return '1-2'
    elif slack <= 5:
        return '3-5'
    elif slack <= 10:
        return '6-10'
    return '>10'


def analyze_critical_path(
    records: Iterable[TaskRecord],
    near_critical_threshold: int = None,
) -> CriticalPathResult:
    """
    Analyze critical path and near-critical tasks.

    Args:
        records: Task records to schedule
        near_critical_threshold: Largest non-zero slack counted as near-critical
                                 (default: settings.NEAR_CRITICAL_THRESHOLD)

    Returns:
        CriticalPathResult with critical chain, near-critical tasks, and statistics
    """
    network = TaskNetwork.from_records(records)
    schedule = CPMEngine(network).run()
    return summarize_critical_path(network, schedule, near_critical_threshold)


def summarize_critical_path(
    network: TaskNetwork,
    schedule: Schedule,
    near_critical_threshold: int = None,
) -> CriticalPathResult:
    """
    Build a CriticalPathResult from an already computed schedule.

    Args:
        network: Network the schedule was computed from
        schedule: Result of CPMEngine.run() on that network
        near_critical_threshold: Largest non-zero slack counted as near-critical
                                 (default: settings.NEAR_CRITICAL_THRESHOLD)
    """
    if near_critical_threshold is None:
        near_critical_threshold = settings.NEAR_CRITICAL_THRESHOLD

    slack_buckets = defaultdict(int)
    for timing in schedule:
        slack_buckets[_slack_bucket(timing.slack)] += 1

    near_critical = [
        t for t in schedule.get_tasks_by_slack(near_critical_threshold)
        if t.slack > 0
    ]

    return CriticalPathResult(
        schedule=schedule,
        critical_chain=trace_critical_chain(network, schedule),
        near_critical_tasks=near_critical,
        slack_distribution=dict(slack_buckets),
        near_critical_threshold=near_critical_threshold,
        total_tasks=len(schedule),
    )


def print_critical_path_report(result: CriticalPathResult) -> None:
    """Print a formatted critical path report."""
    schedule = result.schedule

    print("=" * 60)
    print("CRITICAL PATH ANALYSIS REPORT")
    print("=" * 60)

    print(f"\nProject Finish: {schedule.project_finish}")
    print(f"Total Tasks: {result.total_tasks}")
    print(f"Critical Tasks: {len(schedule.critical_path)}")
    print(f"Near-Critical Tasks (slack <= {result.near_critical_threshold}): "
          f"{len(result.near_critical_tasks)}")

    if result.total_tasks:
        print("\n--- Slack Distribution ---")
        for bucket, count in sorted(result.slack_distribution.items()):
            pct = count / result.total_tasks * 100
            bar = '#' * int(pct / 2)
            print(f"  {bucket:15s}: {count:5d} ({pct:5.1f}%) {bar}")

    print("\n--- Critical Path ---")
    if result.critical_chain:
        print("  " + " -> ".join(result.critical_chain))
    for i, name in enumerate(result.critical_chain):
        timing = schedule[name]
        print(f"  {i+1:3d}. {name:20s} | ES {timing.es:5d} | EF {timing.ef:5d} | "
              f"duration {timing.duration}")

    if result.near_critical_tasks:
        print("\n--- Near-Critical Tasks ---")
        for i, timing in enumerate(result.near_critical_tasks[:10]):
            print(f"  {i+1:3d}. {timing.name:20s} | Slack: {timing.slack:5d}")

    print("\n" + "=" * 60)
