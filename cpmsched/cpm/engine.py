"""
CPM (Critical Path Method) Engine.

Implements forward and backward pass calculations over integer time units.
"""

import logging
from typing import Iterable, Optional

from .errors import InvariantViolation
from .models import Schedule, TaskRecord
from .network import TaskNetwork

logger = logging.getLogger(__name__)


class CPMEngine:
    """
    CPM calculation engine.

    Performs forward pass (early times), backward pass (late times),
    slack calculation, and critical path identification.

    Both passes walk one precomputed topological order, so every node is
    resolved exactly once no matter how many paths reach it.
    """

    def __init__(self, network: TaskNetwork):
        """
        Initialize CPM engine.

        Args:
            network: Task network to calculate. The engine writes timing
                     fields onto its nodes; give each run its own network.
        """
        self.network = network
        self._order: Optional[list[str]] = None
        self._project_finish: Optional[int] = None

    def _get_order(self) -> list[str]:
        if self._order is None:
            self.network.validate_acyclic()
            self._order = self.network.topological_sort()
        return self._order

    def forward_pass(self) -> int:
        """
        Calculate early start and early finish for all tasks.

        ES = max(EF of predecessors), 0 for tasks without predecessors.
        EF = ES + duration.

        Returns:
            Project finish time, the largest EF (0 for an empty network)
        """
        for name in self._get_order():
            node = self.network.nodes[name]

            early_start = 0
            for pred in self.network.predecessors_of(name):
                if pred.ef is None:
                    raise InvariantViolation(
                        f"Forward pass reached {name!r} before predecessor {pred.name!r}"
                    )
                early_start = max(early_start, pred.ef)

            node.es = early_start
            node.ef = early_start + node.duration

        self._project_finish = max((node.ef for node in self.network), default=0)
        logger.debug("Forward pass complete: project finish %d", self._project_finish)
        return self._project_finish

    def backward_pass(self, project_finish: int = None) -> None:
        """
        Calculate late start and late finish for all tasks.

        Processes tasks in reverse topological order.
        LF = min(LS of successors), project finish for tasks without successors.
        LS = LF - duration.
        """
        if self._project_finish is None:
            raise InvariantViolation("Backward pass requires a completed forward pass")
        if project_finish is None:
            project_finish = self._project_finish

        for name in reversed(self._get_order()):
            node = self.network.nodes[name]

            late_finish = project_finish
            for succ in self.network.successors_of(name):
                if succ.ls is None:
                    raise InvariantViolation(
                        f"Backward pass reached {name!r} before successor {succ.name!r}"
                    )
                late_finish = min(late_finish, succ.ls)

            node.lf = late_finish
            node.ls = late_finish - node.duration

    def calculate_slack(self) -> None:
        """
        Calculate slack for all tasks and mark critical ones.

        Slack = LS - ES, which must equal LF - EF. Tasks with zero slack
        are critical.
        """
        for node in self.network:
            if node.ls is None or node.es is None:
                raise InvariantViolation(f"Task {node.name!r} has no timing to derive slack from")

            slack = node.ls - node.es
            if slack != node.lf - node.ef:
                raise InvariantViolation(
                    f"Task {node.name!r}: LS-ES={slack} but LF-EF={node.lf - node.ef}"
                )
            if slack < 0:
                raise InvariantViolation(f"Task {node.name!r} has negative slack {slack}")

            node.slack = slack
            node.is_critical = slack == 0

    def get_critical_path(self) -> list[str]:
        """
        Return task names on the critical path in execution order.

        Critical tasks are those with slack == 0.
        """
        return [name for name in self._get_order() if self.network.nodes[name].is_critical]

    def run(self) -> Schedule:
        """
        Execute full CPM calculation.

        Returns:
            Schedule with all calculated values, tasks in input order
        """
        for node in self.network:
            node.reset_timing()

        project_finish = self.forward_pass()
        self.backward_pass(project_finish)
        self.calculate_slack()

        critical_path = self.get_critical_path()
        logger.debug(
            "CPM complete: %d tasks, finish %d, %d critical",
            len(self.network), project_finish, len(critical_path),
        )

        return Schedule(
            timings=tuple(node.to_timing() for node in self.network),
            project_finish=project_finish,
            critical_path=tuple(critical_path),
        )


def schedule(records: Iterable[TaskRecord]) -> Schedule:
    """Build a network from task records and compute its schedule."""
    network = TaskNetwork.from_records(records)
    return CPMEngine(network).run()
