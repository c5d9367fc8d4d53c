"""
Task Network for CPM calculations.

Builds the dependency graph from task records, resolves dependency names
through a name -> node map, derives successors as the transpose of the
predecessor lists and checks the graph for cycles.
"""

import logging
from collections import deque
from typing import Iterable, Iterator, Optional

from .errors import CyclicDependency, DuplicateTask, UnresolvedDependency
from .models import Node, TaskRecord

logger = logging.getLogger(__name__)


class TaskNetwork:
    """
    Task dependency network for CPM calculations.

    Nodes are kept in input order. Predecessor lists come straight from
    each record's dependencies; successor lists are computed once from them
    and are never edited on their own.
    """

    def __init__(self):
        self.nodes: dict[str, Node] = {}
        self._predecessors: dict[str, list[str]] = {}
        self._successors: dict[str, list[str]] = {}
        self._acyclic = False

    @classmethod
    def from_records(cls, records: Iterable[TaskRecord]) -> 'TaskNetwork':
        """
        Build a network from task records.

        Raises DuplicateTask if two records share a name and
        UnresolvedDependency if a dependency has no matching record.
        """
        network = cls()
        for record in records:
            if record.name in network.nodes:
                raise DuplicateTask(record.name)
            network.nodes[record.name] = Node(record)

        for name, node in network.nodes.items():
            preds = []
            # Repeated names in one record collapse to a single edge
            for dep_name in dict.fromkeys(node.record.dependencies):
                if dep_name not in network.nodes:
                    raise UnresolvedDependency(name, dep_name)
                preds.append(dep_name)
            network._predecessors[name] = preds

        network._build_successors()
        logger.debug("Built %r", network)
        return network

    def _build_successors(self) -> None:
        """Derive successor lists as the transpose of predecessor lists."""
        self._successors = {name: [] for name in self.nodes}
        for name, preds in self._predecessors.items():
            for pred in preds:
                self._successors[pred].append(name)

    def get_node(self, name: str) -> Optional[Node]:
        """Get a node by task name."""
        return self.nodes.get(name)

    def predecessors_of(self, name: str) -> list[Node]:
        """Get predecessor Node objects."""
        return [self.nodes[p] for p in self._predecessors[name]]

    def successors_of(self, name: str) -> list[Node]:
        """Get successor Node objects."""
        return [self.nodes[s] for s in self._successors[name]]

    def predecessor_names(self, name: str) -> list[str]:
        return list(self._predecessors[name])

    def successor_names(self, name: str) -> list[str]:
        return list(self._successors[name])

    def roots(self) -> list[str]:
        """Get task names with no predecessors."""
        return [name for name in self.nodes if not self._predecessors[name]]

    def leaves(self) -> list[str]:
        """Get task names with no successors."""
        return [name for name in self.nodes if not self._successors[name]]

    def validate_acyclic(self) -> None:
        """
        Raise CyclicDependency if the predecessor graph contains a cycle.

        Iterative depth-first search over predecessor edges. `on_path` holds
        the nodes of the current descent, `done` the nodes whose ancestry has
        been fully explored. Meeting a node that is still on the path closes
        a cycle.
        """
        done: set[str] = set()

        for start in self.nodes:
            if start in done:
                continue

            path: list[str] = []
            on_path: set[str] = set()
            stack: list[tuple[str, Iterator[str]]] = []

            path.append(start)
            on_path.add(start)
            stack.append((start, iter(self._predecessors[start])))

            while stack:
                current, pending = stack[-1]
                advanced = False
                for pred in pending:
                    if pred in done:
                        continue
                    if pred in on_path:
                        # path runs successor -> predecessor; report in edge order
                        loop = path[path.index(pred):]
                        cycle = list(reversed(loop))
                        raise CyclicDependency(cycle + [cycle[0]])
                    path.append(pred)
                    on_path.add(pred)
                    stack.append((pred, iter(self._predecessors[pred])))
                    advanced = True
                    break

                if not advanced:
                    stack.pop()
                    path.pop()
                    on_path.discard(current)
                    done.add(current)

        self._acyclic = True

    @property
    def is_validated(self) -> bool:
        return self._acyclic

    def topological_sort(self) -> list[str]:
        """
        Return task names in topological order (predecessors before successors).

        Uses Kahn's algorithm; ties keep input order. Raises CyclicDependency
        if the network has not been validated and turns out to be cyclic.
        """
        if not self._acyclic:
            self.validate_acyclic()

        in_degree = {name: len(preds) for name, preds in self._predecessors.items()}
        queue = deque(name for name, deg in in_degree.items() if deg == 0)
        result = []

        while queue:
            name = queue.popleft()
            result.append(name)
            for succ in self._successors[name]:
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    queue.append(succ)

        return result

    def reverse_topological_sort(self) -> list[str]:
        """Return task names in reverse topological order (successors first)."""
        return list(reversed(self.topological_sort()))

    def get_all_predecessors(self, name: str, include_self: bool = False) -> set[str]:
        """Get all predecessor task names (transitive closure)."""
        return self._closure(name, self._predecessors, include_self)

    def get_all_successors(self, name: str, include_self: bool = False) -> set[str]:
        """Get all successor task names (transitive closure)."""
        return self._closure(name, self._successors, include_self)

    @staticmethod
    def _closure(name: str, edges: dict[str, list[str]], include_self: bool) -> set[str]:
        result = {name} if include_self else set()
        visited = set()
        queue = deque([name])

        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            for other in edges[current]:
                result.add(other)
                queue.append(other)

        return result

    def get_statistics(self) -> dict:
        """Get network statistics."""
        return {
            'total_tasks': len(self.nodes),
            'total_dependencies': self.edge_count,
            'start_tasks': len(self.roots()),
            'end_tasks': len(self.leaves()),
            'milestones': sum(1 for node in self.nodes.values() if node.is_milestone()),
        }

    @property
    def edge_count(self) -> int:
        return sum(len(preds) for preds in self._predecessors.values())

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, name: str) -> bool:
        return name in self.nodes

    def __repr__(self) -> str:
        return f"TaskNetwork({len(self.nodes)} tasks, {self.edge_count} dependencies)"
