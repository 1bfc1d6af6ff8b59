from dataclasses import dataclass, field
from typing import Dict, List
from collections import defaultdict, deque

PHASE_ORDER: Dict[str, int] = {
    "parse": 10,
    "document": 20,
    "corpus": 30,
}


@dataclass
class CheckNode:
    name: str
    phase: str
    priority: int
    depends_on: List[str] = field(default_factory=list)


class CircularDependencyError(Exception):
    pass


class CheckExecutionGraph:
    def __init__(self):
        self.nodes: Dict[str, CheckNode] = {}
        self.edges: Dict[str, List[str]] = defaultdict(list)

    def add_node(self, node: CheckNode):
        self.nodes[node.name] = node

    def _sort_key(self, name: str):
        n = self.nodes[name]
        return (PHASE_ORDER.get(n.phase, 999), n.priority, n.name)

    def topological_sort(self) -> List[str]:
        # dependencies outside the selected set are ignored
        self.edges = defaultdict(list)
        in_degree: Dict[str, int] = {name: 0 for name in self.nodes}
        for node in self.nodes.values():
            for dep in dict.fromkeys(node.depends_on):
                if dep in self.nodes and dep != node.name:
                    self.edges[dep].append(node.name)
                    in_degree[node.name] += 1
                elif dep == node.name:
                    raise CircularDependencyError(f"Check {node.name!r} depends on itself")

        ready = sorted([n for n, d in in_degree.items() if d == 0], key=self._sort_key)
        queue = deque(ready)
        order: List[str] = []

        while queue:
            current = queue.popleft()
            order.append(current)

            released = []
            for neighbor in self.edges[current]:
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    released.append(neighbor)
            if released:
                queue = deque(sorted([*queue, *released], key=self._sort_key))

        if len(order) != len(self.nodes):
            stuck = sorted(n for n, d in in_degree.items() if d > 0)
            raise CircularDependencyError(f"Circular check dependency detected: {', '.join(stuck)}")

        return order
