"""Dependency graph of monitor positions & placement order."""

import heapq
from collections import deque

from .logging_setup import get_logger
from .models import Config, CycleError, DisconnectedError, EmptyConfigError, UnknownMonitorError
from .position import split_position

__all__ = ["MonitorGraph", "build_graph", "compute_order", "is_connected"]

graph_logger = get_logger("monpos.graph")


class MonitorGraph:
    """Directed graph, edges go from a reference monitor to the monitors placed next to it.

    Vertices and edges keep their insertion order, so that every traversal is reproducible.
    Edges closing a cycle are refused.
    """

    def __init__(self) -> None:
        self._children: dict[str, list[str]] = {}

    @property
    def vertices(self) -> list[str]:
        """Return the vertices, in insertion order."""
        return list(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def children(self, name: str) -> list[str]:
        """Return the monitors positioned relative to `name`."""
        return list(self._children[name])

    def edges(self) -> list[tuple[str, str]]:
        """Return every (parent, child) edge."""
        return [(parent, child) for parent, children in self._children.items() for child in children]

    def add_vertex(self, name: str) -> None:
        """Add a monitor, adding an existing one is a no-op."""
        self._children.setdefault(name, [])

    def add_edge(self, parent: str, child: str) -> None:
        """Add a `parent -> child` dependency.

        Args:
            parent: The reference monitor
            child: The monitor positioned relative to `parent`

        Raises:
            UnknownMonitorError: If one of the monitors isn't a vertex
            CycleError: If the edge would close a cycle
        """
        if parent not in self._children:
            raise UnknownMonitorError(child, parent)
        if child not in self._children:
            raise UnknownMonitorError(parent, child)

        back_path = self.find_path(child, parent)
        if back_path is not None:
            raise CycleError([parent, *back_path])

        self._children[parent].append(child)

    def find_path(self, start: str, end: str) -> list[str] | None:
        """Return a path from `start` to `end` (both included), None if unreachable."""
        came_from: dict[str, str | None] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == end:
                path = [current]
                previous = came_from[current]
                while previous is not None:
                    path.append(previous)
                    previous = came_from[previous]
                return path[::-1]
            for child in self._children[current]:
                if child not in came_from:
                    came_from[child] = current
                    queue.append(child)
        return None

    def bfs(self, start: str) -> list[str]:
        """Return the vertices reachable from `start` (included), in breadth first order."""
        visited = [start]
        seen = {start}
        queue = deque([start])
        while queue:
            for child in self._children[queue.popleft()]:
                if child not in seen:
                    seen.add(child)
                    visited.append(child)
                    queue.append(child)
        return visited

    def topological_sort(self) -> list[str]:
        """Return the vertices so that every parent comes before its children.

        Ties are broken by name (Kahn's algorithm with a min-heap).

        Raises:
            CycleError: If some vertices are part of a cycle
        """
        in_degree = dict.fromkeys(self._children, 0)
        for _parent, child in self.edges():
            in_degree[child] += 1

        ready = [name for name, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)
        order: list[str] = []
        while ready:
            name = heapq.heappop(ready)
            order.append(name)
            for child in self._children[name]:
                in_degree[child] -= 1
                if in_degree[child] == 0:
                    heapq.heappush(ready, child)

        if len(order) != len(self._children):
            raise CycleError([name for name in self._children if in_degree[name] > 0])
        return order


def build_graph(config: Config) -> MonitorGraph:
    """Build the dependency graph of a configuration.

    Args:
        config: Monitor name -> monitor

    Returns:
        The graph, with one edge per positioned monitor

    Raises:
        MalformedDirectiveError: If a position isn't `<direction> <monitor>`
        UnknownMonitorError: If a position references an unknown monitor
        CycleError: If positions reference each other in a loop
    """
    graph = MonitorGraph()
    for name in config:
        graph.add_vertex(name)

    for name, monitor in config.items():
        _direction, reference = split_position(monitor.position)
        if reference:
            graph.add_edge(reference, name)
            graph_logger.debug("%s depends on %s", name, reference)
    return graph


def is_connected(graph: MonitorGraph, root: str) -> bool:
    """Return True if every vertex is reachable from `root`."""
    return len(graph.bfs(root)) == len(graph)


def compute_order(graph: MonitorGraph) -> list[str]:
    """Compute the placement order, the first monitor being the root.

    Args:
        graph: The dependency graph

    Returns:
        Monitor names, each one after its reference monitor

    Raises:
        EmptyConfigError: If the graph has no vertex
        DisconnectedError: If some monitors aren't attached to the root
    """
    if not len(graph):
        msg = "no monitor defined"
        raise EmptyConfigError(msg)

    order = graph.topological_sort()
    root = order[0]
    if not is_connected(graph, root):
        reachable = set(graph.bfs(root))
        unreachable = [name for name in order if name not in reachable]
        raise DisconnectedError(root, unreachable)

    graph_logger.debug("placement order: %s", ", ".join(order))
    return order
