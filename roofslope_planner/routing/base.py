"""PathStrategy - Shared contract for nearest-drain path queries.

Every strategy answers the same question: starting from one vertex, which
target (drain) is reached first and along which vertex sequence. Strategies
hold configuration only; nothing carries over between queries.

Query preconditions are checked here once for all strategies:
- Graph missing or start outside the graph: ValueError (caller bug)
- Empty target set: EMPTY_TARGETS failure
- Start is itself a target: SOURCE_IS_TARGET failure
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.core.geometry import Geometry
from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import RoofGraph


class PathStrategy(ABC):
    """Abstract base class for nearest-target path strategies.

    Subclasses implement _search, which is only called for valid queries.
    """

    name: str = ""

    def __init__(self, uphill_penalty: float = RoutingConfig.UPHILL_PENALTY_PER_UNIT) -> None:
        if uphill_penalty < 0:
            raise ValueError(f"Uphill penalty must be non-negative, got {uphill_penalty}")
        self.uphill_penalty = uphill_penalty

    def find_nearest_target(self, graph: RoofGraph, start: int, targets: Iterable[int]) -> PathResult:
        """Find a path from start to the nearest target.

        Args:
            graph: Graph to search
            start: Source vertex index
            targets: Target vertex indices (drains)

        Returns:
            PathResult; failures carry a FailureReason and no path.

        Raises:
            ValueError: If graph is None or start/targets are outside the graph.
        """
        if graph is None:
            raise ValueError("Path query requires a graph")
        if start not in graph:
            raise ValueError(f"Start vertex {start} is outside the graph ({graph.vertex_count} vertices)")

        target_set = frozenset(targets)
        unknown = [t for t in target_set if t not in graph]
        if unknown:
            raise ValueError(f"Target vertices {sorted(unknown)} are outside the graph")
        if not target_set:
            return PathResult.failure(start, FailureReason.EMPTY_TARGETS)
        if start in target_set:
            return PathResult.failure(start, FailureReason.SOURCE_IS_TARGET)

        return self._search(graph, start, target_set)

    @abstractmethod
    def _search(self, graph: RoofGraph, start: int, targets: frozenset[int]) -> PathResult:
        """Run the search for a validated query."""

    def edge_cost(self, graph: RoofGraph, i: int, j: int) -> float:
        """Directed traversal cost from i to j: edge length plus uphill penalty."""
        elevations = graph.vertices.elevations
        return graph.edge_length(i, j) + Geometry.uphill_penalty(elevations[i], elevations[j], self.uphill_penalty)

    @staticmethod
    def path_length(graph: RoofGraph, vertices: Sequence[int]) -> float:
        """Geometric length along a vertex sequence."""
        return sum(graph.edge_length(a, b) for a, b in zip(vertices, vertices[1:]))

    @staticmethod
    def reconstruct(previous: dict[int, Optional[int]], end: int) -> tuple[int, ...]:
        """Walk predecessor links back from end; returns start..end."""
        path = [end]
        node = previous[end]
        while node is not None:
            path.append(node)
            node = previous[node]
        return tuple(reversed(path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
