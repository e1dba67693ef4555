"""Distance field - Nearest-drain costs for every vertex in one pass.

Instead of one Dijkstra query per vertex, run a single multi-source Dijkstra
from all drains over the transposed directed cost matrix (SciPy csgraph).
Transposing turns "cost from v to a drain" into "cost from a drain to v", so
uphill penalties keep their direction. Predecessors then give, for every
vertex, the next vertex toward its drain, from which geometric path lengths
are accumulated in order of increasing cost.

Edge costs come from a label-setting strategy's edge_cost, so the field agrees
with running that strategy per vertex (Dijkstra, A* or crease-weighted).
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
from scipy.sparse.csgraph import dijkstra

from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.routing.dijkstra import DijkstraStrategy


@dataclass(frozen=True)
class DistanceField:
    """Per-vertex nearest-target distances.

    Attributes:
        costs: Traversal cost to the nearest target (inf if unreachable)
        lengths: Geometric length of that route (inf if unreachable)
        next_hop: Next vertex toward the target (-1 at targets and unreachable vertices)
        nearest: Target reached from each vertex (-1 if unreachable)
        targets: Target vertex indices
    """

    costs: np.ndarray
    lengths: np.ndarray
    next_hop: np.ndarray
    nearest: np.ndarray
    targets: frozenset[int]

    def path(self, start: int) -> tuple[int, ...]:
        """Vertex sequence from start to its nearest target (empty if unreachable)."""
        if not np.isfinite(self.costs[start]):
            return ()
        path = [start]
        while path[-1] not in self.targets:
            path.append(int(self.next_hop[path[-1]]))
        return tuple(path)

    def result_for(self, start: int) -> PathResult:
        """PathResult equivalent to a per-vertex strategy query."""
        if not self.targets:
            return PathResult.failure(start, FailureReason.EMPTY_TARGETS)
        if start in self.targets:
            return PathResult.failure(start, FailureReason.SOURCE_IS_TARGET)
        if not np.isfinite(self.costs[start]):
            return PathResult.failure(start, FailureReason.NO_PATH)
        return PathResult.success(
            start=start,
            vertices=self.path(start),
            length=float(self.lengths[start]),
            cost=float(self.costs[start]),
        )


def compute_distance_field(
    graph: RoofGraph,
    targets: Iterable[int],
    strategy: Optional[DijkstraStrategy] = None,
) -> DistanceField:
    """Compute nearest-target costs and lengths for all vertices.

    Args:
        graph: Graph to search
        targets: Target vertex indices (drains)
        strategy: Supplies directed edge costs; defaults to DijkstraStrategy()

    Raises:
        ValueError: If graph is None or a target is outside the graph.
    """
    if graph is None:
        raise ValueError("Distance field requires a graph")
    target_set = frozenset(int(t) for t in targets)
    unknown = [t for t in target_set if t not in graph]
    if unknown:
        raise ValueError(f"Target vertices {sorted(unknown)} are outside the graph")

    n = graph.vertex_count
    strategy = strategy or DijkstraStrategy()
    costs = np.full(n, np.inf)
    lengths = np.full(n, np.inf)
    next_hop = np.full(n, -1, dtype=np.int64)
    nearest = np.full(n, -1, dtype=np.int64)
    if not target_set or n == 0:
        return DistanceField(costs=costs, lengths=lengths, next_hop=next_hop, nearest=nearest, targets=target_set)

    matrix = graph.to_csr(cost=lambda i, j: strategy.edge_cost(graph, i, j))
    costs, predecessors, sources = dijkstra(
        csgraph=matrix.T.tocsr(),
        directed=True,
        indices=sorted(target_set),
        return_predecessors=True,
        min_only=True,
    )

    for v in map(int, np.argsort(costs, kind="stable")):
        if not np.isfinite(costs[v]):
            break
        if v in target_set:
            lengths[v] = 0.0
            continue
        hop = int(predecessors[v])
        next_hop[v] = hop
        lengths[v] = lengths[hop] + graph.edge_length(v, hop)

    reachable = np.isfinite(costs)
    nearest[reachable] = sources[reachable]
    return DistanceField(costs=costs, lengths=lengths, next_hop=next_hop, nearest=nearest, targets=target_set)
