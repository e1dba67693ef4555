"""DijkstraStrategy - Label-setting shortest path to the nearest drain.

Costs are edge length plus the uphill penalty. The search stops at the first
target popped from the priority queue, which is the cost-nearest target.
Heap entries carry an insertion counter so equal costs pop in FIFO order.
"""

import heapq
from itertools import count
from typing import Callable, Optional

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.routing.base import PathStrategy


class DijkstraStrategy(PathStrategy):
    """Dijkstra search over the roof graph.

    Subclasses may override edge_cost (crease weighting) and heuristic_for (A*).
    With a zero heuristic the search is plain Dijkstra.
    """

    name = RoutingConfig.STRATEGY_DIJKSTRA

    def heuristic_for(self, graph: RoofGraph, targets: frozenset[int]) -> Callable[[int], float]:
        """Lower bound on the remaining cost from a vertex to any target.

        Built once per query. Nothing is stored on the strategy.
        """
        return lambda vertex: 0.0

    def _search(self, graph: RoofGraph, start: int, targets: frozenset[int]) -> PathResult:
        heuristic = self.heuristic_for(graph, targets)
        tie = count()
        best: dict[int, float] = {start: 0.0}
        previous: dict[int, Optional[int]] = {start: None}
        settled: set[int] = set()
        heap = [(heuristic(start), next(tie), start)]

        while heap:
            _, _, node = heapq.heappop(heap)
            if node in settled:
                continue
            settled.add(node)

            if node in targets:
                path = self.reconstruct(previous, node)
                return PathResult.success(
                    start=start, vertices=path, length=self.path_length(graph, path), cost=best[node]
                )

            for neighbor in graph.neighbors(node):
                if neighbor in settled:
                    continue
                cost = best[node] + self.edge_cost(graph, node, neighbor)
                if cost < best.get(neighbor, float("inf")):
                    best[neighbor] = cost
                    previous[neighbor] = node
                    priority = cost + heuristic(neighbor)
                    heapq.heappush(heap, (priority, next(tie), neighbor))

        return PathResult.failure(start, FailureReason.NO_PATH)
