"""CreaseWeightedDijkstra - Dijkstra that prefers crease (valley/ridge) edges.

Crease edges cost their length times crease_factor; every other edge costs
its length times default_factor. The uphill penalty is added on top. Paths
therefore follow drawn creases toward drains where they exist.
"""

from typing import Iterable, Optional

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.core.geometry import Geometry
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.routing.dijkstra import DijkstraStrategy


class CreaseWeightedDijkstra(DijkstraStrategy):
    """Dijkstra with crease-dependent length multipliers.

    Example:
        strategy = CreaseWeightedDijkstra(crease_edges=[(0, 1), (1, 2)])
    """

    name = RoutingConfig.STRATEGY_CREASE

    def __init__(
        self,
        crease_edges: Optional[Iterable[tuple[int, int]]] = None,
        crease_factor: float = RoutingConfig.CREASE_FACTOR,
        default_factor: float = RoutingConfig.DEFAULT_EDGE_FACTOR,
        uphill_penalty: float = RoutingConfig.UPHILL_PENALTY_PER_UNIT,
    ) -> None:
        super().__init__(uphill_penalty=uphill_penalty)
        if crease_factor <= 0 or default_factor <= 0:
            raise ValueError(f"Edge factors must be positive, got crease={crease_factor}, default={default_factor}")
        self.crease_factor = crease_factor
        self.default_factor = default_factor
        self.crease_edges = frozenset((min(i, j), max(i, j)) for i, j in (crease_edges or ()))

    def is_crease(self, i: int, j: int) -> bool:
        return (min(i, j), max(i, j)) in self.crease_edges

    def edge_cost(self, graph: RoofGraph, i: int, j: int) -> float:
        factor = self.crease_factor if self.is_crease(i, j) else self.default_factor
        elevations = graph.vertices.elevations
        return graph.edge_length(i, j) * factor + Geometry.uphill_penalty(
            elevations[i], elevations[j], self.uphill_penalty
        )
