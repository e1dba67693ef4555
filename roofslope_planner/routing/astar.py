"""AStarStrategy - Dijkstra guided by a planar distance heuristic.

h(v) = min over targets of the horizontal distance from v. Edge costs are at
least the 3D edge length, which is at least the planar distance, so h never
overestimates and is consistent. Results match Dijkstra in cost.
"""

from typing import Callable

import numpy as np

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.routing.dijkstra import DijkstraStrategy


class AStarStrategy(DijkstraStrategy):
    """A* search toward the nearest of several targets."""

    name = RoutingConfig.STRATEGY_ASTAR

    def heuristic_for(self, graph: RoofGraph, targets: frozenset[int]) -> Callable[[int], float]:
        positions = graph.vertices.positions
        target_xy = positions[sorted(targets), :2]

        def planar_distance_to_nearest(vertex: int) -> float:
            x, y = positions[vertex, :2]
            return float(np.min(np.hypot(target_xy[:, 0] - x, target_xy[:, 1] - y)))

        return planar_distance_to_nearest
