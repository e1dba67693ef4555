"""Path strategies for nearest-drain queries.

- PathStrategy: Shared contract find_nearest_target(graph, start, targets)
- DijkstraStrategy: Optimal by cost (length + uphill penalty)
- AStarStrategy: Dijkstra with a planar distance heuristic
- CreaseWeightedDijkstra: Prefers crease edges
- GreedyDescentStrategy: Steepest descent, may stop in a local minimum
- compute_distance_field: All vertices in one multi-source SciPy pass
- create_strategy: Lookup by configuration name
"""

from roofslope_planner.routing.astar import AStarStrategy
from roofslope_planner.routing.base import PathStrategy
from roofslope_planner.routing.crease_dijkstra import CreaseWeightedDijkstra
from roofslope_planner.routing.dijkstra import DijkstraStrategy
from roofslope_planner.routing.distance_field import DistanceField, compute_distance_field
from roofslope_planner.routing.greedy import GreedyDescentStrategy
from roofslope_planner.routing.registry import STRATEGY_NAMES, create_strategy

__all__ = [
    "PathStrategy",
    "DijkstraStrategy",
    "AStarStrategy",
    "CreaseWeightedDijkstra",
    "GreedyDescentStrategy",
    "DistanceField",
    "compute_distance_field",
    "STRATEGY_NAMES",
    "create_strategy",
]
