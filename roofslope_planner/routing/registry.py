"""Strategy lookup by configuration name."""

from typing import Iterable, Optional

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.routing.astar import AStarStrategy
from roofslope_planner.routing.base import PathStrategy
from roofslope_planner.routing.crease_dijkstra import CreaseWeightedDijkstra
from roofslope_planner.routing.dijkstra import DijkstraStrategy
from roofslope_planner.routing.greedy import GreedyDescentStrategy

STRATEGY_NAMES = tuple(RoutingConfig.STRATEGIES)


def create_strategy(name: str, crease_edges: Optional[Iterable[tuple[int, int]]] = None) -> PathStrategy:
    """Instantiate a path strategy by name.

    Args:
        name: One of STRATEGY_NAMES
        crease_edges: Crease index pairs, used by the crease strategy only

    Raises:
        ValueError: If the name is unknown.
    """
    if name == RoutingConfig.STRATEGY_DIJKSTRA:
        return DijkstraStrategy()
    if name == RoutingConfig.STRATEGY_ASTAR:
        return AStarStrategy()
    if name == RoutingConfig.STRATEGY_CREASE:
        return CreaseWeightedDijkstra(crease_edges=crease_edges)
    if name == RoutingConfig.STRATEGY_GREEDY:
        return GreedyDescentStrategy()
    raise ValueError(f"Unknown path strategy '{name}', expected one of {', '.join(STRATEGY_NAMES)}")
