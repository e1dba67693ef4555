"""GreedyDescentStrategy - Follow the steepest way down to a drain.

At each step:
1. If a neighbor is a target, step onto it (nearest such target) and stop
2. Otherwise move to the lowest unvisited neighbor that is strictly lower
3. If no neighbor is strictly lower, fail with LOCAL_MINIMUM

Step 1 is not strict descent: an adjacent target is taken even when it sits
higher than the current vertex, so a vertex next to a drain always drains.
Every other step must go strictly down.

Fast, but not optimal and may stall in depressions. Ties between equally low
neighbors go to the shorter edge, then the lower index.
"""

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.routing.base import PathStrategy


class GreedyDescentStrategy(PathStrategy):
    """Steepest-descent walk toward the first reachable target."""

    name = RoutingConfig.STRATEGY_GREEDY

    def __init__(
        self,
        uphill_penalty: float = RoutingConfig.UPHILL_PENALTY_PER_UNIT,
        elevation_tolerance: float = RoutingConfig.ELEVATION_TOLERANCE,
    ) -> None:
        super().__init__(uphill_penalty=uphill_penalty)
        self.elevation_tolerance = elevation_tolerance

    def _search(self, graph: RoofGraph, start: int, targets: frozenset[int]) -> PathResult:
        if graph.degree(start) == 0:
            return PathResult.failure(start, FailureReason.NO_PATH)

        elevations = graph.vertices.elevations
        path = [start]
        visited = {start}
        cost = 0.0
        current = start

        while True:
            neighbors = graph.neighbors(current)

            reachable = [n for n in neighbors if n in targets]
            if reachable:
                target = min(reachable, key=lambda n: (graph.edge_length(current, n), n))
                cost += self.edge_cost(graph, current, target)
                path.append(target)
                return PathResult.success(
                    start=start, vertices=tuple(path), length=self.path_length(graph, path), cost=cost
                )

            floor_z = elevations[current] - self.elevation_tolerance
            lower = [n for n in neighbors if n not in visited and elevations[n] < floor_z]
            if not lower:
                return PathResult.failure(start, FailureReason.LOCAL_MINIMUM)

            step = min(lower, key=lambda n: (elevations[n], graph.edge_length(current, n), n))
            cost += self.edge_cost(graph, current, step)
            path.append(step)
            visited.add(step)
            current = step
