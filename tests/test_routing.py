"""Tests for roofslope_planner routing module.

Tests: DijkstraStrategy, AStarStrategy, CreaseWeightedDijkstra,
       GreedyDescentStrategy, create_strategy, compute_distance_field
Focus: Optimality, failure contract, uphill penalty, distance field agreement

Note: Fixtures are defined in conftest.py (line, grid, void and disconnected geometries).
"""

import math

import numpy as np
import pytest

from roofslope_planner.constants import RoutingConfig
from roofslope_planner.core.graph_builder import GraphBuilder
from roofslope_planner.core.surface import PlanarSurface
from roofslope_planner.model.path_result import FailureReason
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.model.vertex import VertexSet
from roofslope_planner.routing.astar import AStarStrategy
from roofslope_planner.routing.base import PathStrategy
from roofslope_planner.routing.crease_dijkstra import CreaseWeightedDijkstra
from roofslope_planner.routing.dijkstra import DijkstraStrategy
from roofslope_planner.routing.distance_field import compute_distance_field
from roofslope_planner.routing.greedy import GreedyDescentStrategy
from roofslope_planner.routing.registry import STRATEGY_NAMES, create_strategy

ALL_STRATEGIES = [DijkstraStrategy(), AStarStrategy(), CreaseWeightedDijkstra(), GreedyDescentStrategy()]


# =============================================================================
# SHARED CONTRACT
# =============================================================================


class TestFailureContract:
    """Every strategy reports the same failures the same way."""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.name)
    def test_empty_targets(self, strategy: PathStrategy, grid_graph: RoofGraph) -> None:
        result = strategy.find_nearest_target(grid_graph, start=12, targets=set())
        assert not result.found and result.reason == FailureReason.EMPTY_TARGETS

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.name)
    def test_source_is_target(self, strategy: PathStrategy, grid_graph: RoofGraph) -> None:
        result = strategy.find_nearest_target(grid_graph, start=0, targets={0, 24})
        assert not result.found and result.reason == FailureReason.SOURCE_IS_TARGET
        assert result.vertices == ()

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.name)
    def test_isolated_start_has_no_path(self, strategy: PathStrategy, line_vertices: VertexSet) -> None:
        graph = RoofGraph.from_edges(vertices=line_vertices, edges=[(0, 1)])
        result = strategy.find_nearest_target(graph, start=2, targets={0})
        assert not result.found and result.reason == FailureReason.NO_PATH
        assert math.isinf(result.length)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.name)
    def test_start_outside_graph_rejected(self, strategy: PathStrategy, grid_graph: RoofGraph) -> None:
        with pytest.raises(ValueError, match="outside the graph"):
            strategy.find_nearest_target(grid_graph, start=25, targets={0})

    def test_none_graph_rejected(self) -> None:
        with pytest.raises(ValueError):
            DijkstraStrategy().find_nearest_target(None, start=0, targets={1})  # type: ignore[arg-type]

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.name)
    def test_success_path_is_connected(self, strategy: PathStrategy, grid_graph: RoofGraph) -> None:
        """Paths start at the source, end at a target and follow graph edges."""
        result = strategy.find_nearest_target(grid_graph, start=6, targets={0})
        if not result.found:
            assert result.reason == FailureReason.LOCAL_MINIMUM
            return
        assert result.vertices[0] == 6 and result.end == 0
        for a, b in zip(result.vertices, result.vertices[1:]):
            assert grid_graph.has_edge(a, b)


# =============================================================================
# OPTIMALITY
# =============================================================================


class TestOptimality:
    """Dijkstra and A* return the analytic shortest path on the 5×5 grid."""

    @pytest.mark.parametrize("strategy", [DijkstraStrategy(), AStarStrategy()], ids=lambda s: s.name)
    def test_manhattan_distance_to_corner(self, strategy: PathStrategy, grid_graph: RoofGraph) -> None:
        for row in range(5):
            for col in range(5):
                start = row * 5 + col
                if start == 0:
                    continue
                result = strategy.find_nearest_target(grid_graph, start=start, targets={0})
                assert result.found
                assert abs(result.length - (row + col)) < 1e-9
                assert abs(result.cost - (row + col)) < 1e-9

    def test_nearest_of_two_targets(self, grid_graph: RoofGraph) -> None:
        result = DijkstraStrategy().find_nearest_target(grid_graph, start=18, targets={0, 24})
        assert result.end == 24
        assert result.length == pytest.approx(2.0)

    def test_astar_matches_dijkstra_with_penalties(self) -> None:
        """Sloped grid: A* and Dijkstra agree on cost with uphill penalties active."""
        positions = [(float(c), float(r), 0.05 * ((c - 2) ** 2 + r)) for r in range(5) for c in range(5)]
        edges = [(r * 5 + c, r * 5 + c + 1) for r in range(5) for c in range(4)]
        edges += [(r * 5 + c, (r + 1) * 5 + c) for r in range(4) for c in range(5)]
        graph = RoofGraph.from_edges(vertices=VertexSet.from_positions(positions), edges=edges)
        for start in range(1, 25):
            expected = DijkstraStrategy().find_nearest_target(graph, start, {0, 4})
            actual = AStarStrategy().find_nearest_target(graph, start, {0, 4})
            assert actual.cost == pytest.approx(expected.cost, abs=1e-9)

    def test_astar_heuristic_is_per_query(self, grid_graph: RoofGraph) -> None:
        """Building a heuristic for one target set leaves another untouched."""
        strategy = AStarStrategy()
        toward_origin = strategy.heuristic_for(grid_graph, frozenset({0}))
        toward_corner = strategy.heuristic_for(grid_graph, frozenset({24}))
        assert toward_origin(24) == pytest.approx(math.hypot(4.0, 4.0))
        assert toward_corner(24) == 0.0

    def test_shared_astar_interleaved_queries(self, grid_graph: RoofGraph) -> None:
        strategy = AStarStrategy()
        first = strategy.find_nearest_target(grid_graph, start=19, targets={0})
        second = strategy.find_nearest_target(grid_graph, start=6, targets={24})
        again = strategy.find_nearest_target(grid_graph, start=19, targets={0})
        assert first.length == pytest.approx(7.0) and again.length == pytest.approx(7.0)
        assert second.length == pytest.approx(6.0)
        assert again.vertices == first.vertices


# =============================================================================
# COST MODEL
# =============================================================================


class TestCostModel:
    """Uphill penalty and crease weighting."""

    def test_uphill_edge_costs_more(self) -> None:
        vertices = VertexSet.from_positions([(0.0, 0.0, 0.0), (5.0, 0.0, 0.1)])
        graph = RoofGraph.from_edges(vertices=vertices, edges=[(0, 1)])
        strategy = DijkstraStrategy()
        length = graph.edge_length(0, 1)
        assert strategy.edge_cost(graph, 0, 1) == pytest.approx(length + 0.1 * RoutingConfig.UPHILL_PENALTY_PER_UNIT)
        assert strategy.edge_cost(graph, 1, 0) == pytest.approx(length)

    def test_penalty_avoids_climb(self) -> None:
        """Direct route over a 1 ft bump loses to a flat detour."""
        vertices = VertexSet.from_positions(
            [(0.0, 0.0, 0.0), (4.0, 0.0, 1.0), (8.0, 0.0, 0.0), (4.0, 3.0, 0.0)]
        )
        graph = RoofGraph.from_edges(vertices=vertices, edges=[(0, 1), (1, 2), (0, 3), (3, 2)])
        result = DijkstraStrategy().find_nearest_target(graph, start=2, targets={0})
        assert result.vertices == (2, 3, 0)
        assert result.length == pytest.approx(10.0)

    def test_crease_edges_preferred(self, grid_graph: RoofGraph) -> None:
        """Creases along row 0 and column 4 beat any route using a plain edge."""
        crease = [(c, c + 1) for c in range(4)] + [(r * 5 + 4, (r + 1) * 5 + 4) for r in range(4)]
        strategy = CreaseWeightedDijkstra(crease_edges=crease)
        result = strategy.find_nearest_target(grid_graph, start=24, targets={0})
        assert result.vertices == (24, 19, 14, 9, 4, 3, 2, 1, 0)
        assert result.length == pytest.approx(8.0)
        assert result.cost == pytest.approx(8.0)

    def test_non_crease_edges_cost_default_factor(self, grid_graph: RoofGraph) -> None:
        strategy = CreaseWeightedDijkstra()
        result = strategy.find_nearest_target(grid_graph, start=2, targets={0})
        assert result.length == pytest.approx(2.0)
        assert result.cost == pytest.approx(2.0 * RoutingConfig.DEFAULT_EDGE_FACTOR)

    def test_crease_edges_are_unordered(self) -> None:
        strategy = CreaseWeightedDijkstra(crease_edges=[(3, 1)])
        assert strategy.is_crease(1, 3) and strategy.is_crease(3, 1)


# =============================================================================
# GREEDY DESCENT
# =============================================================================


class TestGreedyDescent:
    """GreedyDescentStrategy - steepest descent with local minimum detection."""

    def test_descends_to_drain(self) -> None:
        vertices = VertexSet.from_positions(
            [(0.0, 0.0, 0.0), (2.0, 0.0, 0.2), (4.0, 0.0, 0.4), (4.0, 2.0, 0.3)]
        )
        graph = RoofGraph.from_edges(vertices=vertices, edges=[(0, 1), (1, 2), (2, 3), (3, 1)])
        result = GreedyDescentStrategy().find_nearest_target(graph, start=2, targets={0})
        assert result.vertices == (2, 1, 0)

    def test_steps_onto_adjacent_target_even_if_higher(self) -> None:
        vertices = VertexSet.from_positions([(0.0, 0.0, 0.5), (2.0, 0.0, 0.3), (4.0, 0.0, 0.0)])
        graph = RoofGraph.from_edges(vertices=vertices, edges=[(0, 1), (1, 2)])
        result = GreedyDescentStrategy().find_nearest_target(graph, start=1, targets={0})
        assert result.vertices == (1, 0)

    def test_local_minimum(self) -> None:
        """Start in a depression: every neighbor is higher."""
        vertices = VertexSet.from_positions([(0.0, 0.0, 0.0), (2.0, 0.0, 0.5), (4.0, 0.0, 0.1)])
        graph = RoofGraph.from_edges(vertices=vertices, edges=[(0, 1), (1, 2)])
        result = GreedyDescentStrategy().find_nearest_target(graph, start=2, targets={0})
        assert not result.found and result.reason == FailureReason.LOCAL_MINIMUM

    def test_flat_roof_is_local_minimum(self, grid_graph: RoofGraph) -> None:
        result = GreedyDescentStrategy().find_nearest_target(grid_graph, start=12, targets={0})
        assert result.reason == FailureReason.LOCAL_MINIMUM


# =============================================================================
# REGISTRY
# =============================================================================


class TestRegistry:
    """create_strategy - lookup by name."""

    @pytest.mark.parametrize("name", STRATEGY_NAMES)
    def test_known_names(self, name: str) -> None:
        assert create_strategy(name).name == name

    def test_crease_edges_passed_through(self) -> None:
        strategy = create_strategy(RoutingConfig.STRATEGY_CREASE, crease_edges=[(0, 1)])
        assert isinstance(strategy, CreaseWeightedDijkstra)
        assert strategy.crease_edges == frozenset({(0, 1)})

    def test_unknown_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown path strategy"):
            create_strategy("bellman-ford")


# =============================================================================
# DISTANCE FIELD
# =============================================================================


class TestDistanceField:
    """compute_distance_field - one multi-source pass equals per-vertex Dijkstra."""

    def test_grid_distances(self, grid_graph: RoofGraph) -> None:
        field = compute_distance_field(grid_graph, targets={0})
        expected = [row + col for row in range(5) for col in range(5)]
        np.testing.assert_allclose(field.lengths, expected, atol=1e-9)
        assert field.result_for(0).reason == FailureReason.SOURCE_IS_TARGET
        assert field.path(6)[0] == 6 and field.path(6)[-1] == 0

    def test_matches_dijkstra_on_void_roof(self, void_vertices: VertexSet, void_surface: PlanarSurface) -> None:
        graph = GraphBuilder().build(vertices=void_vertices, surface=void_surface)
        field = compute_distance_field(graph, targets={0})
        for start in (1, 2, 3):
            expected = DijkstraStrategy().find_nearest_target(graph, start, {0})
            actual = field.result_for(start)
            assert actual.length == pytest.approx(expected.length, abs=1e-9)
            assert actual.cost == pytest.approx(expected.cost, abs=1e-9)

    def test_matches_dijkstra_with_penalties_and_creases(self) -> None:
        rng = np.random.default_rng(11)
        positions = [(float(c), float(r), float(rng.uniform(0.0, 0.3))) for r in range(6) for c in range(6)]
        edges = [(r * 6 + c, r * 6 + c + 1) for r in range(6) for c in range(5)]
        edges += [(r * 6 + c, (r + 1) * 6 + c) for r in range(5) for c in range(6)]
        graph = RoofGraph.from_edges(vertices=VertexSet.from_positions(positions), edges=edges)
        targets = {0, 35}

        for strategy in (DijkstraStrategy(), CreaseWeightedDijkstra(crease_edges=edges[:10])):
            field = compute_distance_field(graph, targets, strategy)
            for start in range(1, 35):
                expected = strategy.find_nearest_target(graph, start, targets)
                assert field.costs[start] == pytest.approx(expected.cost, abs=1e-9)

    def test_unreachable_vertices(self, line_vertices: VertexSet) -> None:
        graph = RoofGraph.from_edges(vertices=line_vertices, edges=[(0, 1)])
        field = compute_distance_field(graph, targets={0})
        assert field.result_for(2).reason == FailureReason.NO_PATH
        assert field.path(2) == ()
        assert field.nearest[1] == 0 and field.nearest[2] == -1

    def test_empty_targets(self, grid_graph: RoofGraph) -> None:
        field = compute_distance_field(grid_graph, targets=set())
        assert field.result_for(3).reason == FailureReason.EMPTY_TARGETS
