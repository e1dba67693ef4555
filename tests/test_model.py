"""Tests for roofslope_planner data model classes.

Tests: Vertex, VertexSet, RoofGraph, PathResult, skip records, RunMetrics
Focus: Validation, immutability, computed properties

Note: Fixtures are defined in conftest.py (line, grid, void and disconnected geometries).
"""

import numpy as np
import pytest

from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.model.run_metrics import RunMetrics
from roofslope_planner.model.skip import BeyondThresholdSkip, NoPathSkip, OffsetClamp, SkipReason
from roofslope_planner.model.vertex import Vertex, VertexSet


# =============================================================================
# TESTS FOR VERTICES
# =============================================================================


class TestVertex:
    """Vertex - the geometry atom."""

    def test_vertex_creation_and_position(self) -> None:
        vertex = Vertex(index=3, x=1.0, y=2.0, z=3.0, is_drain=True)
        assert vertex.position == (1.0, 2.0, 3.0)
        assert vertex.is_drain and not vertex.is_corner

    def test_nan_coordinate_rejected(self) -> None:
        with pytest.raises(ValueError, match="NaN"):
            Vertex(index=0, x=float("nan"), y=0.0, z=0.0)

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValueError):
            Vertex(index=-1, x=0.0, y=0.0, z=0.0)


class TestVertexSet:
    """VertexSet - integer-indexed arena."""

    def test_from_vertices_keeps_flags(self) -> None:
        vertices = VertexSet.from_vertices(
            [
                Vertex(index=0, x=0.0, y=0.0, z=0.0, is_drain=True),
                Vertex(index=1, x=3.0, y=4.0, z=0.0, is_corner=True),
            ]
        )
        assert len(vertices) == 2
        assert vertices.flagged_drains == frozenset({0})
        assert vertices.corners == frozenset({1})
        assert vertices.distance(0, 1) == pytest.approx(5.0)
        assert vertices.vertex(1) == Vertex(index=1, x=3.0, y=4.0, z=0.0, is_corner=True)

    def test_from_vertices_requires_contiguous_indices(self) -> None:
        with pytest.raises(ValueError, match="indices must be 0..n-1"):
            VertexSet.from_vertices([Vertex(index=1, x=0.0, y=0.0, z=0.0)])

    def test_positions_are_read_only(self, line_vertices: VertexSet) -> None:
        with pytest.raises(ValueError):
            line_vertices.positions[0, 0] = 99.0

    def test_wrong_shape_rejected(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            VertexSet(np.zeros((3, 2)))

    def test_empty_set(self) -> None:
        vertices = VertexSet(np.empty((0, 3)))
        assert len(vertices) == 0
        assert 0 not in vertices

    def test_contains(self, line_vertices: VertexSet) -> None:
        assert 0 in line_vertices and 2 in line_vertices
        assert 3 not in line_vertices and -1 not in line_vertices


# =============================================================================
# TESTS FOR GRAPH
# =============================================================================


class TestRoofGraph:
    """RoofGraph - frozen symmetric adjacency."""

    def test_from_edges_is_symmetric(self, line_vertices: VertexSet) -> None:
        graph = RoofGraph.from_edges(vertices=line_vertices, edges=[(0, 1), (1, 2)])
        assert graph.neighbors(1) == frozenset({0, 2})
        assert graph.has_edge(1, 0) and graph.has_edge(0, 1)
        assert graph.edge_count == 2
        assert list(graph.edges()) == [(0, 1), (1, 2)]

    def test_asymmetric_adjacency_rejected(self, line_vertices: VertexSet) -> None:
        with pytest.raises(ValueError, match="not symmetric"):
            RoofGraph(vertices=line_vertices, adjacency=[frozenset({1}), frozenset(), frozenset()])

    def test_self_loop_rejected(self, line_vertices: VertexSet) -> None:
        with pytest.raises(ValueError, match="Self-loop"):
            RoofGraph.from_edges(vertices=line_vertices, edges=[(1, 1)])

    def test_stats(self, grid_graph: RoofGraph) -> None:
        """5×5 grid: 40 edges, corner degree 2, interior degree 4."""
        stats = grid_graph.stats()
        assert stats.vertex_count == 25
        assert stats.edge_count == 40
        assert stats.min_degree == 2 and stats.max_degree == 4
        assert stats.isolated_count == 0
        assert stats.longest_edge == pytest.approx(1.0)

    def test_isolated_vertices(self, line_vertices: VertexSet) -> None:
        graph = RoofGraph.from_edges(vertices=line_vertices, edges=[(0, 1)])
        assert graph.isolated_vertices() == [2]

    def test_to_csr_uses_directed_costs(self, line_vertices: VertexSet) -> None:
        graph = RoofGraph.from_edges(vertices=line_vertices, edges=[(0, 1)])
        matrix = graph.to_csr(cost=lambda i, j: 1.0 if i < j else 7.0)
        assert matrix[0, 1] == 1.0
        assert matrix[1, 0] == 7.0
        assert matrix.nnz == 2


# =============================================================================
# TESTS FOR RESULTS AND DIAGNOSTICS
# =============================================================================


class TestPathResult:
    """PathResult - success and failure contract."""

    def test_success_ends_at_last_vertex(self) -> None:
        result = PathResult.success(start=2, vertices=(2, 1, 0), length=10.0, cost=10.0)
        assert result.found and result.end == 0
        assert result.reason is None

    def test_success_must_start_at_source(self) -> None:
        with pytest.raises(ValueError):
            PathResult.success(start=2, vertices=(1, 0), length=5.0, cost=5.0)

    def test_failure_carries_no_path(self) -> None:
        result = PathResult.failure(start=4, reason=FailureReason.NO_PATH)
        assert not result.found
        assert result.vertices == ()
        assert result.length == float("inf")
        assert "no path exists" in result.message


class TestSkipRecords:
    """Skip and clamp records compute readable messages."""

    def test_skip_subclasses(self) -> None:
        no_path = NoPathSkip(vertex=3)
        beyond = BeyondThresholdSkip(vertex=4, path_length=700.0, threshold=656.2)
        assert isinstance(no_path, SkipReason) and isinstance(beyond, SkipReason)
        assert "no path exists" in no_path.message
        assert "700.000" in str(beyond)

    def test_clamp_message(self) -> None:
        clamp = OffsetClamp(vertex=1, raw_offset=50.0, clamped_offset=10.0, max_offset=10.0)
        assert "50.000" in clamp.message and "10.000" in clamp.message


class TestRunMetrics:
    """RunMetrics - accumulation and finalization."""

    def test_accumulation(self) -> None:
        metrics = RunMetrics()
        metrics.record_drain()
        metrics.record_processed(offset=-0.5, path_length=25.0)
        metrics.record_processed(offset=1.0, path_length=80.0, clamped=True)
        metrics.record_skipped()

        assert metrics.total == 4
        assert metrics.clamped == 1
        assert metrics.highest_elevation == 1.0
        assert metrics.longest_path == 80.0

    def test_finalize_freezes(self) -> None:
        metrics = RunMetrics().finalize(duration_s=1.5, strategy="dijkstra")
        assert metrics.is_finalized and metrics.strategy == "dijkstra"
        with pytest.raises(RuntimeError):
            metrics.record_skipped()
        with pytest.raises(RuntimeError):
            metrics.finalize(duration_s=2.0)
