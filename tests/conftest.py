"""Shared pytest fixtures for roofslope_planner tests.

Provides small roof geometries with hand-checkable path lengths.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    Horizontal roofs at z=0 in plan coordinates, so the surface (u, v) equals
    (x, y) and every path length can be worked out on paper.
"""

import pytest

from roofslope_planner.core.surface import PlanarSurface
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.model.vertex import VertexSet


# =============================================================================
# LINE OF THREE VERTICES
# =============================================================================


@pytest.fixture
def line_vertices() -> VertexSet:
    """Three vertices at x=0, 5, 10 on a flat roof; vertex 0 is the drain.

    All three pairs are within the default 15 ft max edge length, so vertex 2
    connects directly to the drain: path lengths are 5 and 10.
    """
    return VertexSet.from_positions([(0.0, 0.0, 0.0), (5.0, 0.0, 0.0), (10.0, 0.0, 0.0)])


@pytest.fixture
def line_surface() -> PlanarSurface:
    """Narrow strip around the line vertices."""
    return PlanarSurface.horizontal(outline=[(-1.0, -1.0), (11.0, -1.0), (11.0, 1.0), (-1.0, 1.0)])


# =============================================================================
# 5×5 GRID GRAPH
# =============================================================================


@pytest.fixture
def grid_graph() -> RoofGraph:
    """Hand-built 4-connected 5×5 grid with unit spacing.

    Vertex index = row * 5 + col at position (col, row, 0). With the drain at
    vertex 0 (corner) the shortest path length is the Manhattan distance
    col + row, because diagonals are not edges.
    """
    positions = [(float(col), float(row), 0.0) for row in range(5) for col in range(5)]
    edges = []
    for row in range(5):
        for col in range(5):
            index = row * 5 + col
            if col < 4:
                edges.append((index, index + 1))
            if row < 4:
                edges.append((index, index + 5))
    return RoofGraph.from_edges(vertices=VertexSet.from_positions(positions), edges=edges)


# =============================================================================
# ROOF WITH A VOID
# =============================================================================


@pytest.fixture
def void_surface() -> PlanarSurface:
    """20×10 flat roof with a 4×4 void (skylight) in the middle.

    Void spans x=8..12, y=3..7.
    """
    return PlanarSurface.horizontal(
        outline=[(0.0, 0.0), (20.0, 0.0), (20.0, 10.0), (0.0, 10.0)],
        holes=[[(8.0, 3.0), (12.0, 3.0), (12.0, 7.0), (8.0, 7.0)]],
    )


@pytest.fixture
def void_vertices() -> VertexSet:
    """Drain and source on opposite sides of the void, two detour vertices.

    0: drain at (16, 5)
    1: source at (4, 5) - straight segment to the drain crosses the void
    2: detour above the void at (10, 9.5)
    3: detour below the void at (10, 0.5)

    Each detour leg is sqrt(6² + 4.5²) = 7.5, so the shortest valid path from
    vertex 1 has length 15.0. The 2-3 segment crosses the void too.
    """
    return VertexSet.from_positions([(16.0, 5.0, 0.0), (4.0, 5.0, 0.0), (10.0, 9.5, 0.0), (10.0, 0.5, 0.0)])


# =============================================================================
# DISCONNECTED VERTEX
# =============================================================================


@pytest.fixture
def disconnected_vertices() -> VertexSet:
    """Drain, a near neighbor, and a vertex 35 ft beyond any other.

    Vertex 2 is farther than the 15 ft max edge length from everything.
    """
    return VertexSet.from_positions([(0.0, 0.0, 0.0), (5.0, 0.0, 0.0), (40.0, 0.0, 0.0)])


@pytest.fixture
def long_strip_surface() -> PlanarSurface:
    """50×2 flat strip holding the disconnected vertices."""
    return PlanarSurface.horizontal(outline=[(-1.0, -1.0), (49.0, -1.0), (49.0, 1.0), (-1.0, 1.0)])
