"""GraphBuilder - Builds the surface-constrained vertex graph.

Two vertices are connected when:
- Their 3D distance is in (min_edge_length, max_edge_length]
- Both endpoints lie on the reference surface
- Every interior sample of the straight segment between them lies on the surface

The last rule rejects segments that cross voids, openings or leave the roof
outline. Candidate pairs come from a SpatialIndex; build_pairwise tests all
pairs and is kept as a reference for small meshes.
"""

import time
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from roofslope_planner.constants import GraphConfig, SurfaceConfig
from roofslope_planner.core.geometry import Geometry
from roofslope_planner.core.spatial_index import SpatialIndex
from roofslope_planner.core.surface import ReferenceSurface, SurfaceContainmentTest
from roofslope_planner.model.roof_graph import RoofGraph
from roofslope_planner.model.vertex import VertexSet


@dataclass(frozen=True)
class GraphBuildStats:
    """Counters collected while building a graph.

    Attributes:
        candidate_pairs: Pairs considered (after spatial filtering)
        rejected_short: Pairs at or below the minimum edge length
        rejected_long: Pairs above the maximum edge length
        rejected_off_surface: Pairs with an endpoint or sample off the surface
        accepted: Edges added to the graph
        duration_s: Wall-clock build time in seconds
    """

    candidate_pairs: int = 0
    rejected_short: int = 0
    rejected_long: int = 0
    rejected_off_surface: int = 0
    accepted: int = 0
    duration_s: float = 0.0

    def __str__(self) -> str:
        return (
            f"Candidates: {self.candidate_pairs}, Accepted: {self.accepted}, "
            f"Rejected: short={self.rejected_short}, long={self.rejected_long}, "
            f"off-surface={self.rejected_off_surface} ({self.duration_s:.2f}s)"
        )


class GraphBuilder:
    """Connects vertices whose straight segment stays on the reference surface.

    Example:
        builder = GraphBuilder(min_edge_length=0.001, max_edge_length=15.0)
        graph = builder.build(vertices=vertices, surface=surface)
    """

    def __init__(
        self,
        min_edge_length: float = GraphConfig.MIN_EDGE_LENGTH,
        max_edge_length: float = GraphConfig.MAX_EDGE_LENGTH,
        tolerance: float = SurfaceConfig.PROJECTION_TOLERANCE,
    ) -> None:
        if min_edge_length < 0:
            raise ValueError(f"Minimum edge length cannot be negative, got {min_edge_length}")
        if max_edge_length <= min_edge_length:
            raise ValueError(
                f"Maximum edge length ({max_edge_length}) must exceed minimum edge length ({min_edge_length})"
            )
        self.min_edge_length = min_edge_length
        self.max_edge_length = max_edge_length
        self.tolerance = tolerance

    def build(self, vertices: VertexSet, surface: Optional[ReferenceSurface]) -> RoofGraph:
        """Build the graph using spatial indexing."""
        graph, _ = self.build_with_stats(vertices=vertices, surface=surface)
        return graph

    def build_with_stats(
        self, vertices: VertexSet, surface: Optional[ReferenceSurface]
    ) -> tuple[RoofGraph, GraphBuildStats]:
        """Build the graph and report filtering counters.

        An empty vertex set or a missing surface yields a graph without edges.
        """
        if len(vertices) == 0 or surface is None:
            return RoofGraph.empty(vertices), GraphBuildStats()

        index = SpatialIndex.for_edge_length(vertices.positions, self.max_edge_length)
        return self._connect(vertices, surface, index.candidate_pairs())

    def build_pairwise(self, vertices: VertexSet, surface: Optional[ReferenceSurface]) -> RoofGraph:
        """Build the graph by testing every vertex pair.

        Quadratic in the number of vertices; limited to
        GraphConfig.PAIRWISE_VERTEX_LIMIT vertices.
        """
        n = len(vertices)
        if n > GraphConfig.PAIRWISE_VERTEX_LIMIT:
            raise ValueError(f"Pairwise build is limited to {GraphConfig.PAIRWISE_VERTEX_LIMIT} vertices, got {n}")
        if n == 0 or surface is None:
            return RoofGraph.empty(vertices)

        pairs = ((i, j) for i in range(n) for j in range(i + 1, n))
        graph, _ = self._connect(vertices, surface, pairs)
        return graph

    def _connect(
        self, vertices: VertexSet, surface: ReferenceSurface, pairs: Iterable[tuple[int, int]]
    ) -> tuple[RoofGraph, GraphBuildStats]:
        start_time = time.perf_counter()
        containment = SurfaceContainmentTest(surface=surface, tolerance=self.tolerance)
        positions = vertices.positions
        endpoint_on_surface = containment.on_surface_many(positions)

        candidates = short = long_ = off_surface = 0
        edges: list[tuple[int, int]] = []
        for i, j in pairs:
            candidates += 1
            length = float(np.linalg.norm(positions[j] - positions[i]))
            if length <= self.min_edge_length:
                short += 1
                continue
            if length > self.max_edge_length:
                long_ += 1
                continue
            if not (endpoint_on_surface[i] and endpoint_on_surface[j]):
                off_surface += 1
                continue

            samples = Geometry.interior_samples(positions[i], positions[j], Geometry.sample_count(length))
            if not containment.on_surface_many(samples).all():
                off_surface += 1
                continue
            edges.append((i, j))

        graph = RoofGraph.from_edges(vertices=vertices, edges=edges)
        stats = GraphBuildStats(
            candidate_pairs=candidates,
            rejected_short=short,
            rejected_long=long_,
            rejected_off_surface=off_surface,
            accepted=len(edges),
            duration_s=time.perf_counter() - start_time,
        )
        return graph, stats
