"""DrainagePlanner - Orchestrates a complete drainage slope run.

Pipeline:
1. Validate inputs (vertices, surface, drains)
2. Build the surface-constrained graph
3. Resolve drain positions to vertex indices
4. Find the nearest drain for every other vertex (per-vertex strategy queries,
   or one distance field pass)
5. Convert path lengths to offsets and finalize run metrics

The host applies the returned offsets to its mesh; nothing here mutates input.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from roofslope_planner.constants import LogConfig
from roofslope_planner.core.drain_resolver import resolve_drains
from roofslope_planner.core.graph_builder import GraphBuilder, GraphBuildStats
from roofslope_planner.core.surface import ReferenceSurface
from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import GraphStats
from roofslope_planner.model.run_metrics import RunMetrics
from roofslope_planner.model.skip import OffsetClamp, SkipReason
from roofslope_planner.model.vertex import VertexSet
from roofslope_planner.planning.settings import PlannerSettings
from roofslope_planner.planning.slope_assigner import SlopeAssigner
from roofslope_planner.routing.distance_field import compute_distance_field
from roofslope_planner.routing.registry import create_strategy

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class DrainageResult:
    """Everything a host needs after a run.

    Attributes:
        offsets: Signed elevation offset per vertex (drains 0.0, skipped absent)
        metrics: Finalized run metrics
        skipped: Vertices without an offset and why
        clamps: Offsets scaled down to the physical limit
        drain_indices: Resolved drain vertices
        unresolved_drains: Drain positions without a vertex within tolerance
        graph_stats: Statistics of the built graph
        build_stats: Graph construction counters
        paths: PathResult per non-drain vertex (only with settings.keep_paths)
        cancelled: Run was cancelled before completion (offsets empty)
    """

    offsets: dict[int, float] = field(default_factory=dict)
    metrics: RunMetrics = field(default_factory=RunMetrics)
    skipped: list[SkipReason] = field(default_factory=list)
    clamps: list[OffsetClamp] = field(default_factory=list)
    drain_indices: frozenset[int] = frozenset()
    unresolved_drains: tuple[tuple[float, float, float], ...] = ()
    graph_stats: Optional[GraphStats] = None
    build_stats: Optional[GraphBuildStats] = None
    paths: dict[int, PathResult] = field(default_factory=dict)
    cancelled: bool = False


class DrainagePlanner:
    """Computes drainage offsets for a roof.

    Example:
        planner = DrainagePlanner(PlannerSettings(slope_pct=2.0, max_offset=0.5))
        result = planner.run(vertices=vertices, surface=surface, drain_positions=[(10, 5, 0)])
        for index, offset in result.offsets.items():
            ...
    """

    def __init__(self, settings: Optional[PlannerSettings] = None) -> None:
        self.settings = settings or PlannerSettings()
        self.graph_builder = GraphBuilder(
            min_edge_length=self.settings.min_edge_length,
            max_edge_length=self.settings.max_edge_length,
            tolerance=self.settings.surface_tolerance,
        )
        self.slope_assigner = SlopeAssigner(
            distance_threshold=self.settings.distance_threshold,
            direction=self.settings.direction,
        )

    @staticmethod
    def reset_offsets(vertices: VertexSet) -> dict[int, float]:
        """Offsets that return every vertex to the unsloped surface."""
        return {i: 0.0 for i in range(len(vertices))}

    def run(
        self,
        vertices: VertexSet,
        surface: Optional[ReferenceSurface],
        drain_positions: Sequence[Sequence[float]],
        crease_edges: Optional[Iterable[tuple[int, int]]] = None,
        progress_callback: Optional[ProgressCallback] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> DrainageResult:
        """Run the full pipeline.

        Args:
            vertices: Shape-editable vertices of the roof
            surface: Reference top face
            drain_positions: Drain points as (x, y, z); vertices flagged as
                drains in the VertexSet count as drains too
            crease_edges: Crease index pairs for the crease strategy
            progress_callback: Called as progress_callback(done, total) between vertices
            should_cancel: Polled between vertices; True stops the run

        Returns:
            DrainageResult with offsets and diagnostics.

        Raises:
            ValueError: On configuration errors (no vertices, no surface,
                no drains, no drain resolved, graph without edges).
        """
        start_time = time.perf_counter()
        settings = self.settings

        if len(vertices) == 0:
            raise ValueError("No vertices to slope")
        if surface is None:
            raise ValueError("A reference surface is required")
        if len(drain_positions) == 0 and not vertices.flagged_drains:
            raise ValueError("No drains given")

        logger.info(
            f"Starting drainage run: {len(vertices)} vertices, {len(drain_positions)} drain positions, "
            f"slope={settings.slope_pct}%, strategy={settings.strategy}"
        )

        graph, build_stats = self.graph_builder.build_with_stats(vertices=vertices, surface=surface)
        graph_stats = graph.stats()
        logger.info(f"Graph built: {graph_stats}")
        logger.debug(f"Graph build: {build_stats}")
        if graph.edge_count == 0:
            raise ValueError("Graph has no edges; check the surface and edge length bounds")

        resolution = resolve_drains(
            vertices=vertices,
            drain_positions=drain_positions,
            tolerance=settings.drain_tolerance,
            fallback_to_nearest=settings.fallback_to_nearest,
        )
        for position in resolution.unresolved:
            logger.warning(f"No vertex within {settings.drain_tolerance} of drain at {position}")
        drains = resolution.indices | vertices.flagged_drains
        if not drains:
            raise ValueError("No drain could be resolved to a vertex")
        logger.info(f"Resolved {len(drains)} drain vertices")

        strategy = create_strategy(settings.strategy, crease_edges=crease_edges)
        distances = compute_distance_field(graph, drains, strategy) if settings.use_distance_field else None

        sources = [i for i in range(len(vertices)) if i not in drains]
        path_lengths: dict[int, float] = {}
        failures: dict[int, FailureReason] = {}
        paths: dict[int, PathResult] = {}

        for done, vertex in enumerate(sources):
            if should_cancel is not None and should_cancel():
                logger.info(f"Drainage run cancelled after {done}/{len(sources)} vertices")
                metrics = RunMetrics().finalize(time.perf_counter() - start_time, strategy=strategy.name)
                return DrainageResult(
                    metrics=metrics,
                    drain_indices=drains,
                    unresolved_drains=resolution.unresolved,
                    graph_stats=graph_stats,
                    build_stats=build_stats,
                    cancelled=True,
                )

            if distances is not None:
                path = distances.result_for(vertex)
            else:
                path = strategy.find_nearest_target(graph, vertex, drains)
            path_lengths[vertex] = path.length
            if not path.found:
                failures[vertex] = path.reason
            if settings.keep_paths:
                paths[vertex] = path

            if progress_callback is not None:
                progress_callback(done + 1, len(sources))
            if (done + 1) % LogConfig.PROGRESS_EVERY_N_VERTICES == 0:
                logger.debug(f"Processed {done + 1}/{len(sources)} vertices")

        assignment = self.slope_assigner.assign(
            path_lengths=path_lengths,
            slope_pct=settings.slope_pct,
            max_offset=settings.max_offset,
            drain_indices=drains,
            failure_reasons=failures,
        )
        metrics = assignment.metrics.finalize(time.perf_counter() - start_time, strategy=strategy.name)

        for clamp in assignment.clamps:
            logger.info(clamp.message)
        if assignment.skipped:
            logger.warning(f"{len(assignment.skipped)} vertices skipped (no path or beyond search distance)")
        logger.info(f"Drainage run finished. {metrics.summary()}")

        return DrainageResult(
            offsets=assignment.offsets,
            metrics=metrics,
            skipped=assignment.skipped,
            clamps=assignment.clamps,
            drain_indices=drains,
            unresolved_drains=resolution.unresolved,
            graph_stats=graph_stats,
            build_stats=build_stats,
            paths=paths,
            cancelled=False,
        )
