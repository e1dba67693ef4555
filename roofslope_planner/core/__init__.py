"""Geometric core: surfaces, spatial indexing and graph construction.

- Geometry: Distances, uphill penalty, segment sampling
- ReferenceSurface / PlanarSurface / BoundedPlaneSurface: Roof top faces
- SurfaceContainmentTest: Point-on-surface predicate with tolerance
- SpatialIndex: Uniform grid for candidate pair search
- GraphBuilder: Surface-constrained vertex graph
- resolve_drains: Drain positions to vertex indices
"""

from roofslope_planner.core.drain_resolver import DrainResolution, resolve_drains
from roofslope_planner.core.geometry import Geometry
from roofslope_planner.core.graph_builder import GraphBuilder, GraphBuildStats
from roofslope_planner.core.spatial_index import SpatialIndex
from roofslope_planner.core.surface import (
    BoundedPlaneSurface,
    PlaneFrame,
    PlanarSurface,
    ReferenceSurface,
    SurfaceContainmentTest,
)

__all__ = [
    "Geometry",
    "ReferenceSurface",
    "PlaneFrame",
    "PlanarSurface",
    "BoundedPlaneSurface",
    "SurfaceContainmentTest",
    "SpatialIndex",
    "GraphBuilder",
    "GraphBuildStats",
    "DrainResolution",
    "resolve_drains",
]
