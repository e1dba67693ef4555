"""Data model classes for roof drainage runs.

Vertices are referenced everywhere by integer index into a VertexSet arena:
- Vertex: Geometry atom (index, x, y, z, corner/drain flags)
- VertexSet: Immutable arena of all vertices in a run
- RoofGraph: Frozen undirected adjacency over a VertexSet
- GraphStats: Degree and edge summary of a graph
- PathResult: Outcome of one nearest-drain query
- FailureReason: Why a query failed
- SkipReason: Vertices left without an offset (NoPathSkip, BeyondThresholdSkip)
- OffsetClamp: Offsets scaled down to the physical limit
- RunMetrics: Aggregate counters for a run
"""

from roofslope_planner.model.path_result import FailureReason, PathResult
from roofslope_planner.model.roof_graph import GraphStats, RoofGraph
from roofslope_planner.model.run_metrics import RunMetrics
from roofslope_planner.model.skip import (
    BeyondThresholdSkip,
    NoPathSkip,
    OffsetClamp,
    SkipReason,
)
from roofslope_planner.model.vertex import Vertex, VertexSet

__all__ = [
    "Vertex",
    "VertexSet",
    "RoofGraph",
    "GraphStats",
    "PathResult",
    "FailureReason",
    "SkipReason",
    "NoPathSkip",
    "BeyondThresholdSkip",
    "OffsetClamp",
    "RunMetrics",
]
