"""Drain resolution - maps drain positions to vertex indices.

The host reports drains as 3D points (drain fixture locations). Each point
resolves to the nearest mesh vertex within a tolerance; points with no vertex
close enough are reported back instead of silently dropped.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.spatial import cKDTree

from roofslope_planner.constants import DrainConfig
from roofslope_planner.model.vertex import VertexSet


@dataclass(frozen=True)
class DrainResolution:
    """Outcome of resolving drain positions.

    Attributes:
        indices: Resolved drain vertex indices (duplicates collapsed)
        unresolved: Positions with no vertex within tolerance
    """

    indices: frozenset[int]
    unresolved: tuple[tuple[float, float, float], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.indices


def resolve_drains(
    vertices: VertexSet,
    drain_positions: Sequence[Sequence[float]],
    tolerance: float = DrainConfig.RESOLVE_TOLERANCE,
    fallback_to_nearest: bool = False,
) -> DrainResolution:
    """Resolve each drain position to its nearest vertex.

    Args:
        vertices: Vertex arena to search
        drain_positions: Drain points as (x, y, z)
        tolerance: Maximum distance between a drain point and its vertex
        fallback_to_nearest: Use the nearest vertex even beyond tolerance

    Returns:
        DrainResolution with resolved indices and unresolved positions.
    """
    points = [tuple(float(c) for c in p) for p in drain_positions]
    if len(vertices) == 0 or not points:
        return DrainResolution(indices=frozenset(), unresolved=tuple(points))

    tree = cKDTree(vertices.positions)
    distances, nearest = tree.query(np.asarray(points, dtype=np.float64), k=1)

    indices: set[int] = set()
    unresolved: list[tuple[float, float, float]] = []
    for point, distance, index in zip(points, distances, nearest):
        if distance <= tolerance or fallback_to_nearest:
            indices.add(int(index))
        else:
            unresolved.append(point)
    return DrainResolution(indices=frozenset(indices), unresolved=tuple(unresolved))
