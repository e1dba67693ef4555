"""Euclidean geometry helpers for roof meshes.

Provides the small set of vector operations used by graph construction
and path strategies:
- 3D and planar (XY) distances
- Uphill traversal penalty
- Interior segment sampling for surface validation

All positions are (x, y, z) in one consistent length unit.
"""

from math import floor, hypot, sqrt
from typing import Sequence

import numpy as np

from roofslope_planner.constants import GraphConfig


class Geometry:
    """Static methods for distances and segment sampling."""

    @staticmethod
    def distance(a: Sequence[float], b: Sequence[float]) -> float:
        """3D Euclidean distance between two points."""
        dx = b[0] - a[0]
        dy = b[1] - a[1]
        dz = b[2] - a[2]
        return sqrt(dx * dx + dy * dy + dz * dz)

    @staticmethod
    def planar_distance(a: Sequence[float], b: Sequence[float]) -> float:
        """Horizontal distance ignoring elevation."""
        return hypot(b[0] - a[0], b[1] - a[1])

    @staticmethod
    def uphill_penalty(from_z: float, to_z: float, penalty_per_unit: float) -> float:
        """Extra traversal cost for climbing from from_z to to_z.

        Zero for flat or downhill moves, so the penalty never makes a
        traversal cheaper than its length.
        """
        dz = to_z - from_z
        return dz * penalty_per_unit if dz > 0 else 0.0

    @staticmethod
    def sample_count(length: float) -> int:
        """Number of sampling intervals for an edge of the given length.

        Scales with length and never drops below GraphConfig.MIN_EDGE_SAMPLES.
        """
        return max(GraphConfig.MIN_EDGE_SAMPLES, int(floor(length * GraphConfig.SAMPLES_PER_UNIT)))

    @staticmethod
    def interior_samples(a: np.ndarray, b: np.ndarray, intervals: int) -> np.ndarray:
        """Points strictly between a and b at t = k / intervals, k = 1..intervals-1.

        Returns:
            Array of shape (intervals - 1, 3).
        """
        t = np.arange(1, intervals, dtype=np.float64) / intervals
        return a + (b - a) * t[:, np.newaxis]
