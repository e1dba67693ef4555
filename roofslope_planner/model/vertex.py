"""Vertex and VertexSet - the geometry atoms of a drainage run.

A Vertex is one shape-editable point of the roof mesh. The VertexSet is the
integer-indexed arena holding every vertex of a run: positions live in one
contiguous read-only numpy array and every other structure (spatial index,
graph adjacency, path results, offsets) refers to vertices by index only.

The set is built once per run and discarded after offsets are applied.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex with a stable index and a 3D position.

    Attributes:
        index: Position of the vertex in its VertexSet (0..n-1)
        x: X coordinate in the internal length unit
        y: Y coordinate in the internal length unit
        z: Elevation in the internal length unit
        is_corner: Vertex sits on a roof corner
        is_drain: Vertex was flagged as a drain by the host

    Example:
        vertex = Vertex(index=0, x=10.0, y=4.0, z=0.0)
    """

    index: int
    x: float
    y: float
    z: float
    is_corner: bool = False
    is_drain: bool = False

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if self.index < 0:
            raise ValueError(f"Vertex index must be non-negative, got {self.index}")
        if np.isnan(self.x) or np.isnan(self.y) or np.isnan(self.z):
            raise ValueError(f"Vertex {self.index} cannot have NaN coordinates ({self.x}, {self.y}, {self.z})")

    @property
    def position(self) -> tuple[float, float, float]:
        """Return (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vertex({self.index}, x={self.x:.3f}, y={self.y:.3f}, z={self.z:.3f})"


class VertexSet:
    """Immutable, integer-indexed arena of mesh vertices.

    Positions are stored as a read-only (n, 3) float64 array so geometric
    queries can be vectorized. Vertex objects are rebuilt on demand.

    Example:
        vertices = VertexSet.from_positions([(0, 0, 0), (5, 0, 0), (10, 0, 0)])
        vertices.position(1)  # array([5., 0., 0.])
    """

    def __init__(
        self,
        positions: np.ndarray,
        corner_flags: Optional[np.ndarray] = None,
        drain_flags: Optional[np.ndarray] = None,
    ) -> None:
        """Initialize from a position array.

        Args:
            positions: Array-like of shape (n, 3)
            corner_flags: Optional boolean array of length n
            drain_flags: Optional boolean array of length n
        """
        array = np.array(positions, dtype=np.float64)
        if array.size == 0:
            array = array.reshape(0, 3)
        if array.ndim != 2 or array.shape[1] != 3:
            raise ValueError(f"Vertex positions must have shape (n, 3), got {array.shape}")
        if np.isnan(array).any():
            raise ValueError("Vertex positions cannot contain NaN")

        n = array.shape[0]
        corners = np.zeros(n, dtype=bool) if corner_flags is None else np.array(corner_flags, dtype=bool)
        drains = np.zeros(n, dtype=bool) if drain_flags is None else np.array(drain_flags, dtype=bool)
        if corners.shape != (n,) or drains.shape != (n,):
            raise ValueError("Vertex flag arrays must match the number of positions")

        for arr in (array, corners, drains):
            arr.setflags(write=False)

        self._positions = array
        self._corners = corners
        self._drains = drains

    @classmethod
    def from_vertices(cls, vertices: Sequence[Vertex]) -> "VertexSet":
        """Create a VertexSet from Vertex objects.

        Indices must be exactly 0..n-1 in order so that list position
        and vertex identity coincide.
        """
        for position, vertex in enumerate(vertices):
            if vertex.index != position:
                raise ValueError(f"Vertex at position {position} has index {vertex.index}; indices must be 0..n-1")
        return cls(
            positions=[v.position for v in vertices],
            corner_flags=[v.is_corner for v in vertices],
            drain_flags=[v.is_drain for v in vertices],
        )

    @classmethod
    def from_positions(cls, positions: Iterable[Sequence[float]]) -> "VertexSet":
        """Create a VertexSet from (x, y, z) tuples."""
        return cls(positions=[tuple(p) for p in positions])

    @property
    def positions(self) -> np.ndarray:
        """Read-only (n, 3) position array."""
        return self._positions

    @property
    def elevations(self) -> np.ndarray:
        """Read-only z column."""
        return self._positions[:, 2]

    @property
    def flagged_drains(self) -> frozenset[int]:
        """Indices of vertices the host flagged as drains."""
        return frozenset(int(i) for i in np.flatnonzero(self._drains))

    @property
    def corners(self) -> frozenset[int]:
        """Indices of vertices flagged as roof corners."""
        return frozenset(int(i) for i in np.flatnonzero(self._corners))

    def position(self, index: int) -> np.ndarray:
        """Position of one vertex."""
        return self._positions[index]

    def vertex(self, index: int) -> Vertex:
        """Materialize a Vertex object for an index."""
        x, y, z = self._positions[index]
        return Vertex(
            index=index,
            x=float(x),
            y=float(y),
            z=float(z),
            is_corner=bool(self._corners[index]),
            is_drain=bool(self._drains[index]),
        )

    def distance(self, i: int, j: int) -> float:
        """3D Euclidean distance between two vertices."""
        return float(np.linalg.norm(self._positions[i] - self._positions[j]))

    def __contains__(self, index: object) -> bool:
        return isinstance(index, (int, np.integer)) and 0 <= int(index) < len(self)

    def __len__(self) -> int:
        return int(self._positions.shape[0])

    def __iter__(self) -> Iterator[Vertex]:
        return (self.vertex(i) for i in range(len(self)))

    def __repr__(self) -> str:
        return f"VertexSet({len(self)} vertices)"
