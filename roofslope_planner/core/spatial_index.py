"""SpatialIndex - Uniform 3D grid bucketing of vertex positions.

Limits candidate edge pairs to vertices in nearby cells instead of testing
all n² pairs. The cell key of a position is floor(coord / cell_size) per axis.

With the default sizing rule (cell = max(1, max_edge / 2)) the neighbourhood
radius in cells is ceil(max_edge / cell_size); for max_edge ≤ 1 that is a
single ring (3×3×3 cells).
"""

from collections import defaultdict
from itertools import product
from math import ceil
from typing import Iterator

import numpy as np

from roofslope_planner.constants import GraphConfig

CellKey = tuple[int, int, int]


class SpatialIndex:
    """Map from cell key to the vertex indices whose positions fall in that cell.

    Example:
        index = SpatialIndex.build(positions=vertices.positions, cell_size=1.0)
        list(index.candidates(0))  # vertex 0 and every vertex in neighbouring cells
    """

    def __init__(self, cells: dict[CellKey, list[int]], keys: np.ndarray, cell_size: float, radius: int = 1) -> None:
        self._cells = cells
        self._keys = keys
        self.cell_size = cell_size
        self.radius = radius
        self._offsets = list(product(range(-radius, radius + 1), repeat=3))

    @staticmethod
    def cell_size_for(max_edge_length: float) -> float:
        """Cell size for a maximum edge length: half of it, never below GraphConfig.MIN_CELL_SIZE."""
        return max(GraphConfig.MIN_CELL_SIZE, max_edge_length * GraphConfig.CELL_SIZE_FACTOR)

    @staticmethod
    def radius_for(max_edge_length: float, cell_size: float) -> int:
        """Neighbourhood radius in cells that covers every pair within max_edge_length."""
        return max(1, int(ceil(max_edge_length / cell_size)))

    @classmethod
    def build(cls, positions: np.ndarray, cell_size: float, radius: int = 1) -> "SpatialIndex":
        """Bucket an (n, 3) position array into cells.

        Args:
            positions: Vertex positions, row i belongs to vertex i
            cell_size: Edge length of a cubic cell (> 0)
            radius: Neighbourhood radius in cells used by candidates()
        """
        if cell_size <= 0:
            raise ValueError(f"Cell size must be positive, got {cell_size}")

        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        keys = np.floor(positions / cell_size).astype(np.int64)

        cells: dict[CellKey, list[int]] = defaultdict(list)
        for i, key in enumerate(map(tuple, keys)):
            cells[key].append(i)
        return cls(cells=dict(cells), keys=keys, cell_size=cell_size, radius=radius)

    @classmethod
    def for_edge_length(cls, positions: np.ndarray, max_edge_length: float) -> "SpatialIndex":
        """Build with the default cell sizing rule for a maximum edge length."""
        cell_size = cls.cell_size_for(max_edge_length)
        return cls.build(positions, cell_size=cell_size, radius=cls.radius_for(max_edge_length, cell_size))

    @property
    def cell_count(self) -> int:
        return len(self._cells)

    def __len__(self) -> int:
        return int(self._keys.shape[0])

    def cell_of(self, index: int) -> CellKey:
        cx, cy, cz = self._keys[index]
        return (int(cx), int(cy), int(cz))

    def candidates(self, index: int) -> Iterator[int]:
        """Vertex indices in the neighbourhood of a vertex's cell, itself included."""
        cx, cy, cz = self.cell_of(index)
        for dx, dy, dz in self._offsets:
            yield from self._cells.get((cx + dx, cy + dy, cz + dz), ())

    def candidate_pairs(self) -> Iterator[tuple[int, int]]:
        """Each unordered pair (i, j) with i < j in neighbouring cells, exactly once."""
        for i in range(len(self)):
            for j in self.candidates(i):
                if j > i:
                    yield (i, j)
