"""RoofGraph - Undirected adjacency graph over roof mesh vertices.

Produced once by GraphBuilder and read-only afterward:
- Adjacency is a tuple of frozensets indexed by vertex
- Every edge appears in the adjacency of both endpoints
- Edge weight is the 3D Euclidean length between endpoints

Traversal cost factors (uphill penalty, crease discount) are not stored here;
path strategies apply them while relaxing edges.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

import numpy as np
from scipy.sparse import csr_matrix

from roofslope_planner.model.vertex import VertexSet


@dataclass(frozen=True)
class GraphStats:
    """Summary statistics of a built graph.

    Attributes:
        vertex_count: Number of vertices (including isolated ones)
        edge_count: Number of undirected edges
        min_degree: Smallest vertex degree
        avg_degree: Mean vertex degree
        max_degree: Largest vertex degree
        isolated_count: Vertices without any edge
        longest_edge: Longest edge length (0.0 for an empty graph)
    """

    vertex_count: int
    edge_count: int
    min_degree: int
    avg_degree: float
    max_degree: int
    isolated_count: int
    longest_edge: float

    def __str__(self) -> str:
        return (
            f"Vertices: {self.vertex_count}, Edges: {self.edge_count}, "
            f"Degree: min={self.min_degree}, avg={self.avg_degree:.1f}, max={self.max_degree}, "
            f"Isolated: {self.isolated_count}, Longest edge: {self.longest_edge:.3f}"
        )


class RoofGraph:
    """Frozen undirected graph over a VertexSet.

    Example:
        graph = RoofGraph.from_edges(vertices=vertices, edges=[(0, 1), (1, 2)])
        graph.neighbors(1)  # frozenset({0, 2})
    """

    def __init__(self, vertices: VertexSet, adjacency: Sequence[frozenset[int]]) -> None:
        """Initialize from a symmetric adjacency list.

        Args:
            vertices: Vertex arena the indices refer to
            adjacency: One neighbor set per vertex

        Raises:
            ValueError: If adjacency is not symmetric, references unknown
                vertices, or contains self-loops.
        """
        if len(adjacency) != len(vertices):
            raise ValueError(f"Adjacency has {len(adjacency)} entries for {len(vertices)} vertices")

        frozen = tuple(frozenset(int(n) for n in neighbors) for neighbors in adjacency)
        for i, neighbors in enumerate(frozen):
            if i in neighbors:
                raise ValueError(f"Self-loop on vertex {i}")
            for j in neighbors:
                if j not in vertices:
                    raise ValueError(f"Vertex {i} references unknown neighbor {j}")
                if i not in frozen[j]:
                    raise ValueError(f"Edge ({i}, {j}) is not symmetric")

        self._vertices = vertices
        self._adjacency = frozen

    @classmethod
    def from_edges(cls, vertices: VertexSet, edges: Sequence[tuple[int, int]]) -> "RoofGraph":
        """Create a graph from an undirected edge list."""
        adjacency: list[set[int]] = [set() for _ in range(len(vertices))]
        for i, j in edges:
            adjacency[i].add(j)
            adjacency[j].add(i)
        return cls(vertices=vertices, adjacency=[frozenset(a) for a in adjacency])

    @classmethod
    def empty(cls, vertices: Optional[VertexSet] = None) -> "RoofGraph":
        """Graph without edges (every vertex isolated)."""
        vertices = vertices if vertices is not None else VertexSet(np.empty((0, 3)))
        return cls(vertices=vertices, adjacency=[frozenset() for _ in range(len(vertices))])

    @property
    def vertices(self) -> VertexSet:
        """Vertex arena backing this graph."""
        return self._vertices

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency) // 2

    def __contains__(self, index: object) -> bool:
        return index in self._vertices

    def neighbors(self, index: int) -> frozenset[int]:
        """Neighbor indices of a vertex."""
        return self._adjacency[index]

    def degree(self, index: int) -> int:
        return len(self._adjacency[index])

    def has_edge(self, i: int, j: int) -> bool:
        return j in self._adjacency[i]

    def edge_length(self, i: int, j: int) -> float:
        """Euclidean length of an edge (endpoints need not be adjacent)."""
        return self._vertices.distance(i, j)

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate undirected edges once each as (low, high) pairs."""
        for i, neighbors in enumerate(self._adjacency):
            for j in neighbors:
                if i < j:
                    yield (i, j)

    def edge_set(self) -> frozenset[tuple[int, int]]:
        """All edges as canonical (low, high) pairs."""
        return frozenset(self.edges())

    def isolated_vertices(self) -> list[int]:
        """Vertices without any edge."""
        return [i for i, neighbors in enumerate(self._adjacency) if not neighbors]

    def stats(self) -> GraphStats:
        """Compute degree and edge statistics."""
        degrees = [len(neighbors) for neighbors in self._adjacency]
        lengths = [self.edge_length(i, j) for i, j in self.edges()]
        return GraphStats(
            vertex_count=self.vertex_count,
            edge_count=len(lengths),
            min_degree=min(degrees) if degrees else 0,
            avg_degree=(sum(degrees) / len(degrees)) if degrees else 0.0,
            max_degree=max(degrees) if degrees else 0,
            isolated_count=sum(1 for d in degrees if d == 0),
            longest_edge=max(lengths) if lengths else 0.0,
        )

    def to_csr(self, cost: Optional[Callable[[int, int], float]] = None) -> csr_matrix:
        """Build a directed SciPy CSR matrix of traversal costs.

        Args:
            cost: Directed cost function cost(from, to). Defaults to edge length.

        Returns:
            (n, n) sparse matrix with one entry per directed traversal.
        """
        cost = cost or self.edge_length
        rows: list[int] = []
        cols: list[int] = []
        data: list[float] = []
        for i, neighbors in enumerate(self._adjacency):
            for j in neighbors:
                rows.append(i)
                cols.append(j)
                data.append(cost(i, j))

        n = self.vertex_count
        return csr_matrix((data, (rows, cols)), shape=(n, n), dtype=np.float64)

    def __repr__(self) -> str:
        return f"RoofGraph({self.vertex_count} vertices, {self.edge_count} edges)"
