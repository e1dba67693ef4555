"""PathResult - Outcome of one nearest-drain path query.

Produced fresh per source vertex by a path strategy and consumed immediately
by slope assignment. A failed result never carries a partial path.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(Enum):
    """Why a path query did not reach a target."""

    SOURCE_IS_TARGET = "source is itself a target"
    EMPTY_TARGETS = "target set is empty"
    NO_PATH = "no path exists"
    LOCAL_MINIMUM = "no strictly-lower unvisited neighbor (local minimum)"


@dataclass(frozen=True)
class PathResult:
    """Result of a single-source, multi-target path query.

    Attributes:
        found: Whether a target was reached
        start: Source vertex index
        end: Target vertex reached (None on failure)
        vertices: Vertex sequence from start to end inclusive (empty on failure)
        length: Geometric length along the path (inf on failure)
        cost: Accumulated traversal cost including penalties (inf on failure)
        reason: Failure reason (None on success)
    """

    found: bool
    start: int
    end: Optional[int] = None
    vertices: tuple[int, ...] = ()
    length: float = float("inf")
    cost: float = float("inf")
    reason: Optional[FailureReason] = None

    @classmethod
    def success(cls, start: int, vertices: tuple[int, ...], length: float, cost: float) -> "PathResult":
        """Create a successful result ending at the last vertex of the path."""
        if not vertices or vertices[0] != start:
            raise ValueError(f"Path must start at vertex {start}, got {vertices}")
        return cls(found=True, start=start, end=vertices[-1], vertices=vertices, length=length, cost=cost)

    @classmethod
    def failure(cls, start: int, reason: FailureReason) -> "PathResult":
        """Create a failed result with a human-readable reason."""
        return cls(found=False, start=start, reason=reason)

    @property
    def message(self) -> str:
        """Human-readable summary."""
        if self.found:
            return f"Vertex {self.start} → drain {self.end}: length {self.length:.3f} over {len(self.vertices) - 1} edges"
        assert self.reason is not None
        return f"Vertex {self.start}: {self.reason.value}"

    def __str__(self) -> str:
        return self.message
