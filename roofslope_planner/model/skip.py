"""Skip and clamp records produced by slope assignment.

Skips mark vertices that receive no offset:
- No path to any drain under the current edge rules
- Path longer than the configured search distance

Clamps mark offsets scaled down to the physical limit. Neither is fatal;
the caller aggregates them into a user-facing summary.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from roofslope_planner.model.path_result import FailureReason


@dataclass(frozen=True)
class SkipReason(ABC):
    """Abstract base class for skipped-vertex records.

    Subclasses store specific parameters and compute message as property.
    Use isinstance() to check skip type.
    """

    vertex: int

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable skip message."""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class NoPathSkip(SkipReason):
    """Vertex cannot reach any drain.

    Attributes:
        reason: Failure reported by the path strategy
    """

    reason: FailureReason = FailureReason.NO_PATH

    @property
    def message(self) -> str:
        return f"Vertex {self.vertex} skipped: {self.reason.value}"


@dataclass(frozen=True)
class BeyondThresholdSkip(SkipReason):
    """Vertex path to the nearest drain exceeds the search distance.

    Attributes:
        path_length: Shortest path length found
        threshold: Configured maximum search distance
    """

    path_length: float = 0.0
    threshold: float = 0.0

    @property
    def message(self) -> str:
        return (
            f"Vertex {self.vertex} skipped: path length {self.path_length:.3f} "
            f"exceeds search distance {self.threshold:.3f}"
        )


@dataclass(frozen=True)
class OffsetClamp:
    """An offset scaled down to the maximum physical offset.

    Attributes:
        vertex: Vertex index
        raw_offset: Offset before clamping
        clamped_offset: Offset after clamping (same sign)
        max_offset: Physical limit applied
    """

    vertex: int
    raw_offset: float
    clamped_offset: float
    max_offset: float

    @property
    def message(self) -> str:
        return (
            f"Vertex {self.vertex}: offset scaled from {self.raw_offset:.3f} to "
            f"{self.clamped_offset:.3f} (limit {self.max_offset:.3f})"
        )

    def __str__(self) -> str:
        return self.message
