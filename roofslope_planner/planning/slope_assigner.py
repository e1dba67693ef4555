"""SlopeAssigner - Converts path lengths into vertex elevation offsets.

For each vertex:
- Drain: offset exactly 0.0
- Path length L within the search distance: offset = L * slope_pct / 100,
  scaled down to max_offset if larger (recorded as an OffsetClamp)
- No path, or L beyond the search distance: skipped, no offset

Offsets are positive for direction "up" and negative for "down". All
quantities stay in the vertex length unit.
"""

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from roofslope_planner.constants import SlopeConfig
from roofslope_planner.model.path_result import FailureReason
from roofslope_planner.model.run_metrics import RunMetrics
from roofslope_planner.model.skip import BeyondThresholdSkip, NoPathSkip, OffsetClamp, SkipReason


def max_offset_from_thickness(thickness: float, fraction: float = SlopeConfig.THICKNESS_FRACTION) -> float:
    """Physical offset limit from structural thickness.

    Falls back to SlopeConfig.DEFAULT_MAX_OFFSET when the thickness is unknown (<= 0).
    """
    if not 0 < fraction <= 1:
        raise ValueError(f"Thickness fraction must be in (0, 1], got {fraction}")
    if thickness <= 0:
        return SlopeConfig.DEFAULT_MAX_OFFSET
    return thickness * fraction


@dataclass
class SlopeAssignment:
    """Offsets and diagnostics from one assignment.

    Attributes:
        offsets: Signed offset per vertex (drains and processed vertices only)
        metrics: Counters and extrema (not yet finalized)
        skipped: Vertices without an offset and why
        clamps: Offsets scaled down to max_offset
    """

    offsets: dict[int, float] = field(default_factory=dict)
    metrics: RunMetrics = field(default_factory=RunMetrics)
    skipped: list[SkipReason] = field(default_factory=list)
    clamps: list[OffsetClamp] = field(default_factory=list)


class SlopeAssigner:
    """Maps path lengths to offsets under a slope and a physical limit.

    Example:
        assigner = SlopeAssigner()
        result = assigner.assign({1: 25.0, 2: 50.0}, slope_pct=2.0, max_offset=1.0, drain_indices={0})
        result.offsets  # {0: 0.0, 1: 0.5, 2: 1.0}
    """

    def __init__(self, distance_threshold: float = math.inf, direction: str = SlopeConfig.DIRECTION_UP) -> None:
        if distance_threshold <= 0:
            raise ValueError(f"Search distance must be positive, got {distance_threshold}")
        if direction not in SlopeConfig.DIRECTIONS:
            raise ValueError(f"Unknown direction '{direction}', expected one of {', '.join(SlopeConfig.DIRECTIONS)}")
        self.distance_threshold = distance_threshold
        self.direction = direction

    @property
    def sign(self) -> float:
        return 1.0 if self.direction == SlopeConfig.DIRECTION_UP else -1.0

    def offset_for(self, path_length: float, slope_pct: float, max_offset: float) -> tuple[float, bool]:
        """Signed offset for one path length.

        Returns:
            Tuple (offset, clamped).
        """
        magnitude = path_length * slope_pct / 100.0
        clamped = abs(magnitude) > max_offset
        if clamped:
            magnitude = math.copysign(max_offset, magnitude)
        return self.sign * magnitude, clamped

    def assign(
        self,
        path_lengths: Mapping[int, float],
        slope_pct: float,
        max_offset: float,
        drain_indices: Iterable[int],
        failure_reasons: Optional[Mapping[int, FailureReason]] = None,
    ) -> SlopeAssignment:
        """Assign offsets to every vertex.

        Args:
            path_lengths: Path length to the nearest drain per vertex (inf if none)
            slope_pct: Slope in percent (> 0)
            max_offset: Offset magnitude limit (> 0)
            drain_indices: Drain vertices (offset 0.0)
            failure_reasons: Why a vertex has no path, for its skip record

        Raises:
            ValueError: If slope_pct or max_offset is not positive.
        """
        if slope_pct <= 0:
            raise ValueError(f"Slope must be positive, got {slope_pct}%")
        if max_offset <= 0:
            raise ValueError(f"Maximum offset must be positive, got {max_offset}")

        drains = frozenset(drain_indices)
        failure_reasons = failure_reasons or {}
        result = SlopeAssignment()

        for vertex in sorted(drains.union(path_lengths)):
            if vertex in drains:
                result.offsets[vertex] = 0.0
                result.metrics.record_drain()
                continue

            length = path_lengths[vertex]
            if not math.isfinite(length):
                reason = failure_reasons.get(vertex, FailureReason.NO_PATH)
                result.skipped.append(NoPathSkip(vertex=vertex, reason=reason))
                result.metrics.record_skipped()
                continue
            if length > self.distance_threshold:
                result.skipped.append(
                    BeyondThresholdSkip(vertex=vertex, path_length=length, threshold=self.distance_threshold)
                )
                result.metrics.record_skipped()
                continue

            offset, clamped = self.offset_for(length, slope_pct, max_offset)
            if clamped:
                raw = self.sign * length * slope_pct / 100.0
                result.clamps.append(
                    OffsetClamp(vertex=vertex, raw_offset=raw, clamped_offset=offset, max_offset=max_offset)
                )
            result.offsets[vertex] = offset
            result.metrics.record_processed(offset=offset, path_length=length, clamped=clamped)

        return result
