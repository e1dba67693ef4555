"""PlannerSettings - Validated run configuration for a drainage run."""

from dataclasses import dataclass

from roofslope_planner.constants import DrainConfig, GraphConfig, RoutingConfig, SlopeConfig, SurfaceConfig


@dataclass(frozen=True)
class PlannerSettings:
    """Scalar configuration of one drainage run.

    Attributes:
        slope_pct: Target slope in percent (2.0 means 2%)
        max_offset: Largest offset magnitude a vertex may receive
        distance_threshold: Maximum path length to a drain (search distance)
        min_edge_length: Graph edges must be longer than this
        max_edge_length: Graph edges must not be longer than this
        surface_tolerance: Containment nudge and bounding box padding
        strategy: Path strategy name (see RoutingConfig.STRATEGIES)
        direction: Offset sign, "up" (positive) or "down" (negative)
        use_distance_field: Compute all paths with one multi-source pass
        keep_paths: Keep per-vertex PathResults in the run result
        drain_tolerance: Maximum distance from a drain position to its vertex
        fallback_to_nearest: Resolve drains to the nearest vertex regardless of distance
    """

    slope_pct: float = SlopeConfig.DEFAULT_SLOPE_PCT
    max_offset: float = SlopeConfig.DEFAULT_MAX_OFFSET
    distance_threshold: float = SlopeConfig.DEFAULT_SEARCH_DISTANCE
    min_edge_length: float = GraphConfig.MIN_EDGE_LENGTH
    max_edge_length: float = GraphConfig.MAX_EDGE_LENGTH
    surface_tolerance: float = SurfaceConfig.PROJECTION_TOLERANCE
    strategy: str = RoutingConfig.DEFAULT_STRATEGY
    direction: str = SlopeConfig.DIRECTION_UP
    use_distance_field: bool = False
    keep_paths: bool = False
    drain_tolerance: float = DrainConfig.RESOLVE_TOLERANCE
    fallback_to_nearest: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.slope_pct <= 0:
            raise ValueError(f"Slope must be positive, got {self.slope_pct}%")
        if self.max_offset <= 0:
            raise ValueError(f"Maximum offset must be positive, got {self.max_offset}")
        if self.distance_threshold <= 0:
            raise ValueError(f"Search distance must be positive, got {self.distance_threshold}")
        if self.min_edge_length < 0 or self.max_edge_length <= self.min_edge_length:
            raise ValueError(
                f"Invalid edge length bounds: min={self.min_edge_length}, max={self.max_edge_length}"
            )
        if self.surface_tolerance < 0 or self.drain_tolerance < 0:
            raise ValueError("Tolerances cannot be negative")
        if self.strategy not in RoutingConfig.STRATEGIES:
            raise ValueError(
                f"Unknown path strategy '{self.strategy}', expected one of {', '.join(RoutingConfig.STRATEGIES)}"
            )
        if self.direction not in SlopeConfig.DIRECTIONS:
            raise ValueError(f"Unknown direction '{self.direction}', expected one of {', '.join(SlopeConfig.DIRECTIONS)}")
        if self.use_distance_field and self.strategy == RoutingConfig.STRATEGY_GREEDY:
            raise ValueError("Distance field cannot be used with the greedy strategy")

    @classmethod
    def from_preset(cls, preset: str, **overrides: object) -> "PlannerSettings":
        """Settings with a named slope preset (see SlopeConfig.SLOPE_PRESETS_PCT)."""
        if preset not in SlopeConfig.SLOPE_PRESETS_PCT:
            raise ValueError(f"Unknown slope preset '{preset}'")
        return cls(slope_pct=SlopeConfig.SLOPE_PRESETS_PCT[preset], **overrides)
