"""Configuration constants for Roof Slope Planner.

All configurable parameters are centralized here for easy tuning.
Lengths are expressed in the host's internal unit (feet) unless a name says otherwise.

Classes:
    UnitConfig: Length unit conversions
    SurfaceConfig: Surface projection and containment tolerances
    GraphConfig: Edge length bounds and segment sampling density
    RoutingConfig: Path strategy names and traversal cost parameters
    DrainConfig: Drain position to vertex resolution
    SlopeConfig: Slope presets, offset limits and search distance
    LogConfig: Progress reporting cadence
"""


class UnitConfig:
    """Length unit conversions (internal unit is feet)."""

    MM_PER_FOOT = 304.8
    METERS_PER_FOOT = 0.3048
    FEET_PER_METER = 1.0 / METERS_PER_FOOT

    @staticmethod
    def mm_to_feet(mm: float) -> float:
        """Convert millimeters to feet."""
        return mm / UnitConfig.MM_PER_FOOT

    @staticmethod
    def meters_to_feet(meters: float) -> float:
        """Convert meters to feet."""
        return meters * UnitConfig.FEET_PER_METER


class SurfaceConfig:
    """Surface projection and containment tolerances."""

    # 1mm in feet - nudge distance along the normal and bounding box padding
    PROJECTION_TOLERANCE = 0.00328084

    # Points farther than this from a planar surface do not project onto it
    MAX_PROJECTION_DISTANCE = 0.5


class GraphConfig:
    """Graph construction parameters."""

    # Edge length bounds (edge must satisfy MIN < length <= MAX)
    MIN_EDGE_LENGTH = 0.001  # Near-duplicate vertices below this
    MAX_EDGE_LENGTH = 15.0

    # Interior samples per edge: max(MIN_EDGE_SAMPLES, floor(length * SAMPLES_PER_UNIT))
    MIN_EDGE_SAMPLES = 10
    SAMPLES_PER_UNIT = 4

    # Spatial grid cell size: max(MIN_CELL_SIZE, max_edge_length * CELL_SIZE_FACTOR)
    MIN_CELL_SIZE = 1.0
    CELL_SIZE_FACTOR = 0.5

    # Pairwise (O(n²)) construction is only acceptable below this vertex count
    PAIRWISE_VERTEX_LIMIT = 200


class RoutingConfig:
    """Path strategy parameters."""

    # Traversal cost per unit of climb (a cost, not a physical unit)
    UPHILL_PENALTY_PER_UNIT = 100.0

    # Crease-weighted Dijkstra length multipliers
    CREASE_FACTOR = 1.0
    DEFAULT_EDGE_FACTOR = 5.0

    # Elevation differences below this count as flat for greedy descent
    ELEVATION_TOLERANCE = 1e-9

    STRATEGY_DIJKSTRA = "dijkstra"
    STRATEGY_ASTAR = "astar"
    STRATEGY_CREASE = "crease"
    STRATEGY_GREEDY = "greedy"
    STRATEGIES = [STRATEGY_DIJKSTRA, STRATEGY_ASTAR, STRATEGY_CREASE, STRATEGY_GREEDY]
    DEFAULT_STRATEGY = STRATEGY_DIJKSTRA


assert RoutingConfig.UPHILL_PENALTY_PER_UNIT >= 0, "Uphill penalty must be non-negative for A* admissibility"
assert RoutingConfig.CREASE_FACTOR > 0 and RoutingConfig.DEFAULT_EDGE_FACTOR > 0
assert RoutingConfig.DEFAULT_STRATEGY in RoutingConfig.STRATEGIES


class DrainConfig:
    """Drain position resolution."""

    # Drain position must lie within this distance of a vertex (~15cm)
    RESOLVE_TOLERANCE = 0.5


class SlopeConfig:
    """Slope presets and physical offset limits."""

    DEFAULT_SLOPE_PCT = 2.0
    SLOPE_PRESETS_PCT = {
        "minimum": 1.0,
        "intermediate": 1.5,
        "default": 2.0,
    }
    assert DEFAULT_SLOPE_PCT in SLOPE_PRESETS_PCT.values()

    # Conservative share of structural thickness available for offsets
    THICKNESS_FRACTION = 0.6
    # Used when the host cannot report a thickness
    DEFAULT_MAX_OFFSET = 1.0

    # Vertices farther than this (path length) from a drain are skipped
    DEFAULT_SEARCH_DISTANCE = 200.0 * UnitConfig.FEET_PER_METER

    DIRECTION_UP = "up"  # Drains lowest, offsets positive
    DIRECTION_DOWN = "down"  # Offsets applied as negative values
    DIRECTIONS = [DIRECTION_UP, DIRECTION_DOWN]


assert 0 < SlopeConfig.THICKNESS_FRACTION <= 1
assert GraphConfig.MIN_EDGE_LENGTH < GraphConfig.MAX_EDGE_LENGTH


class LogConfig:
    """Progress reporting cadence."""

    PROGRESS_EVERY_N_VERTICES = 50
