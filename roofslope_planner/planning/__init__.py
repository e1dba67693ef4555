"""Run orchestration: settings, slope assignment and the drainage planner.

- PlannerSettings: Validated run configuration
- SlopeAssigner: Path lengths to clamped, signed offsets
- DrainagePlanner: Graph, drains, paths and offsets for one run
"""

from roofslope_planner.planning.drainage_planner import DrainagePlanner, DrainageResult
from roofslope_planner.planning.settings import PlannerSettings
from roofslope_planner.planning.slope_assigner import SlopeAssigner, SlopeAssignment, max_offset_from_thickness

__all__ = [
    "PlannerSettings",
    "SlopeAssigner",
    "SlopeAssignment",
    "max_offset_from_thickness",
    "DrainagePlanner",
    "DrainageResult",
]
