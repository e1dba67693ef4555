"""RunMetrics - Aggregate counters for one drainage run.

Accumulated across all per-vertex computations, finalized once at the end
of the run. A finalized instance rejects further updates.
"""

from dataclasses import dataclass


@dataclass
class RunMetrics:
    """Counters and extrema for a drainage run.

    Attributes:
        processed: Non-drain vertices that received an offset
        skipped: Vertices without an offset (no path or beyond search distance)
        drain_count: Drain vertices (offset fixed at zero)
        clamped: Offsets scaled down to the physical limit
        highest_elevation: Largest offset magnitude assigned
        longest_path: Longest path length among processed vertices
        duration_s: Wall-clock duration of the run in seconds
        strategy: Name of the path strategy used
    """

    processed: int = 0
    skipped: int = 0
    drain_count: int = 0
    clamped: int = 0
    highest_elevation: float = 0.0
    longest_path: float = 0.0
    duration_s: float = 0.0
    strategy: str = ""
    _finalized: bool = False

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def total(self) -> int:
        """All vertices accounted for."""
        return self.processed + self.skipped + self.drain_count

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("RunMetrics already finalized")

    def record_processed(self, offset: float, path_length: float, clamped: bool = False) -> None:
        """Count a vertex that received an offset and update extrema."""
        self._check_open()
        self.processed += 1
        if clamped:
            self.clamped += 1
        self.highest_elevation = max(self.highest_elevation, abs(offset))
        self.longest_path = max(self.longest_path, path_length)

    def record_skipped(self) -> None:
        self._check_open()
        self.skipped += 1

    def record_drain(self) -> None:
        self._check_open()
        self.drain_count += 1

    def finalize(self, duration_s: float, strategy: str = "") -> "RunMetrics":
        """Set the run duration and freeze the metrics.

        Returns:
            self, for chaining.
        """
        self._check_open()
        self.duration_s = duration_s
        if strategy:
            self.strategy = strategy
        self._finalized = True
        return self

    def summary(self) -> str:
        """One-line human-readable summary."""
        return (
            f"Processed: {self.processed}, Skipped: {self.skipped}, Drains: {self.drain_count}, "
            f"Clamped: {self.clamped}, Highest elevation: {self.highest_elevation:.3f}, "
            f"Longest path: {self.longest_path:.3f}, Duration: {self.duration_s:.2f}s"
        )
