"""
Module: combiner.timing

Purpose:
    Phase timing for a combine run (extract, compose, encode,
    write) and for each region's extraction.

Key Classes:
    - TimingLog: Collects phase and per-region durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - combiner.pipeline
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Timing metrics for one combine run.

    Attributes:
        phase_timings: Dict of phase_name -> duration_seconds
        region_timings: Dict of region_index -> extraction duration_seconds

    Example:
        >>> log = TimingLog()
        >>> log.log_phase("compose", 0.004)
        >>> log.log_region(0, 0.001)
        >>> print(log.summary())
    """
    phase_timings: Dict[str, float] = field(default_factory=dict)
    region_timings: Dict[int, float] = field(default_factory=dict)

    def log_phase(self, phase: str, duration: float) -> None:
        """Log a run-level timing metric (repeated phases accumulate)."""
        self.phase_timings[phase] = self.phase_timings.get(phase, 0.0) + duration

    def log_region(self, index: int, duration: float) -> None:
        """Log a region extraction timing metric."""
        self.region_timings[index] = duration

    @property
    def total(self) -> float:
        return sum(self.phase_timings.values())

    def get_slowest_regions(self, n: int = 3) -> List[Tuple[int, float]]:
        """Get the N slowest region extractions."""
        ranked = sorted(self.region_timings.items(), key=lambda x: x[1], reverse=True)
        return ranked[:n]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["=== Combine Timing Summary ==="]
        for phase, duration in self.phase_timings.items():
            lines.append(f"  {phase:12s} {duration:.4f}s")
        slowest = self.get_slowest_regions()
        if slowest:
            lines.append("Slowest regions:")
            for index, duration in slowest:
                lines.append(f"  #{index:<11d} {duration:.4f}s")
        return "\n".join(lines)


@contextmanager
def timed_phase(
    log: TimingLog,
    phase: str,
    region_index: Optional[int] = None,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    Args:
        log: TimingLog instance to record metrics
        phase: Name of the phase being timed
        region_index: If provided, also records the duration against that region

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "encode"):
        ...     data = encode_png(canvas)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        log.log_phase(phase, elapsed)
        if region_index is not None:
            log.log_region(region_index, elapsed)
