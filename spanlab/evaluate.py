"""Diagnostics for span analyses.

This module cross-checks the elimination-based results against SVD,
measures how orthogonal a Gram-Schmidt output really is, and provides
timing utilities for the analysis script.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional, Union

import numpy as np
from scipy import linalg

from .vectors import TOLERANCES, Tolerances, as_vector_set

logger = logging.getLogger(__name__)


def singular_values(vectors) -> np.ndarray:
    """Singular values of the Nx3 matrix formed by the vectors.

    Args:
        vectors: Sequence of 3-vectors

    Returns:
        Singular values in descending order, empty for an empty set
    """
    mat = as_vector_set(vectors)
    if len(mat) == 0:
        return np.zeros(0)
    return linalg.svdvals(mat)


def reference_rank(vectors, tol: Tolerances = TOLERANCES) -> int:
    """Rank from the singular values, used to cross-check elimination."""
    s = singular_values(vectors)
    if s.size == 0:
        return 0
    threshold = tol.pivot * max(1.0, s[0])
    return int(np.sum(s > threshold))


def condition_number(vectors, tol: Tolerances = TOLERANCES) -> float:
    """Ratio of the largest to the smallest nonzero singular value."""
    s = singular_values(vectors)
    s = s[s > tol.pivot]
    if s.size == 0:
        return float("inf")
    return float(s[0] / s[-1])


def orthogonality_error(vectors) -> float:
    """Largest absolute dot product between two distinct vectors.

    Args:
        vectors: Sequence of 3-vectors

    Returns:
        0.0 for fewer than two vectors
    """
    mat = as_vector_set(vectors)
    if len(mat) < 2:
        return 0.0
    gram = mat @ mat.T
    off_diagonal = gram[~np.eye(len(mat), dtype=bool)]
    return float(np.max(np.abs(off_diagonal)))


class Timer:
    """Utility class for timing operations with context manager support."""

    def __init__(self, name: str = "Timer", logger: Optional[logging.Logger] = None):
        """Initialize timer.

        Args:
            name: Timer name for logging
            logger: Logger to use (if None, uses module logger)
        """
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self._laps = {}
        self._last = None

    def start(self) -> None:
        self.start_time = time.perf_counter()
        self._last = self.start_time

    def stop(self) -> float:
        """Stop the timer and return elapsed time in seconds."""
        if self.start_time is None:
            self.logger.warning(f"{self.name}: Timer stopped without being started")
            return 0.0

        elapsed = time.perf_counter() - self.start_time
        self.logger.debug(f"{self.name}: {elapsed:.6f}s")
        return elapsed

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def lap(self, name: str) -> float:
        """Record the time since the previous lap under a name."""
        now = time.perf_counter()
        if self.start_time is None:
            self.start_time = now
            self._last = now

        lap_time = now - self._last
        self._last = now
        self._laps[name] = lap_time

        self.logger.debug(f"{self.name} - {name}: {lap_time:.6f}s")
        return lap_time

    @property
    def timings(self) -> Dict[str, float]:
        return dict(self._laps)

    @property
    def elapsed(self) -> float:
        """Elapsed time without stopping the timer."""
        if self.start_time is None:
            return 0.0
        return time.perf_counter() - self.start_time


class AnalysisMetrics:
    """Class for calculating and storing analysis diagnostics."""

    def __init__(self):
        self.metrics = {
            "n_vectors": 0,
            "n_targets": 0,
            "rank": None,
            "reference_rank": None,
            "condition_number": None,
            "orthogonality_error": None,
            "runtime_s": 0.0,
            "stage_timings": {},
        }

    def update(self, metric_name: str, value: Union[int, float, Dict]) -> None:
        self.metrics[metric_name] = value

    def update_stage_timing(self, stage_name: str, time_s: float) -> None:
        self.metrics["stage_timings"][stage_name] = time_s

    def compute(self, analysis, tol: Tolerances = TOLERANCES) -> None:
        """Compute diagnostics for a finished analysis.

        Args:
            analysis: SpanAnalysis to check
            tol: Tolerances the analysis was run with
        """
        self.metrics["n_vectors"] = len(analysis.vectors)
        self.metrics["n_targets"] = len(analysis.targets)
        self.metrics["rank"] = analysis.rank
        self.metrics["reference_rank"] = reference_rank(analysis.vectors, tol)
        self.metrics["condition_number"] = condition_number(analysis.vectors, tol)
        self.metrics["orthogonality_error"] = orthogonality_error(analysis.orthogonal)

        if self.metrics["rank"] != self.metrics["reference_rank"]:
            logger.warning(
                f"Elimination rank {self.metrics['rank']} differs from SVD rank "
                f"{self.metrics['reference_rank']}; the set is close to degenerate"
            )

    def to_dict(self) -> Dict:
        return self.metrics.copy()

    def summary(self) -> str:
        """Generate a human-readable summary of metrics.

        Returns:
            Summary string
        """
        lines = [
            "Analysis Metrics:",
            f"  Vectors: {self.metrics['n_vectors']}",
            f"  Targets: {self.metrics['n_targets']}",
        ]

        if self.metrics["rank"] is not None:
            lines.append(f"  Rank (elimination / SVD): {self.metrics['rank']} / {self.metrics['reference_rank']}")
        if self.metrics["condition_number"] is not None:
            lines.append(f"  Condition number: {self.metrics['condition_number']:.4g}")
        if self.metrics["orthogonality_error"] is not None:
            lines.append(f"  Orthogonality error: {self.metrics['orthogonality_error']:.3e}")

        lines.append(f"  Total runtime: {self.metrics['runtime_s']:.4f}s")

        if self.metrics["stage_timings"]:
            lines.append("  Stage timings:")
            for stage, time_s in self.metrics["stage_timings"].items():
                lines.append(f"    {stage}: {time_s:.6f}s")

        return "\n".join(lines)
