"""Vector value types and numeric tolerances.

This module defines how 3-vectors and ordered vector sets are represented
throughout the engine, together with the small set of vector helpers
(dot, cross, norm, normalization) and the tolerances used by every
elimination and zero test.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Dict, Iterable, Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tolerances:
    """Thresholds used by the engine.

    Attributes:
        pivot: Entries below this are treated as zero during elimination
        zero_norm: Vectors with a smaller norm are treated as the zero vector
        display: Rounding threshold for coefficients (~0, ~1, ~-1)
        line_norm: Minimum norm of the direction used for a rank-1 projection
        residual: Consistency tolerance when solving a linear system
    """

    pivot: float = 1e-9
    zero_norm: float = 1e-6
    display: float = 1e-4
    line_norm: float = 1e-5
    residual: float = 1e-6


TOLERANCES = Tolerances()


def load_tolerances(overrides: Optional[Dict[str, float]] = None) -> Tolerances:
    """Build tolerances from a configuration mapping.

    Args:
        overrides: Mapping of field name to value, e.g. the ``tolerances``
            section of the YAML configuration

    Returns:
        Tolerances with the overrides applied on top of the defaults
    """
    if not overrides:
        return TOLERANCES

    known = {f.name for f in fields(Tolerances)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown tolerance(s): {', '.join(sorted(unknown))}")

    values = {}
    for name, value in overrides.items():
        value = float(value)
        if not np.isfinite(value) or value <= 0:
            raise ValueError(f"Tolerance '{name}' must be a positive number, got {value}")
        values[name] = value

    tol = replace(TOLERANCES, **values)
    logger.debug(f"Loaded tolerances: {tol}")
    return tol


def vec3(v) -> np.ndarray:
    """Snapshot a single 3-vector.

    Args:
        v: Any array-like with three finite components

    Returns:
        Read-only float array of shape (3,), never aliasing the input
    """
    v = np.array(v, dtype=float)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-vector with shape (3,), got {v.shape}")
    if not np.all(np.isfinite(v)):
        raise ValueError("Vector components must be finite.")
    v.setflags(write=False)
    return v


def as_vector_set(vectors: Iterable) -> np.ndarray:
    """Snapshot an ordered vector set.

    Args:
        vectors: Sequence of 3-vectors (list of triples or Nx3 array)

    Returns:
        Read-only Nx3 float array; an empty input gives shape (0, 3)
    """
    if isinstance(vectors, np.ndarray):
        mat = np.array(vectors, dtype=float)
    else:
        mat = np.array(list(vectors), dtype=float)

    if mat.size == 0:
        mat = np.zeros((0, 3))
    if mat.ndim != 2 or mat.shape[1] != 3:
        raise ValueError(f"Expected an Nx3 vector set, got shape {mat.shape}")
    if not np.all(np.isfinite(mat)):
        raise ValueError("Vector components must be finite.")

    mat.setflags(write=False)
    return mat


def dot(a, b) -> float:
    return float(np.dot(a, b))


def cross(a, b) -> np.ndarray:
    return np.cross(a, b)


def norm(v) -> float:
    return float(np.linalg.norm(v))


def is_zero(v, tol: Tolerances = TOLERANCES) -> bool:
    """Whether a vector is treated as the zero vector."""
    return norm(v) < tol.zero_norm


def unit(v, eps: float = 1e-15) -> np.ndarray:
    """Strict normalization to unit length.

    Raises ValueError if the norm is below eps.
    """
    v = np.asarray(v, dtype=float)
    n = np.linalg.norm(v)
    if n < eps:
        raise ValueError(f"Cannot normalize vector with norm < {eps}.")
    return v / n
