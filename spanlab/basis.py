"""Greedy basis extraction."""

from __future__ import annotations

import logging
from typing import List

import numpy as np

from .rank import calculate_rank
from .vectors import TOLERANCES, Tolerances, as_vector_set, is_zero, vec3

logger = logging.getLogger(__name__)

SPAN_KINDS = ("point", "line", "plane", "space")


def get_basis(vectors, *, tol: Tolerances = TOLERANCES) -> List[np.ndarray]:
    """Select a basis from an ordered vector set.

    Vectors are inspected in input order and kept when they raise the rank
    of the vectors kept so far, so the first independent vectors win.
    Near-zero vectors are skipped.

    Args:
        vectors: Sequence of 3-vectors
        tol: Numeric tolerances

    Returns:
        List of basis vectors, at most 3
    """
    basis: List[np.ndarray] = []

    for i, v in enumerate(as_vector_set(vectors)):
        if is_zero(v, tol):
            logger.debug(f"Skipping zero vector v{i + 1}")
            continue

        current_rank = calculate_rank(basis, tol=tol)
        new_rank = calculate_rank(basis + [v], tol=tol)
        if new_rank > current_rank:
            basis.append(vec3(v))

        # Maximum rank in R3
        if len(basis) == 3:
            break

    logger.debug(f"Extracted basis of {len(basis)} vector(s)")
    return basis


def span_kind(vectors, *, tol: Tolerances = TOLERANCES) -> str:
    """Name the geometric shape of the span: point, line, plane or space."""
    return SPAN_KINDS[calculate_rank(vectors, tol=tol)]
