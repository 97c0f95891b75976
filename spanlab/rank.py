"""Rank of a set of 3-vectors.

Gaussian elimination with partial pivoting over the vectors stacked as
rows of an Nx3 matrix.
"""

from __future__ import annotations

import logging

import numpy as np

from .vectors import TOLERANCES, Tolerances, as_vector_set

logger = logging.getLogger(__name__)


def calculate_rank(vectors, *, tol: Tolerances = TOLERANCES) -> int:
    """Calculate the rank of an ordered vector set.

    Each column is processed in turn. The remaining row with the largest
    absolute entry in that column becomes the pivot; a column whose best
    entry is below ``tol.pivot`` adds no rank and is skipped.

    Args:
        vectors: Sequence of 3-vectors
        tol: Numeric tolerances

    Returns:
        Rank in the range [0, 3]
    """
    # Working copy, the snapshot itself is read-only
    mat = as_vector_set(vectors).copy()
    rows, cols = mat.shape
    if rows == 0:
        return 0

    rank = 0
    pivot_row = 0

    for col in range(cols):
        if pivot_row >= rows:
            break

        # Partial pivoting, first maximum wins ties
        max_row = pivot_row + int(np.argmax(np.abs(mat[pivot_row:, col])))
        max_val = abs(mat[max_row, col])

        if max_val < tol.pivot:
            continue

        # Swap rows
        mat[[pivot_row, max_row]] = mat[[max_row, pivot_row]]

        # Eliminate below the pivot
        for i in range(pivot_row + 1, rows):
            factor = mat[i, col] / mat[pivot_row, col]
            mat[i, col:] -= factor * mat[pivot_row, col:]

        pivot_row += 1
        rank += 1

    logger.debug(f"Rank of {rows} vector(s): {rank}")
    return rank
