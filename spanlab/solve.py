"""Solver for small linear systems.

Solves ``x_1 b_1 + ... + x_k b_k = t`` for at most three basis vectors
``b_i`` by Gauss-Jordan reduction of the 3x(k+1) augmented matrix to
reduced row-echelon form.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .vectors import TOLERANCES, Tolerances, as_vector_set, vec3

logger = logging.getLogger(__name__)


class InconsistentSystemError(ValueError):
    """Raised when the target is not a combination of the basis vectors."""


def solve_system(
    basis: Sequence,
    target,
    *,
    tol: Tolerances = TOLERANCES,
    check: bool = True,
) -> np.ndarray:
    """Find the coefficients expressing target in terms of basis.

    The basis vectors are expected to be linearly independent and the
    target to lie in their span. With ``check`` enabled an inconsistent
    system raises InconsistentSystemError; without it the raw read-off of
    the reduced matrix is returned, which is meaningless in that case.

    Args:
        basis: Up to three 3-vectors, used as the columns of the system
        target: Right-hand side 3-vector
        tol: Numeric tolerances
        check: Verify the solution reproduces the target

    Returns:
        Coefficient array of length k, in basis order
    """
    columns = as_vector_set(basis)
    target = vec3(target)
    num_vars = columns.shape[0]
    num_eqs = 3

    if num_vars > 3:
        raise ValueError(f"At most 3 basis vectors can be solved for, got {num_vars}")

    # Augmented matrix [b_1 ... b_k | t]
    mat = np.hstack((columns.T, target.reshape(3, 1)))

    pivot_row = 0
    for col in range(num_vars):
        if pivot_row >= num_eqs:
            break

        max_row = pivot_row + int(np.argmax(np.abs(mat[pivot_row:, col])))
        if abs(mat[max_row, col]) < tol.pivot:
            continue

        mat[[pivot_row, max_row]] = mat[[max_row, pivot_row]]

        # Normalize the pivot to 1
        mat[pivot_row, col:] /= mat[pivot_row, col]

        # Eliminate the column from every other row
        for i in range(num_eqs):
            if i != pivot_row:
                mat[i, col:] -= mat[i, col] * mat[pivot_row, col:]

        pivot_row += 1

    # Read each variable off the row holding its leading 1
    solution = np.zeros(num_vars)
    for col in range(num_vars):
        for row in range(num_eqs):
            if abs(mat[row, col] - 1.0) < tol.display:
                solution[col] = mat[row, num_vars]
                break

    if check:
        residual = np.linalg.norm(solution @ columns - target) if num_vars else np.linalg.norm(target)
        limit = tol.residual * max(1.0, np.linalg.norm(target))
        if residual > limit:
            raise InconsistentSystemError(
                f"Target {target.tolist()} is not in the span of the given "
                f"{num_vars} vector(s) (residual {residual:.3e})"
            )

    logger.debug(f"Solved {num_eqs}x{num_vars} system: {solution.tolist()}")
    return solution
