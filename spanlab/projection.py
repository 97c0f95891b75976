"""Orthogonal projection and basis-relative coordinates.

The projection onto the span of a vector set is computed case by case on
its rank: the origin, a line, a plane, or all of R3. Coordinates are then
obtained by solving for the projection in terms of an extracted basis.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional

import numpy as np

from .basis import get_basis
from .rank import calculate_rank
from .solve import solve_system
from .vectors import TOLERANCES, Tolerances, as_vector_set, cross, dot, norm, unit, vec3

logger = logging.getLogger(__name__)


class Coordinates(NamedTuple):
    """Coefficients of a projection relative to the basis that was used."""

    coefficients: np.ndarray
    basis_used: List[np.ndarray]


def get_projection(basis, target, *, tol: Tolerances = TOLERANCES) -> Optional[np.ndarray]:
    """Project target orthogonally onto the span of the basis vectors.

    Args:
        basis: Sequence of 3-vectors spanning the subspace
        target: 3-vector to project
        tol: Numeric tolerances

    Returns:
        Projected 3-vector, or None if no spanning direction could be found
    """
    basis = as_vector_set(basis)
    target = vec3(target)
    rank = calculate_rank(basis, tol=tol)

    if rank == 0:
        return np.zeros(3)

    # Line
    if rank == 1:
        direction = next((v for v in basis if norm(v) > tol.line_norm), None)
        if direction is None:
            logger.warning("Rank 1 span without a usable direction vector")
            return None

        u = unit(direction)
        return u * dot(target, u)

    # Plane
    if rank == 2:
        plane = get_basis(basis, tol=tol)
        if len(plane) < 2:
            logger.warning(f"Rank 2 span but only {len(plane)} basis vector(s) found")
            return None

        n = unit(cross(plane[0], plane[1]))
        return target - n * dot(target, n)

    # Rank 3 spans all of R3
    return target.copy()


def get_coordinates(basis, target, *, tol: Tolerances = TOLERANCES) -> Optional[Coordinates]:
    """Coordinates of the projection of target in an extracted basis.

    Args:
        basis: Sequence of 3-vectors
        target: 3-vector
        tol: Numeric tolerances

    Returns:
        Coordinates(coefficients, basis_used), or None when the vectors span
        only the origin
    """
    basis_used = get_basis(basis, tol=tol)
    if not basis_used:
        logger.debug("No basis vectors, coordinates undefined")
        return None

    projection = get_projection(basis_used, target, tol=tol)
    if projection is None:
        return None

    # The projection lies in the span of basis_used
    coefficients = solve_system(basis_used, projection, tol=tol, check=False)
    logger.debug(f"Coordinates in {len(basis_used)}-vector basis: {coefficients.tolist()}")
    return Coordinates(coefficients, basis_used)
