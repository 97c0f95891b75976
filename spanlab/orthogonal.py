"""Gram-Schmidt orthogonalization.

Classical Gram-Schmidt: every projection is taken from the original input
vector, not from the partially reduced one. Vectors that reduce to
(nearly) zero depended on earlier ones and are dropped, so the output
length equals the rank of the input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from .vectors import TOLERANCES, Tolerances, as_vector_set, dot, norm

logger = logging.getLogger(__name__)


@dataclass
class GramSchmidtStep:
    """Decomposition of one input vector.

    ``original == projection_sum + orthogonal``, where projection_sum is
    the part along the orthogonal vectors accepted before it.
    """

    index: int
    original: np.ndarray
    orthogonal: np.ndarray
    projection_sum: np.ndarray
    accepted: bool


def gram_schmidt_steps(vectors, *, tol: Tolerances = TOLERANCES) -> List[GramSchmidtStep]:
    """Run Gram-Schmidt and keep the decomposition of every input vector.

    Args:
        vectors: Sequence of 3-vectors
        tol: Numeric tolerances

    Returns:
        One step per input vector, in input order
    """
    orthogonal_basis: List[np.ndarray] = []
    steps: List[GramSchmidtStep] = []

    for i, v in enumerate(as_vector_set(vectors)):
        u = v.copy()

        # Subtract projections of v onto the accepted orthogonal vectors
        for b in orthogonal_basis:
            b_norm_sq = dot(b, b)
            if b_norm_sq > tol.pivot:
                u -= (dot(v, b) / b_norm_sq) * b

        accepted = norm(u) > tol.zero_norm
        if accepted:
            orthogonal_basis.append(u)
        else:
            logger.debug(f"v{i + 1} adds no new direction")

        steps.append(GramSchmidtStep(
            index=i,
            original=v.copy(),
            orthogonal=u.copy(),
            projection_sum=v - u,
            accepted=accepted,
        ))

    return steps


def gram_schmidt(vectors, *, tol: Tolerances = TOLERANCES) -> List[np.ndarray]:
    """Orthogonal basis for the span of the vectors.

    Args:
        vectors: Sequence of 3-vectors
        tol: Numeric tolerances

    Returns:
        Pairwise orthogonal vectors (not normalized), one per new direction
    """
    return [step.orthogonal for step in gram_schmidt_steps(vectors, tol=tol) if step.accepted]
