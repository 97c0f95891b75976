"""Span membership."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from .rank import calculate_rank
from .vectors import TOLERANCES, Tolerances, as_vector_set, vec3

logger = logging.getLogger(__name__)


def is_in_span(basis, target, *, tol: Tolerances = TOLERANCES) -> bool:
    """Check whether target lies in the span of the basis vectors.

    The span of no vectors is the origin. Otherwise the target is in the
    span exactly when appending it does not raise the rank.

    Args:
        basis: Sequence of 3-vectors
        target: 3-vector to test
        tol: Numeric tolerances

    Returns:
        True if target is a linear combination of the basis vectors
    """
    basis = as_vector_set(basis)
    target = vec3(target)

    if len(basis) == 0:
        return bool(np.all(np.abs(target) < tol.pivot))

    rank_a = calculate_rank(basis, tol=tol)
    rank_augmented = calculate_rank(np.vstack((basis, target)), tol=tol)
    return rank_a == rank_augmented


def span_statuses(basis, targets: Sequence, *, tol: Tolerances = TOLERANCES) -> List[bool]:
    """Span membership for each of several targets."""
    statuses = [is_in_span(basis, t, tol=tol) for t in targets]
    logger.debug(f"{sum(statuses)}/{len(statuses)} target(s) in span")
    return statuses
