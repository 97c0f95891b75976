"""Linear independence and dependency relations.

This module decides whether a vector set is linearly independent and, for
a dependent set, explains each dependent vector as a combination of the
vectors accepted before it. The decomposition is a single left-to-right
pass, so it depends on input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import List, Tuple

import numpy as np

from .rank import calculate_rank
from .solve import solve_system
from .vectors import TOLERANCES, Tolerances, as_vector_set, is_zero

logger = logging.getLogger(__name__)


def is_linearly_independent(vectors, *, tol: Tolerances = TOLERANCES) -> bool:
    """Check whether the vectors are linearly independent.

    More than three vectors in R3 are always dependent, so no elimination
    is run for them.

    Args:
        vectors: Sequence of 3-vectors
        tol: Numeric tolerances

    Returns:
        True if the rank equals the number of vectors
    """
    vectors = as_vector_set(vectors)
    if len(vectors) > 3:
        return False
    return calculate_rank(vectors, tol=tol) == len(vectors)


def format_coefficient(c: float, tol: Tolerances = TOLERANCES) -> str:
    """Render a coefficient as the prefix of a ``v<j>`` term.

    1 renders as nothing, -1 as a bare minus sign and anything else as the
    value rounded to two decimals followed by ``*``.
    """
    if abs(c - 1) < tol.display:
        return ""
    if abs(c + 1) < tol.display:
        return "-"

    # Ties round away from zero, on the exact binary value
    with localcontext() as ctx:
        ctx.prec = 400
        value = Decimal(c).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if value == 0:
        value = Decimal("0.00")
    text = f"{value:f}".rstrip("0").rstrip(".")
    return f"{text}*"


@dataclass
class DependencyRelation:
    """How one vector depends on the vectors accepted before it.

    Attributes:
        index: 0-based position of the vector in the input
        terms: (coefficient, index) pairs over earlier accepted vectors
        is_zero: Whether the vector is (near-)zero
        tol: Tolerances used when rendering the relation
    """

    index: int
    terms: List[Tuple[float, int]] = field(default_factory=list)
    is_zero: bool = False
    tol: Tolerances = field(default=TOLERANCES, repr=False, compare=False)

    def __str__(self) -> str:
        if self.is_zero:
            return f"v{self.index + 1} is the zero vector"

        parts = [
            f"{format_coefficient(c, self.tol)}v{j + 1}"
            for c, j in self.terms
            if abs(c) >= self.tol.display
        ]
        return f"v{self.index + 1} = {' + '.join(parts) or '0'}"

    def combination(self, vectors) -> np.ndarray:
        """Evaluate the right-hand side against the original vectors."""
        vectors = as_vector_set(vectors)
        result = np.zeros(3)
        for c, j in self.terms:
            result += c * vectors[j]
        return result


def get_dependency_relations(vectors, *, tol: Tolerances = TOLERANCES) -> List[DependencyRelation]:
    """Describe every dependent vector in terms of earlier accepted ones.

    Args:
        vectors: Sequence of 3-vectors
        tol: Numeric tolerances

    Returns:
        One relation per dependent or zero vector, in input order
    """
    vectors = as_vector_set(vectors)
    relations: List[DependencyRelation] = []
    accepted: List[Tuple[np.ndarray, int]] = []

    for i, v in enumerate(vectors):
        if is_zero(v, tol):
            relations.append(DependencyRelation(index=i, is_zero=True, tol=tol))
            continue

        accepted_vecs = [vec for vec, _ in accepted]
        rank_without = calculate_rank(accepted_vecs, tol=tol)
        rank_with = calculate_rank(accepted_vecs + [v], tol=tol)

        if rank_with == rank_without:
            # Already known to be dependent from the rank test
            coeffs = solve_system(accepted_vecs, v, tol=tol, check=False)
            terms = [(float(c), idx) for c, (_, idx) in zip(coeffs, accepted)]
            relation = DependencyRelation(index=i, terms=terms, tol=tol)
            logger.debug(f"Dependent vector: {relation}")
            relations.append(relation)
        else:
            accepted.append((v, i))

    return relations


def describe_dependencies(vectors, *, tol: Tolerances = TOLERANCES) -> List[str]:
    """Human-readable dependency relations, e.g. ``["v3 = v1 + v2"]``."""
    return [str(relation) for relation in get_dependency_relations(vectors, tol=tol)]
