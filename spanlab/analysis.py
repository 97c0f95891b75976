"""Full analysis of a vector set and its target vectors.

Bundles every engine result a front end needs to describe a scene: the
rank and shape of the span, independence, dependency relations, a basis,
an orthogonal basis, and per-target span membership, projection and
coordinates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .basis import SPAN_KINDS, get_basis
from .independence import DependencyRelation, get_dependency_relations, is_linearly_independent
from .orthogonal import gram_schmidt
from .projection import Coordinates, get_coordinates, get_projection
from .rank import calculate_rank
from .span import is_in_span
from .vectors import TOLERANCES, Tolerances, as_vector_set, vec3

logger = logging.getLogger(__name__)


def _fmt(v: np.ndarray) -> str:
    return "[" + ", ".join(f"{x:.4g}" for x in v) + "]"


@dataclass
class TargetAnalysis:
    """Results for one target vector."""

    target: np.ndarray
    in_span: bool
    projection: Optional[np.ndarray]
    coordinates: Optional[Coordinates]

    def to_dict(self) -> Dict:
        return {
            "target": self.target.tolist(),
            "in_span": self.in_span,
            "projection": None if self.projection is None else self.projection.tolist(),
            "coordinates": None if self.coordinates is None else self.coordinates.coefficients.tolist(),
            "basis_used": None if self.coordinates is None else [b.tolist() for b in self.coordinates.basis_used],
        }


@dataclass
class SpanAnalysis:
    """Results for a vector set."""

    vectors: np.ndarray
    rank: int
    span_kind: str
    independent: bool
    relations: List[DependencyRelation]
    basis: List[np.ndarray]
    orthogonal: List[np.ndarray]
    targets: List[TargetAnalysis] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "vectors": self.vectors.tolist(),
            "rank": self.rank,
            "span_kind": self.span_kind,
            "independent": self.independent,
            "relations": [str(r) for r in self.relations],
            "basis": [b.tolist() for b in self.basis],
            "orthogonal": [u.tolist() for u in self.orthogonal],
            "targets": [t.to_dict() for t in self.targets],
        }

    def summary(self) -> str:
        """Generate a human-readable summary.

        Returns:
            Summary string
        """
        lines = [
            "Span Analysis:",
            f"  Vectors: {len(self.vectors)}",
            f"  Rank: {self.rank} ({self.span_kind})",
            f"  Linearly independent: {'yes' if self.independent else 'no'}",
        ]

        if self.relations:
            lines.append("  Dependencies:")
            for relation in self.relations:
                lines.append(f"    {relation}")

        lines.append(f"  Basis: {', '.join(_fmt(b) for b in self.basis) or '-'}")
        lines.append(f"  Orthogonal basis: {', '.join(_fmt(u) for u in self.orthogonal) or '-'}")

        for i, t in enumerate(self.targets):
            lines.append(f"  Target b{i + 1} {_fmt(t.target)}:")
            lines.append(f"    In span: {'yes' if t.in_span else 'no'}")
            if t.projection is not None:
                lines.append(f"    Projection: {_fmt(t.projection)}")
            if t.coordinates is not None:
                lines.append(f"    Coordinates: {_fmt(t.coordinates.coefficients)}")

        return "\n".join(lines)


def analyze_target(vectors, target, *, tol: Tolerances = TOLERANCES) -> TargetAnalysis:
    target = vec3(target)
    return TargetAnalysis(
        target=target,
        in_span=is_in_span(vectors, target, tol=tol),
        projection=get_projection(vectors, target, tol=tol),
        coordinates=get_coordinates(vectors, target, tol=tol),
    )


def analyze(vectors, targets: Sequence = (), *, tol: Tolerances = TOLERANCES) -> SpanAnalysis:
    """Run every engine operation over a vector set and its targets.

    Args:
        vectors: Sequence of 3-vectors
        targets: Sequence of target 3-vectors
        tol: Numeric tolerances

    Returns:
        SpanAnalysis with one TargetAnalysis per target
    """
    vectors = as_vector_set(vectors)
    rank = calculate_rank(vectors, tol=tol)

    analysis = SpanAnalysis(
        vectors=vectors,
        rank=rank,
        span_kind=SPAN_KINDS[rank],
        independent=is_linearly_independent(vectors, tol=tol),
        relations=get_dependency_relations(vectors, tol=tol),
        basis=get_basis(vectors, tol=tol),
        orthogonal=gram_schmidt(vectors, tol=tol),
        targets=[analyze_target(vectors, t, tol=tol) for t in targets],
    )

    logger.info(
        f"Analyzed {len(vectors)} vector(s): rank={rank}, "
        f"independent={analysis.independent}, {len(analysis.targets)} target(s)"
    )
    return analysis
