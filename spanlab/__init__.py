"""Span, rank and projections in R3.

A small numeric engine for the linear algebra behind span visualisations:
rank, linear independence, span membership, dependency relations, basis
extraction, Gram-Schmidt orthogonalization, orthogonal projection and
basis-relative coordinates for ordered sets of 3-vectors.
"""

from __future__ import annotations

from .analysis import SpanAnalysis, TargetAnalysis, analyze
from .basis import get_basis, span_kind
from .independence import (
    DependencyRelation,
    describe_dependencies,
    format_coefficient,
    get_dependency_relations,
    is_linearly_independent,
)
from .orthogonal import GramSchmidtStep, gram_schmidt, gram_schmidt_steps
from .projection import Coordinates, get_coordinates, get_projection
from .rank import calculate_rank
from .solve import InconsistentSystemError, solve_system
from .span import is_in_span, span_statuses
from .vectors import TOLERANCES, Tolerances, as_vector_set, load_tolerances, vec3

__version__ = "0.1.0"
