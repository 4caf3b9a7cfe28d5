"""Lazy intersection of a compact set with a half-space or a polytope.

For a half-space ``H = {x : a·x <= b}`` and any ``λ >= 0``,

    ρ(d, X ∩ H) <= f(λ) = ρ(d - λa, X) + λb

because ``d·x = (d - λa)·x + λ a·x`` and ``a·x <= b`` on ``H``. The minimum
of the convex function ``f`` over ``λ >= 0`` equals ``ρ(d, X ∩ H)`` when the
intersection has a non-empty interior relative to ``X``, and every evaluated
``λ`` is a sound upper bound, so an inexact numerical search can only lose
tightness, never soundness. The multiplier is located in floating point with
``scipy.optimize.minimize_scalar`` and then converted to the scalar type of
the query, so the returned bound is evaluated exactly for rational inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

from scipy.optimize import minimize_scalar

from lazyconvex.config import settings
from lazyconvex.geometry.validators import check_direction, check_same_dimension
from lazyconvex.geometry.vectors import Scalar, Vector, is_zero, negate, scale, sub
from lazyconvex.sets.polyhedra import HalfSpace, HPolytope
from lazyconvex.sets.protocol import LazySet
from lazyconvex.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Intersection(LazySet):
    """The intersection of two sets of the same dimension.

    Exact support function queries are available when one operand is a
    ``HalfSpace``. With an ``HPolytope`` operand the support function is
    bounded one constraint at a time, the same relaxation
    ``overapproximate_intersection`` uses. Support vectors are not available
    for intersections.

    Attributes:
        X: First operand, usually the compact set.
        Y: Second operand, usually the half-space or polytope.
    """

    X: LazySet
    Y: LazySet

    def __post_init__(self) -> None:
        check_same_dimension((self.X, self.Y), "Intersection")

    def dim(self) -> int:
        return self.X.dim()

    def is_bounded(self) -> bool:
        return self.X.is_bounded() or self.Y.is_bounded()

    def _split(self) -> tuple[LazySet, HalfSpace] | None:
        if isinstance(self.Y, HalfSpace):
            return self.X, self.Y
        if isinstance(self.X, HalfSpace):
            return self.Y, self.X
        return None

    def polytope_split(self) -> tuple[LazySet, HPolytope] | None:
        """Return ``(compact set, polytope)`` if one operand is an HPolytope."""
        if isinstance(self.Y, HPolytope):
            return self.X, self.Y
        if isinstance(self.X, HPolytope):
            return self.Y, self.X
        return None

    def is_empty(self) -> bool:
        """Decide emptiness when one operand is a half-space.

        Raises:
            NotImplementedError: For any other combination of operands.
        """
        split = self._split()
        if split is None:
            raise NotImplementedError(
                "emptiness is only decidable for intersections with a half-space"
            )
        X, H = split
        return X.is_empty() or _misses(X, H)

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        raise NotImplementedError(
            "support vectors of intersections are not available; "
            "use support_function or overapproximate"
        )

    def support_function(self, d: Vector) -> Scalar:
        """Return ``ρ(d, X ∩ H)`` for a half-space operand ``H``.

        With an HPolytope operand ``P`` the value is ``min_i ρ(d, X ∩ H_i)``
        over the constraints ``H_i`` of ``P``. That bound is sound, and exact
        when ``P`` has a single constraint.

        Raises:
            NotImplementedError: If neither operand is a half-space or an
                HPolytope.
        """
        check_direction(d, self.dim(), "Intersection")
        split = self._split()
        if split is not None:
            X, H = split
            return _support_function_halfspace(d, X, H)
        polytope = self.polytope_split()
        if polytope is None:
            raise NotImplementedError(
                "support function requires a half-space or polytope operand"
            )
        X, P = polytope
        if not P.constraints:
            return X.support_function(d)
        return min(_support_function_halfspace(d, X, H) for H in P.constraints)

    def support_function_upper_bound(self, d: Vector) -> Scalar:
        """Return ``min(ρ(d, X), ρ(d, Y))``, a cheap sound bound."""
        check_direction(d, self.dim(), "Intersection")
        return min(
            self.X.support_function_upper_bound(d),
            self.Y.support_function_upper_bound(d),
        )


def _misses(X: LazySet, H: HalfSpace) -> bool:
    # min over X of a·x is -ρ(-a, X)
    return -X.support_function(negate(H.normal)) > H.offset


def _like(value: float, reference: Scalar) -> Scalar:
    if isinstance(reference, Fraction):
        return Fraction(value)
    return value


def _support_function_halfspace(d: Vector, X: LazySet, H: HalfSpace) -> Scalar:
    a, b = H.normal, H.offset
    if is_zero(a):
        return X.support_function(d) if b >= 0 else -math.inf
    if X.is_empty() or _misses(X, H):
        logger.debug("halfspace_intersection_empty", dimension=len(a))
        return -math.inf

    def f(lam: Scalar) -> Scalar:
        return X.support_function(sub(d, scale(a, lam))) + lam * b

    def f_float(lam: float) -> float:
        return float(f(lam))

    # Grow a bracket [0, upper] around the minimizer of the convex f
    upper = 1.0
    value = f_float(upper)
    for _ in range(settings.LINE_SEARCH_MAX_DOUBLINGS):
        next_value = f_float(2 * upper)
        if next_value >= value:
            break
        upper, value = 2 * upper, next_value
    else:
        logger.warning(
            "halfspace_line_search_bracket_exhausted",
            upper=upper,
            doublings=settings.LINE_SEARCH_MAX_DOUBLINGS,
        )

    result = minimize_scalar(
        f_float,
        bounds=(0.0, 2 * upper),
        method="bounded",
        options={"xatol": settings.LINE_SEARCH_XATOL},
    )
    reference = next((x for x in (*d, *a, b) if isinstance(x, Fraction)), b)
    candidates = [f(0), f(_like(float(result.x), reference))]
    if value < f_float(float(result.x)):
        candidates.append(f(_like(upper, reference)))
    return min(candidates)
