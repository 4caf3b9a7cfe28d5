"""Polyhedral sets in constraint representation.

A ``HalfSpace`` is the set ``{x : dot(a, x) <= b}``; an ``HPolytope`` is a
finite intersection of half-spaces. General polytopes answer support queries
through a linear program (scipy's HiGHS backend), while planar polygons
(``HPolygon``) keep their constraints sorted by normal angle and answer
queries exactly by intersecting two adjacent constraint lines.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import cast

import numpy as np
from scipy.optimize import linprog

from lazyconvex.exceptions import (
    DimensionMismatchError,
    EmptySetError,
    UnboundedSetError,
)
from lazyconvex.geometry.validators import check_dimension, check_direction
from lazyconvex.geometry.vectors import (
    Scalar,
    Vector,
    det2,
    dot,
    is_zero,
    scale,
    unit_vector,
)
from lazyconvex.sets.protocol import LazySet

# scipy.optimize.linprog status codes
_LP_INFEASIBLE = 2
_LP_UNBOUNDED = 3


def _nonnegative_multiple(d: Vector, a: Vector) -> Scalar | None:
    """Return ``lam >= 0`` with ``d == lam * a`` exactly, or None."""
    if is_zero(d):
        return 0
    pivot = next((i for i, x in enumerate(a) if x != 0), None)
    if pivot is None:
        return None
    lam = d[pivot] / a[pivot]
    if lam < 0:
        return None
    if all(di == lam * ai for di, ai in zip(d, a)):
        return lam
    return None


@dataclass(frozen=True)
class HalfSpace(LazySet):
    """The half-space ``{x : dot(normal, x) <= offset}``.

    Attributes:
        normal: Normal direction ``a``.
        offset: Constraint value ``b``.
    """

    normal: tuple[Scalar, ...]
    offset: Scalar

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", tuple(self.normal))

    def dim(self) -> int:
        return len(self.normal)

    def contains(self, x: Vector) -> bool:
        return dot(self.normal, x) <= self.offset

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "HalfSpace")
        if self.is_empty():
            return -math.inf
        lam = _nonnegative_multiple(d, self.normal)
        if lam is None:
            return math.inf
        return lam * self.offset

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "HalfSpace")
        if self.is_empty():
            raise EmptySetError("the half-space is empty", "HalfSpace")
        lam = _nonnegative_multiple(d, self.normal)
        if lam is None:
            raise UnboundedSetError(
                "the half-space is unbounded in the given direction", "HalfSpace"
            )
        if is_zero(self.normal):
            return tuple(0 * x for x in d)
        # Projection of the origin onto the boundary hyperplane
        return scale(self.normal, self.offset / dot(self.normal, self.normal))

    def is_empty(self) -> bool:
        # A zero normal gives either the whole space or nothing
        return is_zero(self.normal) and self.offset < 0

    def is_bounded(self) -> bool:
        return self.is_empty()


@dataclass(frozen=True)
class HPolytope(LazySet):
    """A polytope given as an intersection of half-spaces.

    The set may be unbounded or empty; support queries report either case
    through ``UnboundedSetError`` and ``EmptySetError``. Support queries solve
    a floating point linear program.

    Attributes:
        constraints: The half-spaces whose intersection is the set.
        dimension: Ambient dimension; required only when there are no
            constraints (the universe).
    """

    constraints: tuple[HalfSpace, ...] = ()
    dimension: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))
        if self.constraints:
            n = self.constraints[0].dim()
            for c in self.constraints:
                if c.dim() != n:
                    raise DimensionMismatchError(
                        "all constraints must have the same dimension",
                        type(self).__name__,
                        expected=n,
                        actual=c.dim(),
                    )
            if self.dimension is not None and self.dimension != n:
                raise DimensionMismatchError(
                    "constraints disagree with the declared dimension",
                    type(self).__name__,
                    expected=self.dimension,
                    actual=n,
                )
            object.__setattr__(self, "dimension", n)
        elif self.dimension is None:
            raise ValueError("a polytope without constraints needs a dimension")

    def dim(self) -> int:
        return cast(int, self.dimension)

    def constraints_list(self) -> list[HalfSpace]:
        return list(self.constraints)

    def contains(self, x: Vector) -> bool:
        return all(c.contains(x) for c in self.constraints)

    def _trivially_empty(self) -> bool:
        # An offset of -inf comes from bounding an empty set
        return any(h.offset == -math.inf for h in self.constraints)

    def _solve(self, d: Vector):  # noqa: ANN202 - scipy OptimizeResult
        n = self.dim()
        c = -np.array([float(x) for x in d], dtype=float)
        finite = [h for h in self.constraints if h.offset != math.inf]
        if finite:
            a_ub = np.array([[float(x) for x in h.normal] for h in finite], dtype=float)
            b_ub = np.array([float(h.offset) for h in finite], dtype=float)
        else:
            a_ub = b_ub = None
        return linprog(
            c, A_ub=a_ub, b_ub=b_ub, bounds=[(None, None)] * n, method="highs"
        )

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), type(self).__name__)
        if self._trivially_empty():
            raise EmptySetError("the polytope is empty", type(self).__name__)
        result = self._solve(d)
        if result.status == _LP_INFEASIBLE:
            raise EmptySetError("the polytope is empty", type(self).__name__)
        if result.status == _LP_UNBOUNDED:
            raise UnboundedSetError(
                "the polytope is unbounded in the given direction",
                type(self).__name__,
            )
        if not result.success:
            raise RuntimeError(f"linear program failed: {result.message}")
        return tuple(float(x) for x in result.x)

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), type(self).__name__)
        if self._trivially_empty():
            return -math.inf
        result = self._solve(d)
        if result.status == _LP_INFEASIBLE:
            return -math.inf
        if result.status == _LP_UNBOUNDED:
            return math.inf
        if not result.success:
            raise RuntimeError(f"linear program failed: {result.message}")
        return float(-result.fun)

    def is_empty(self) -> bool:
        if self._trivially_empty():
            return True
        return self._solve((0,) * self.dim()).status == _LP_INFEASIBLE

    def is_bounded(self) -> bool:
        if self.is_empty():
            return True
        n = self.dim()
        for i in range(n):
            for v in (1, -1):
                if self._solve(unit_vector(i, n, v)).status == _LP_UNBOUNDED:
                    return False
        return True


def _half(v: Vector) -> int:
    # 0 for angles in [0, pi), 1 for [pi, 2*pi)
    return 0 if v[1] > 0 or (v[1] == 0 and v[0] > 0) else 1


def _compare_angle(u: Vector, v: Vector) -> int:
    """Order 2D vectors by polar angle in [0, 2*pi), exactly."""
    hu, hv = _half(u), _half(v)
    if hu != hv:
        return hu - hv
    cross = det2(u, v)
    return (cross < 0) - (cross > 0)


@dataclass(frozen=True)
class HPolygon(HPolytope):
    """A planar polygon in constraint representation.

    Constraints are kept sorted by the polar angle of their normals, which
    makes support queries exact: the support vector for ``d`` is the
    intersection of the two constraint lines whose normals enclose ``d``.
    This requires that no constraint is strictly redundant.
    """

    def __post_init__(self) -> None:
        if self.dimension is None and not self.constraints:
            object.__setattr__(self, "dimension", 2)
        super().__post_init__()
        check_dimension(self.dim(), 2, "HPolygon")
        if any(is_zero(c.normal) for c in self.constraints):
            raise ValueError("polygon constraints need non-zero normals")
        ordered = sorted(
            self.constraints, key=cmp_to_key(lambda a, b: _compare_angle(a.normal, b.normal))
        )
        object.__setattr__(self, "constraints", tuple(ordered))

    def _closes(self, first: HalfSpace, second: HalfSpace) -> bool:
        # Consecutive normals less than pi apart
        return det2(first.normal, second.normal) > 0

    def is_bounded(self) -> bool:
        m = len(self.constraints)
        if m < 3:
            return False
        return all(
            self._closes(self.constraints[k - 1], self.constraints[k]) for k in range(m)
        )

    def vertices(self) -> list[tuple[Scalar, ...]]:
        """Return the vertices, counter-clockwise, of a bounded polygon."""
        if not self.is_bounded():
            raise UnboundedSetError("the polygon is unbounded", "HPolygon")
        m = len(self.constraints)
        return [
            _line_intersection(self.constraints[k - 1], self.constraints[k])
            for k in range(m)
        ]

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, 2, "HPolygon")
        m = len(self.constraints)
        if m == 0:
            if is_zero(d):
                return (0, 0)
            raise UnboundedSetError("the plane is unbounded", "HPolygon")
        if is_zero(d):
            d = self.constraints[0].normal

        k = _first_not_before(self.constraints, d)
        before, after = self.constraints[k - 1], self.constraints[k]
        if m > 1 and self._closes(before, after):
            return _line_intersection(before, after)

        # d points into an open side; only the facet normal itself is bounded
        if _nonnegative_multiple(d, after.normal) is None:
            raise UnboundedSetError(
                "the polygon is unbounded in the given direction", "HPolygon"
            )
        if m == 1:
            return after.support_vector(d)
        following = self.constraints[(k + 1) % m]
        if self._closes(after, following):
            return _line_intersection(after, following)
        raise UnboundedSetError(
            "the polygon has no vertex on the maximizing facet", "HPolygon"
        )

    def support_function(self, d: Vector) -> Scalar:
        try:
            return dot(d, self.support_vector(d))
        except UnboundedSetError:
            return math.inf


def _first_not_before(constraints: Sequence[HalfSpace], d: Vector) -> int:
    """Index of the first constraint whose normal angle is >= angle(d), cyclically."""
    for k, c in enumerate(constraints):
        if _compare_angle(c.normal, d) >= 0:
            return k
    return 0


def _line_intersection(h1: HalfSpace, h2: HalfSpace) -> tuple[Scalar, ...]:
    """Solve ``a1·x = b1, a2·x = b2`` by Cramer's rule."""
    (a11, a12), (a21, a22) = h1.normal, h2.normal
    det = a11 * a22 - a12 * a21
    if det == 0:
        raise ValueError("constraint lines are parallel")
    return (
        (h1.offset * a22 - a12 * h2.offset) / det,
        (a11 * h2.offset - h1.offset * a21) / det,
    )


@dataclass(frozen=True)
class Line(LazySet):
    """A line in the plane, ``{x : dot(normal, x) == offset}``.

    Attributes:
        normal: Non-zero normal direction of length 2.
        offset: Constraint value.
    """

    normal: tuple[Scalar, ...]
    offset: Scalar

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", tuple(self.normal))
        check_dimension(len(self.normal), 2, "Line")
        if is_zero(self.normal):
            raise ValueError("a line needs a non-zero normal")

    @classmethod
    def from_constraint(cls, constraint: HalfSpace) -> Line:
        return cls(constraint.normal, constraint.offset)

    def dim(self) -> int:
        return 2

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        # Bounded only along +/- normal, like any hyperplane
        check_direction(d, 2, "Line")
        if det2(d, self.normal) != 0:
            raise UnboundedSetError(
                "the line is unbounded in the given direction", "Line"
            )
        return scale(self.normal, self.offset / dot(self.normal, self.normal))

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, 2, "Line")
        if det2(d, self.normal) != 0:
            return math.inf
        return dot(d, self.support_vector(d))

    def is_bounded(self) -> bool:
        return False
