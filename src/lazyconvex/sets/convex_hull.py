"""Lazy convex hull of two or finitely many sets.

The convex hull is never computed explicitly. A support query on
``CH(X, Y)`` asks both operands and keeps the better answer, which is exact
because a linear function over a convex hull is maximized at a point of one
of the operands.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from lazyconvex.exceptions import EmptySetError
from lazyconvex.geometry.validators import check_direction, check_same_dimension
from lazyconvex.geometry.vectors import Scalar, Vector, dot
from lazyconvex.sets.arrays import SetArray, check_operand_dimensions, is_empty_array
from lazyconvex.sets.primitives import EmptySet
from lazyconvex.sets.protocol import LazySet


def best_support_vector(
    d: Vector, sets: Iterable[LazySet]
) -> tuple[Scalar, ...] | None:
    """Return the support vector maximizing ``dot(d, ·)`` across ``sets``.

    Ties are resolved in favor of the earliest set. Empty operands have no
    support vector and are skipped. Returns None if no operand has one.
    """
    best: tuple[Scalar, ...] | None = None
    best_value: Scalar = -math.inf
    for s in sets:
        try:
            candidate = s.support_vector(d)
        except EmptySetError:
            continue
        value = dot(d, candidate)
        if best is None or value > best_value:
            best, best_value = candidate, value
    return best


@dataclass(frozen=True)
class ConvexHull(LazySet):
    """The convex hull of two sets of the same dimension.

    Attributes:
        X: First operand; wins ties in support queries.
        Y: Second operand.

    Raises:
        DimensionMismatchError: If the operands differ in dimension.
    """

    X: LazySet
    Y: LazySet

    def __post_init__(self) -> None:
        check_same_dimension((self.X, self.Y), "ConvexHull")

    def dim(self) -> int:
        return self.X.dim()

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "ConvexHull")
        result = best_support_vector(d, (self.X, self.Y))
        if result is None:
            raise EmptySetError("the empty set has no support vector", "ConvexHull")
        return result

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "ConvexHull")
        return max(self.X.support_function(d), self.Y.support_function(d))

    def support_function_upper_bound(self, d: Vector) -> Scalar:
        return max(
            self.X.support_function_upper_bound(d),
            self.Y.support_function_upper_bound(d),
        )

    def is_bounded(self) -> bool:
        return self.X.is_bounded() and self.Y.is_bounded()

    def is_empty(self) -> bool:
        return self.X.is_empty() and self.Y.is_empty()


@dataclass(frozen=True)
class ConvexHullArray(SetArray):
    """The convex hull of a finite ordered sequence of sets.

    An empty array represents the empty set: its support function is -inf
    and it has no support vector.
    """

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        if self.dimension is not None:
            check_direction(d, self.dimension, "ConvexHullArray")
        result = best_support_vector(d, self.array)
        if result is None:
            raise EmptySetError("the empty set has no support vector", "ConvexHullArray")
        return result

    def support_function(self, d: Vector) -> Scalar:
        if self.dimension is not None:
            check_direction(d, self.dimension, "ConvexHullArray")
        return max((s.support_function(d) for s in self.array), default=-math.inf)

    def support_function_upper_bound(self, d: Vector) -> Scalar:
        return max(
            (s.support_function_upper_bound(d) for s in self.array),
            default=-math.inf,
        )


def hull(X: LazySet, Y: LazySet) -> LazySet:
    """Return the lazy convex hull of ``X`` and ``Y``.

    The empty set is the identity: ``hull(X, ∅)`` and ``hull(∅, X)`` return
    the other operand itself, and an empty array counts as the empty set.
    Two ``ConvexHullArray`` operands are concatenated into one flat array
    instead of being nested.

    Raises:
        DimensionMismatchError: If the operands differ in dimension.
    """
    if isinstance(X, ConvexHullArray) and isinstance(Y, ConvexHullArray):
        return X.concat(Y)
    check_operand_dimensions((X, Y), "ConvexHull")
    if isinstance(Y, EmptySet) or is_empty_array(Y):
        return X
    if isinstance(X, EmptySet) or is_empty_array(X):
        return Y
    return ConvexHull(X, Y)


CH = hull
