"""Lazy set union of two or finitely many sets.

A union of convex sets is in general not convex, but its support function
is still well defined and coincides with that of the convex hull, so support
queries behave exactly as for ``ConvexHull``. No absorption law is applied
when building unions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from lazyconvex.exceptions import EmptySetError
from lazyconvex.geometry.validators import check_direction, check_same_dimension
from lazyconvex.geometry.vectors import Scalar, Vector
from lazyconvex.sets.arrays import SetArray, check_operand_dimensions, is_empty_array
from lazyconvex.sets.convex_hull import best_support_vector
from lazyconvex.sets.protocol import LazySet


@dataclass(frozen=True)
class UnionSet(LazySet):
    """The set union of two sets of the same dimension.

    Attributes:
        X: First operand; wins ties in support queries.
        Y: Second operand.
    """

    X: LazySet
    Y: LazySet

    def __post_init__(self) -> None:
        check_same_dimension((self.X, self.Y), "UnionSet")

    def dim(self) -> int:
        return self.X.dim()

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "UnionSet")
        result = best_support_vector(d, (self.X, self.Y))
        if result is None:
            raise EmptySetError("the empty set has no support vector", "UnionSet")
        return result

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "UnionSet")
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
class UnionSetArray(SetArray):
    """The set union of a finite ordered sequence of sets."""

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        if self.dimension is not None:
            check_direction(d, self.dimension, "UnionSetArray")
        result = best_support_vector(d, self.array)
        if result is None:
            raise EmptySetError("the empty set has no support vector", "UnionSetArray")
        return result

    def support_function(self, d: Vector) -> Scalar:
        if self.dimension is not None:
            check_direction(d, self.dimension, "UnionSetArray")
        return max((s.support_function(d) for s in self.array), default=-math.inf)

    def support_function_upper_bound(self, d: Vector) -> Scalar:
        return max(
            (s.support_function_upper_bound(d) for s in self.array),
            default=-math.inf,
        )


def union(X: LazySet, Y: LazySet) -> LazySet:
    """Return the lazy union of ``X`` and ``Y``.

    Two ``UnionSetArray`` operands are concatenated into one flat array. An
    empty array is the identity and returns the other operand; an
    ``EmptySet`` operand is kept.

    Raises:
        DimensionMismatchError: If the operands differ in dimension.
    """
    if isinstance(X, UnionSetArray) and isinstance(Y, UnionSetArray):
        return X.concat(Y)
    check_operand_dimensions((X, Y), "UnionSet")
    if is_empty_array(Y):
        return X
    if is_empty_array(X):
        return Y
    return UnionSet(X, Y)
