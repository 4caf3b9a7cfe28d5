"""The support-function protocol shared by every lazy set.

A lazy set never materializes vertices or constraints. It only answers
support queries: for a direction ``d``, the support vector ``σ(d, S)`` is a
point of ``S`` maximizing ``dot(d, x)``, and the support function
``ρ(d, S)`` is that maximal value. Combinators (hulls, unions, interval
hulls, intersections) are built purely on top of these queries.

Support vectors need not be unique (flat faces); any maximizer is valid.
For the zero direction every element of the set is a maximizer: the sets of
this package return their center when they have one, and some element
otherwise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lazyconvex.geometry.vectors import Scalar, Vector, dot


class LazySet(ABC):
    """Abstract base for convex sets represented by their support function.

    Subclasses must implement ``dim``, ``support_vector`` and ``is_bounded``.
    ``support_function`` has a derived default and should be overridden when
    a cheaper closed form exists.
    """

    @abstractmethod
    def dim(self) -> int:
        """Return the ambient dimension of the set."""

    @abstractmethod
    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        """Return a point of the set maximizing ``dot(d, x)``.

        Args:
            d: Direction of length ``self.dim()``.

        Raises:
            DimensionMismatchError: If ``len(d) != self.dim()``.
        """

    @abstractmethod
    def is_bounded(self) -> bool:
        """Return True if the set is bounded."""

    def support_function(self, d: Vector) -> Scalar:
        """Return ``max(dot(d, x) for x in S)``.

        Defaults to ``dot(d, self.support_vector(d))``.
        """
        return dot(d, self.support_vector(d))

    def support_function_upper_bound(self, d: Vector) -> Scalar:
        """Return a sound upper bound on the support function.

        Used by the "upper-bound" approximation mode, where a faster but
        possibly looser oracle is preferred. The result is never smaller than
        ``self.support_function(d)``. Defaults to the exact value.
        """
        return self.support_function(d)

    def is_empty(self) -> bool:
        """Return True if the set is empty."""
        return False

    def __or__(self, other: LazySet) -> LazySet:
        from lazyconvex.sets.union import union

        return union(self, other)
