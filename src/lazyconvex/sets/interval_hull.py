"""Symmetric interval hull of a compact convex set.

The symmetric interval hull of ``X`` is the smallest axis-aligned box
centered at the origin that contains ``X``. Its radius along axis ``i`` is

    r_i = max(σ(e_i, X)_i, |σ(-e_i, X)_i|)

so the whole box costs ``2n`` support vector queries on ``X``, and a support
query in a direction with ``k`` non-zero entries needs ``2k`` of them. When
many directions are queried in a loop this would exceed ``2n``, so radii are
memoized the first time each axis is touched.

The cache is the only mutable state in the kernel. It is filled
monotonically (unknown -> known) and is not synchronized: share a wrapper
between threads only under external locking, or give each thread its own
``clone()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lazyconvex.geometry.validators import check_bounded, check_direction, check_index
from lazyconvex.geometry.vectors import (
    Scalar,
    SingleEntryVector,
    Vector,
    sign,
    unit_vector,
)
from lazyconvex.sets.primitives import EmptySet, Hyperrectangle
from lazyconvex.sets.protocol import LazySet
from lazyconvex.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SymmetricIntervalHull(LazySet):
    """Origin-centered box hull of a bounded set, with lazily cached radii.

    Attributes:
        X: The wrapped bounded set.

    Raises:
        UnboundedSetError: If ``X`` is unbounded.
    """

    X: LazySet
    _cache: list[Scalar | None] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        check_bounded(self.X, "SymmetricIntervalHull")
        # None marks an axis whose radius is not known yet
        object.__setattr__(self, "_cache", [None] * self.X.dim())

    def dim(self) -> int:
        return self.X.dim()

    def is_bounded(self) -> bool:
        return True

    def radius(self, i: int) -> Scalar:
        """Return the box radius along axis ``i`` (0-based).

        The first call for an axis asks ``X`` for two support vectors; later
        calls are a cache look-up.

        Raises:
            InvalidIndexError: If ``i`` is outside ``[0, dim)``.
        """
        n = self.dim()
        check_index(i, n, "SymmetricIntervalHull.radius")
        cached = self._cache[i]
        if cached is not None:
            return cached

        right = self.X.support_vector(unit_vector(i, n, 1))[i]
        left = self.X.support_vector(unit_vector(i, n, -1))[i]
        r = max(right, abs(left))
        self._cache[i] = r
        logger.debug("interval_hull_radius_computed", axis=i, radius=float(r))
        return r

    def radius_hyperrectangle(self) -> tuple[Scalar, ...]:
        """Return the radius along every axis, filling the whole cache."""
        return tuple(self.radius(i) for i in range(self.dim()))

    def center(self) -> tuple[Scalar, ...]:
        """Return the center, which is the origin."""
        return (0,) * self.dim()

    def center_at(self, i: int) -> Scalar:
        """Return the center coordinate along axis ``i``, which is zero."""
        check_index(i, self.dim(), "SymmetricIntervalHull.center_at")
        return 0

    def to_hyperrectangle(self) -> Hyperrectangle:
        return Hyperrectangle(center=self.center(), radius=self.radius_hyperrectangle())

    def clone(self) -> SymmetricIntervalHull:
        """Return a new wrapper of the same set with a copy of the cache."""
        twin = SymmetricIntervalHull(self.X)
        twin._cache[:] = self._cache
        return twin

    def support_vector(self, d: Vector) -> tuple[Scalar, ...] | SingleEntryVector:
        """Return the support vector in direction ``d``.

        Entries where ``d`` is zero are zero, so the zero direction maps to
        the origin. A ``SingleEntryVector`` direction yields a
        ``SingleEntryVector`` and touches only one axis.
        """
        n = self.dim()
        check_direction(d, n, "SymmetricIntervalHull")
        if isinstance(d, SingleEntryVector):
            value = 0 if d.value == 0 else sign(d.value) * self.radius(d.index)
            return SingleEntryVector(index=d.index, n=n, value=value)
        return tuple(0 if di == 0 else sign(di) * self.radius(i) for i, di in enumerate(d))

    def support_function(self, d: Vector) -> Scalar:
        n = self.dim()
        check_direction(d, n, "SymmetricIntervalHull")
        if isinstance(d, SingleEntryVector):
            if d.value == 0:
                return 0
            return abs(d.value) * self.radius(d.index)
        return sum((abs(di) * self.radius(i) for i, di in enumerate(d) if di != 0), 0)


def symmetric_interval_hull(X: LazySet) -> LazySet:
    """Return the symmetric interval hull of ``X``.

    The empty set is absorbing and is returned unchanged.

    Raises:
        UnboundedSetError: If ``X`` is unbounded.
    """
    if isinstance(X, EmptySet):
        return X
    return SymmetricIntervalHull(X)
