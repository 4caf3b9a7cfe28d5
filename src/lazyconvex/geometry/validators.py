"""Contract checks shared by lazy set operations.

The kernel enforces contracts rather than recovering from violations: each
check either passes silently or raises, so callers see the failure at the
point where the bad input entered.
"""

from __future__ import annotations

from collections.abc import Iterable, Sized
from typing import TYPE_CHECKING

from lazyconvex.exceptions import (
    DimensionMismatchError,
    InvalidIndexError,
    UnboundedSetError,
)

if TYPE_CHECKING:
    from lazyconvex.sets.protocol import LazySet


def check_direction(d: Sized, n: int, operation: str | None = None) -> None:
    """Check that direction ``d`` has length ``n``.

    Raises:
        DimensionMismatchError: If ``len(d) != n``.
    """
    if len(d) != n:
        raise DimensionMismatchError(
            f"cannot query a {n}-dimensional set along a vector of length {len(d)}",
            operation,
            expected=n,
            actual=len(d),
        )


def check_same_dimension(sets: Iterable[LazySet], operation: str) -> int | None:
    """Check that all ``sets`` share one ambient dimension.

    Returns:
        The common dimension, or None if ``sets`` is empty.

    Raises:
        DimensionMismatchError: If two sets differ in dimension.
    """
    common: int | None = None
    for s in sets:
        n = s.dim()
        if common is None:
            common = n
        elif n != common:
            raise DimensionMismatchError(
                "all operands must have the same dimension",
                operation,
                expected=common,
                actual=n,
            )
    return common


def check_dimension(actual: int, expected: int, operation: str) -> None:
    """Check that an operation restricted to ``expected`` dimensions gets them."""
    if actual != expected:
        raise DimensionMismatchError(
            f"operation is only defined for {expected}-dimensional sets",
            operation,
            expected=expected,
            actual=actual,
        )


def check_index(i: int, n: int, operation: str | None = None) -> None:
    """Check that axis ``i`` lies in ``[0, n)``.

    Raises:
        InvalidIndexError: If the index is out of range.
    """
    if not 0 <= i < n:
        raise InvalidIndexError(i, n, operation)


def check_bounded(s: LazySet, operation: str) -> None:
    """Check that ``s`` is bounded.

    Raises:
        UnboundedSetError: If ``s.is_bounded()`` is False.
    """
    if not s.is_bounded():
        raise UnboundedSetError(
            f"{type(s).__name__} is unbounded but a bounded set is required",
            operation,
        )
