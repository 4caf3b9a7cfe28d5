"""Shared storage for n-ary set operations over an ordered operand list."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Self

from lazyconvex.exceptions import DimensionMismatchError, EmptySetError
from lazyconvex.geometry.validators import check_same_dimension
from lazyconvex.sets.protocol import LazySet


@dataclass(frozen=True)
class SetArray(LazySet):
    """An ordered, immutable sequence of operand sets of one dimension.

    An empty sequence has no intrinsic dimension, so ``dimension`` may be
    passed explicitly; with operands present it is inferred and checked.

    Attributes:
        array: The operand sets.
        dimension: Ambient dimension shared by the operands.
    """

    array: tuple[LazySet, ...] = ()
    dimension: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "array", tuple(self.array))
        n = check_operand_dimensions(self.array, type(self).__name__)
        if n is None:
            return
        if self.dimension is not None and self.dimension != n:
            raise DimensionMismatchError(
                "operands disagree with the declared dimension",
                type(self).__name__,
                expected=self.dimension,
                actual=n,
            )
        object.__setattr__(self, "dimension", n)

    def __len__(self) -> int:
        return len(self.array)

    def __getitem__(self, i: int) -> LazySet:
        return self.array[i]

    def __iter__(self) -> Iterator[LazySet]:
        return iter(self.array)

    def dim(self) -> int:
        if self.dimension is None:
            raise EmptySetError(
                "the dimension of an empty array is undefined", type(self).__name__
            )
        return self.dimension

    def concat(self, other: Self) -> Self:
        """Return one flat array holding the operands of both arrays.

        Raises:
            DimensionMismatchError: If the arrays differ in dimension.
        """
        dimension = self.dimension
        if dimension is None:
            dimension = other.dimension
        elif other.dimension is not None and other.dimension != dimension:
            raise DimensionMismatchError(
                "arrays of different dimension cannot be concatenated",
                type(self).__name__,
                expected=dimension,
                actual=other.dimension,
            )
        return type(self)((*self.array, *other.array), dimension=dimension)

    def is_bounded(self) -> bool:
        return all(s.is_bounded() for s in self.array)

    def is_empty(self) -> bool:
        return all(s.is_empty() for s in self.array)


def is_empty_array(S: LazySet) -> bool:
    """Return True if ``S`` is an operand array without operands."""
    return isinstance(S, SetArray) and not S.array


def check_operand_dimensions(sets: Iterable[LazySet], operation: str) -> int | None:
    """Check that ``sets`` share one dimension, ignoring dimensionless arrays.

    An empty array built without ``dimension`` fits any other operand.

    Returns:
        The common dimension, or None if no operand has one.

    Raises:
        DimensionMismatchError: If two sets differ in dimension.
    """
    return check_same_dimension(
        (s for s in sets if not (isinstance(s, SetArray) and s.dimension is None)),
        operation,
    )
